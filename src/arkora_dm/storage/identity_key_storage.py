"""Local identity key store interface and implementations."""

from abc import ABC, abstractmethod

from ..types import PRIVATE_KEY_SIZE, KeyNotFoundError, StorageError


class IdentityKeyStore(ABC):
    """Interface for storing an identity's X25519 private key on its own client."""

    @abstractmethod
    async def store(self, private_key: bytes, identity: str) -> None:
        """Store a private key for an identity."""
        ...

    @abstractmethod
    async def retrieve(self, identity: str) -> bytes:
        """Retrieve a private key for an identity."""
        ...

    @abstractmethod
    async def has_key(self, identity: str) -> bool:
        """Check if a key exists for an identity."""
        ...

    @abstractmethod
    async def delete(self, identity: str) -> None:
        """Delete a key for an identity."""
        ...

    @abstractmethod
    async def list_stored_identities(self) -> list[str]:
        """List all stored identities."""
        ...


def check_private_key(private_key: bytes) -> None:
    """Reject private keys that are not 32 raw bytes."""
    if len(private_key) != PRIVATE_KEY_SIZE:
        raise StorageError(
            f"Private key must be {PRIVATE_KEY_SIZE} bytes, got {len(private_key)}"
        )


class InMemoryIdentityKeyStore(IdentityKeyStore):
    """
    In-memory implementation of IdentityKeyStore (for testing).

    WARNING: This is NOT secure for production use. Keys are stored in memory
    without encryption and are lost when the process exits.
    """

    def __init__(self) -> None:
        self._keys: dict[str, bytes] = {}

    async def store(self, private_key: bytes, identity: str) -> None:
        check_private_key(private_key)
        self._keys[identity] = bytes(private_key)

    async def retrieve(self, identity: str) -> bytes:
        key = self._keys.get(identity)
        if key is None:
            raise KeyNotFoundError(identity)
        return bytes(key)

    async def has_key(self, identity: str) -> bool:
        return identity in self._keys

    async def delete(self, identity: str) -> None:
        self._keys.pop(identity, None)

    async def list_stored_identities(self) -> list[str]:
        return list(self._keys.keys())
