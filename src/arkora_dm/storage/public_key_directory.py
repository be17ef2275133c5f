"""Public key directory interface and implementations."""

from abc import ABC, abstractmethod

from .. import codec
from ..types import ENCODED_KEY_LENGTH, PUBLIC_KEY_SIZE, InputFormatError, PublicKeyNotFoundError


class PublicKeyDirectory(ABC):
    """Interface for the server-side registry of identity public keys."""

    @abstractmethod
    async def get_public_key(self, identity: str) -> str:
        """
        Fetch an identity's base64 public key.

        Raises:
            PublicKeyNotFoundError: If the identity has not registered a key
        """
        ...

    @abstractmethod
    async def set_public_key(self, identity: str, public_key: str) -> None:
        """Register or replace an identity's base64 public key."""
        ...


def validate_public_key_text(public_key: str) -> str:
    """
    Check that a public key is 44-character base64 of 32 bytes.

    Raises:
        InputFormatError: If the key has the wrong encoding or length
    """
    if not isinstance(public_key, str) or len(public_key) != ENCODED_KEY_LENGTH:
        raise InputFormatError(f"Public key must be {ENCODED_KEY_LENGTH} base64 characters")
    codec.decode_exact(public_key, PUBLIC_KEY_SIZE, "Public key")
    return public_key


class InMemoryPublicKeyDirectory(PublicKeyDirectory):
    """In-memory implementation of PublicKeyDirectory (for testing)."""

    def __init__(self) -> None:
        self._keys: dict[str, str] = {}

    async def get_public_key(self, identity: str) -> str:
        key = self._keys.get(identity)
        if key is None:
            raise PublicKeyNotFoundError(identity)
        return key

    async def set_public_key(self, identity: str, public_key: str) -> None:
        self._keys[identity] = validate_public_key_text(public_key)
