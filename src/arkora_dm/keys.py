"""Identity key generation and X25519 helpers."""

from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from . import codec
from .types import PRIVATE_KEY_SIZE, PUBLIC_KEY_SIZE, InvalidKeyError


@dataclass(frozen=True)
class IdentityKeyPair:
    """A local identity's X25519 key pair, both halves as base64 text."""
    private_key: str  # never leaves the owning client
    public_key: str  # published to the key directory

    def __repr__(self) -> str:
        return f"IdentityKeyPair(public_key={self.public_key!r})"


def generate_key_pair() -> IdentityKeyPair:
    """
    Generate a fresh X25519 identity key pair from the OS CSPRNG.

    Returns:
        IdentityKeyPair with base64-encoded private and public keys
    """
    private_key = X25519PrivateKey.generate()
    return _key_pair(private_key)


def key_pair_from_private_key(private_key_text: str) -> IdentityKeyPair:
    """
    Rebuild an identity key pair from a stored private key.

    Args:
        private_key_text: Base64 private key (32 bytes)

    Returns:
        IdentityKeyPair whose public key is derived from the private key

    Raises:
        InputFormatError: If the key is not valid base64 of 32 bytes
    """
    return _key_pair(private_key_from_text(private_key_text))


def private_key_from_text(text: str) -> X25519PrivateKey:
    """Create an X25519 private key from base64 text."""
    data = codec.decode_exact(text, PRIVATE_KEY_SIZE, "Private key")
    return X25519PrivateKey.from_private_bytes(data)


def public_key_from_text(text: str) -> X25519PublicKey:
    """Create an X25519 public key from base64 text."""
    data = codec.decode_exact(text, PUBLIC_KEY_SIZE, "Public key")
    return X25519PublicKey.from_public_bytes(data)


def private_key_to_bytes(private_key: X25519PrivateKey) -> bytes:
    """Convert X25519 private key to raw bytes."""
    return private_key.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())


def public_key_to_bytes(public_key: X25519PublicKey) -> bytes:
    """Convert X25519 public key to raw bytes."""
    return public_key.public_bytes(Encoding.Raw, PublicFormat.Raw)


def x25519_ecdh(private_key: X25519PrivateKey, public_key: X25519PublicKey) -> bytes:
    """
    Perform X25519 ECDH key exchange.

    Args:
        private_key: Our private key
        public_key: Their public key

    Returns:
        32-byte raw shared secret

    Raises:
        InvalidKeyError: If the public key is a low-order point
    """
    try:
        shared_secret = private_key.exchange(public_key)
    except ValueError as e:
        # OpenSSL refuses exchanges that produce the all-zero secret
        raise InvalidKeyError(f"Public key is a low-order point: {e}") from e

    if shared_secret == bytes(len(shared_secret)):
        raise InvalidKeyError("Public key is a low-order point")

    return shared_secret


def _key_pair(private_key: X25519PrivateKey) -> IdentityKeyPair:
    return IdentityKeyPair(
        private_key=codec.encode(private_key_to_bytes(private_key)),
        public_key=codec.encode(public_key_to_bytes(private_key.public_key())),
    )
