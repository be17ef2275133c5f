"""Protocol constants and error types for Arkora direct messages."""


# Key sizes
PRIVATE_KEY_SIZE = 32
PUBLIC_KEY_SIZE = 32
SHARED_KEY_SIZE = 32

# AES-256-GCM parameters
NONCE_SIZE = 12
TAG_SIZE = 16

# Encoded sizes (padded base64)
ENCODED_KEY_LENGTH = 44
ENCODED_NONCE_LENGTH = 16

# HKDF info label binding derived keys to this protocol version
SHARED_KEY_INFO = b"arkora-dm-v1"


# Exception types
class ArkoraDMError(Exception):
    """Base exception for Arkora DM errors."""
    pass


class InputFormatError(ArkoraDMError):
    """Malformed base64 or a decoded value of the wrong length."""
    pass


class InvalidKeyError(ArkoraDMError):
    """Public key is a degenerate or low-order curve point."""
    pass


class AuthenticationFailure(ArkoraDMError):
    """AEAD tag verification failed; no plaintext is available."""
    pass


class EncryptionError(ArkoraDMError):
    """Encryption failed inside the cipher."""
    pass


class DecryptionError(ArkoraDMError):
    """Decryption failed inside the cipher or produced unusable output."""
    pass


class KeyNotFoundError(ArkoraDMError):
    """No private key stored for an identity."""

    def __init__(self, identity: str) -> None:
        super().__init__(f"Key not found for identity: {identity}")
        self.identity = identity


class PublicKeyNotFoundError(ArkoraDMError):
    """No public key registered for an identity."""

    def __init__(self, identity: str) -> None:
        super().__init__(f"Public key not found for identity: {identity}")
        self.identity = identity


class InvalidRecipientError(ArkoraDMError):
    """Invalid recipient identity."""
    pass


class StorageError(ArkoraDMError):
    """Storage operation failed."""
    pass
