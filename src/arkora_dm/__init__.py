"""
Arkora DM - End-to-end encrypted direct messages

Python implementation of the Arkora direct message protocol using
X25519 ECDH + HKDF-SHA256 + AES-256-GCM.
"""

from .codec import encode, decode
from .keys import IdentityKeyPair, generate_key_pair, key_pair_from_private_key
from .crypto import derive_shared_key, encrypt_message, decrypt_message
from .envelope import EncryptedEnvelope
from .types import (
    NONCE_SIZE,
    TAG_SIZE,
    SHARED_KEY_INFO,
    ArkoraDMError,
    InputFormatError,
    InvalidKeyError,
    AuthenticationFailure,
    EncryptionError,
    DecryptionError,
    KeyNotFoundError,
    PublicKeyNotFoundError,
    InvalidRecipientError,
    StorageError,
)
from .models import (
    MessageDirection,
    RelayMessage,
    DecryptedMessage,
    Conversation,
)
from .storage import (
    IdentityKeyStore,
    InMemoryIdentityKeyStore,
    FileIdentityKeyStore,
    PublicKeyDirectory,
    InMemoryPublicKeyDirectory,
    MessageRelay,
    InMemoryMessageRelay,
)
from .client import (
    DirectMessageConfig,
    DirectMessenger,
)

__version__ = "0.1.0"

__all__ = [
    # Codec
    "encode",
    "decode",
    # Keys
    "IdentityKeyPair",
    "generate_key_pair",
    "key_pair_from_private_key",
    # Crypto
    "derive_shared_key",
    "encrypt_message",
    "decrypt_message",
    # Envelope
    "EncryptedEnvelope",
    # Models
    "MessageDirection",
    "RelayMessage",
    "DecryptedMessage",
    "Conversation",
    # Storage
    "IdentityKeyStore",
    "InMemoryIdentityKeyStore",
    "FileIdentityKeyStore",
    "PublicKeyDirectory",
    "InMemoryPublicKeyDirectory",
    "MessageRelay",
    "InMemoryMessageRelay",
    # Errors
    "ArkoraDMError",
    "InputFormatError",
    "InvalidKeyError",
    "AuthenticationFailure",
    "EncryptionError",
    "DecryptionError",
    "KeyNotFoundError",
    "PublicKeyNotFoundError",
    "InvalidRecipientError",
    "StorageError",
    # Constants
    "NONCE_SIZE",
    "TAG_SIZE",
    "SHARED_KEY_INFO",
    # Client
    "DirectMessageConfig",
    "DirectMessenger",
]
