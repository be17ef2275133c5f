"""Arkora DM storage module."""

from .identity_key_storage import IdentityKeyStore, InMemoryIdentityKeyStore
from .file_key_storage import (
    FileIdentityKeyStore,
    PasswordRequiredError,
    KeyFileDecryptionError,
    InvalidKeyDataError,
)
from .public_key_directory import PublicKeyDirectory, InMemoryPublicKeyDirectory
from .message_relay import (
    MessageRelay,
    InMemoryMessageRelay,
    MAX_FETCH_LIMIT,
    check_fetch_limit,
)

__all__ = [
    "IdentityKeyStore",
    "InMemoryIdentityKeyStore",
    "FileIdentityKeyStore",
    "PasswordRequiredError",
    "KeyFileDecryptionError",
    "InvalidKeyDataError",
    "PublicKeyDirectory",
    "InMemoryPublicKeyDirectory",
    "MessageRelay",
    "InMemoryMessageRelay",
    "MAX_FETCH_LIMIT",
    "check_fetch_limit",
]
