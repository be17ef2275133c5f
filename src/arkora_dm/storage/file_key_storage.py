"""
File-based identity key store with password protection.

Stores X25519 private keys encrypted with AES-256-GCM, using a password
derived key via PBKDF2. Keys are stored in `~/.arkora/dm-keys/` unless another
directory is given.

## Storage Format

Each key file contains:
- Salt: 32 bytes (random, for PBKDF2)
- Nonce: 12 bytes (random, for AES-GCM)
- Ciphertext: 32 bytes (encrypted private key)
- Tag: 16 bytes (authentication tag)

File names are the unpadded URL-safe base64 of the identity, so any
identity string maps to a safe, reversible name.
"""

import base64
import binascii
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..types import KeyNotFoundError, StorageError
from .identity_key_storage import IdentityKeyStore, check_private_key

logger = logging.getLogger(__name__)


class PasswordRequiredError(StorageError):
    """Raised when password is required but not set."""

    def __init__(self) -> None:
        super().__init__("Password is required for file key storage")


class KeyFileDecryptionError(StorageError):
    """Raised when a key file cannot be decrypted (wrong password or corruption)."""

    def __init__(self) -> None:
        super().__init__("Decryption failed - incorrect password or corrupted data")


class InvalidKeyDataError(StorageError):
    """Raised when key file data is invalid."""

    def __init__(self) -> None:
        super().__init__("Invalid key data format")


class FileIdentityKeyStore(IdentityKeyStore):
    """
    File-based identity key store with password protection.

    Example usage:
        ```python
        store = FileIdentityKeyStore(password="user-password")

        await store.store(private_key, "0xnullifier...")
        key = await store.retrieve("0xnullifier...")
        ```
    """

    # PBKDF2 iteration count (OWASP 2023 recommendation for SHA256)
    PBKDF2_ITERATIONS = 600_000

    SALT_SIZE = 32
    NONCE_SIZE = 12
    TAG_SIZE = 16

    DEFAULT_DIRECTORY = Path.home() / ".arkora" / "dm-keys"

    FILE_SUFFIX = ".key"

    # salt + nonce + ciphertext + tag
    FILE_SIZE = 32 + 12 + 32 + 16  # 92 bytes

    def __init__(
        self,
        password: Optional[str] = None,
        directory: Optional[Union[str, Path]] = None,
    ) -> None:
        """
        Create a new file key store.

        Args:
            password: Optional password for encryption. If not provided,
                      must be set before use.
            directory: Where key files live (default: ~/.arkora/dm-keys).
        """
        self._password = password
        self._directory = Path(directory) if directory is not None else self.DEFAULT_DIRECTORY
        self._cached_derived_key: Optional[bytes] = None
        self._cached_salt: Optional[bytes] = None

    @property
    def directory(self) -> Path:
        return self._directory

    def set_password(self, password: str) -> None:
        """Set the password for encryption/decryption."""
        self._password = password
        self._cached_derived_key = None
        self._cached_salt = None

    def clear_password(self) -> None:
        """Clear the password and cached keys from memory."""
        self._password = None
        self._cached_derived_key = None
        self._cached_salt = None

    async def store(self, private_key: bytes, identity: str) -> None:
        """
        Store a private key for an identity, replacing any existing one.

        Raises:
            PasswordRequiredError: If no password is set.
            StorageError: If the key is not 32 bytes.
        """
        if not self._password:
            raise PasswordRequiredError()
        check_private_key(private_key)

        directory = self._ensure_directory()

        salt = os.urandom(self.SALT_SIZE)
        nonce = os.urandom(self.NONCE_SIZE)
        derived_key = self._derive_key(self._password, salt)

        ciphertext_and_tag = AESGCM(derived_key).encrypt(nonce, bytes(private_key), None)

        file_path = self._key_file_path(identity, directory)
        self._write_private_file(file_path, salt + nonce + ciphertext_and_tag)

        logger.debug("Stored identity key file %s", file_path.name)

    async def retrieve(self, identity: str) -> bytes:
        """
        Retrieve a private key for an identity.

        Raises:
            PasswordRequiredError: If no password is set.
            KeyNotFoundError: If no key is stored for this identity.
            KeyFileDecryptionError: If decryption fails (wrong password).
            InvalidKeyDataError: If the key data is corrupted.
        """
        if not self._password:
            raise PasswordRequiredError()

        file_path = self._key_file_path(identity, self._directory)
        if not file_path.exists():
            raise KeyNotFoundError(identity)

        file_data = file_path.read_bytes()
        if len(file_data) != self.FILE_SIZE:
            raise InvalidKeyDataError()

        salt = file_data[: self.SALT_SIZE]
        nonce = file_data[self.SALT_SIZE : self.SALT_SIZE + self.NONCE_SIZE]
        ciphertext_and_tag = file_data[self.SALT_SIZE + self.NONCE_SIZE :]

        derived_key = self._derive_key(self._password, salt)

        try:
            return AESGCM(derived_key).decrypt(nonce, ciphertext_and_tag, None)
        except InvalidTag as e:
            raise KeyFileDecryptionError() from e

    async def has_key(self, identity: str) -> bool:
        return self._key_file_path(identity, self._directory).exists()

    async def delete(self, identity: str) -> None:
        file_path = self._key_file_path(identity, self._directory)
        if file_path.exists():
            file_path.unlink()
            logger.debug("Deleted identity key file %s", file_path.name)

    async def list_stored_identities(self) -> List[str]:
        if not self._directory.exists():
            return []

        identities = []
        for f in self._directory.iterdir():
            if f.suffix != self.FILE_SUFFIX:
                continue
            try:
                identities.append(_identity_from_stem(f.stem))
            except (binascii.Error, UnicodeDecodeError):
                logger.warning("Skipping unrecognised key file %s", f.name)
        return identities

    def _ensure_directory(self) -> Path:
        directory = self._directory
        directory.mkdir(parents=True, exist_ok=True)
        try:
            directory.chmod(0o700)
        except OSError:
            logger.debug("Could not restrict permissions on %s", directory)
        return directory

    def _key_file_path(self, identity: str, directory: Path) -> Path:
        return directory / f"{_identity_to_stem(identity)}{self.FILE_SUFFIX}"

    def _derive_key(self, password: str, salt: bytes) -> bytes:
        """Derive an encryption key from password using PBKDF2."""
        if self._cached_derived_key and self._cached_salt == salt:
            return self._cached_derived_key

        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=self.PBKDF2_ITERATIONS,
        )
        derived_key = kdf.derive(password.encode("utf-8"))

        self._cached_derived_key = derived_key
        self._cached_salt = salt

        return derived_key

    def _write_private_file(self, file_path: Path, data: bytes) -> None:
        """Write a key file that is never readable by other users."""
        fd = os.open(file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # O_CREAT's mode does not apply to a file that already exists
        self._set_restrictive_permissions(file_path)

    def _set_restrictive_permissions(self, file_path: Path) -> None:
        """Set restrictive file permissions (600 on Unix)."""
        try:
            file_path.chmod(0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", file_path.name)


def _identity_to_stem(identity: str) -> str:
    return base64.urlsafe_b64encode(identity.encode("utf-8")).rstrip(b"=").decode("ascii")


def _identity_from_stem(stem: str) -> str:
    padding = "=" * (-len(stem) % 4)
    return base64.urlsafe_b64decode(stem + padding).decode("utf-8")
