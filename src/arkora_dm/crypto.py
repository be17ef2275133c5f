"""Encryption and decryption for Arkora direct messages.

Protocol: X25519 ECDH -> HKDF-SHA256 -> AES-256-GCM.

Both parties derive the same key from their own private key and the other
party's public key, so one static key covers every message between a pair.
There is no forward secrecy.
"""

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.hashes import SHA256
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from . import codec
from .envelope import EncryptedEnvelope
from .keys import private_key_from_text, public_key_from_text, x25519_ecdh
from .types import (
    NONCE_SIZE,
    SHARED_KEY_INFO,
    SHARED_KEY_SIZE,
    AuthenticationFailure,
    DecryptionError,
    EncryptionError,
    InputFormatError,
)


def derive_shared_key(my_private_key: str, their_public_key: str) -> bytes:
    """
    Derive the symmetric key shared by two identities.

    Args:
        my_private_key: Our base64 private key (32 bytes)
        their_public_key: Their base64 public key (32 bytes)

    Returns:
        32-byte AES-256 key

    Raises:
        InputFormatError: If either key is not valid base64 of 32 bytes
        InvalidKeyError: If their public key is a low-order point
    """
    private_key = private_key_from_text(my_private_key)
    public_key = public_key_from_text(their_public_key)

    shared_secret = x25519_ecdh(private_key, public_key)

    # The raw DH output is not uniform; never use it as a key directly
    hkdf = HKDF(algorithm=SHA256(), length=SHARED_KEY_SIZE, salt=None, info=SHARED_KEY_INFO)
    return hkdf.derive(shared_secret)


def encrypt_message(
    my_private_key: str,
    their_public_key: str,
    plaintext: str,
) -> EncryptedEnvelope:
    """
    Encrypt a message for a peer.

    Args:
        my_private_key: Sender's base64 private key
        their_public_key: Recipient's base64 public key
        plaintext: Message text

    Returns:
        EncryptedEnvelope with a fresh random nonce

    Raises:
        InputFormatError: If a key is malformed or plaintext is not encodable as UTF-8
        InvalidKeyError: If the recipient key is a low-order point
        EncryptionError: If the cipher fails
    """
    try:
        message_bytes = plaintext.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InputFormatError(f"Plaintext is not valid UTF-8 text: {e}") from e

    cipher = AESGCM(derive_shared_key(my_private_key, their_public_key))
    nonce = os.urandom(NONCE_SIZE)

    try:
        ciphertext = cipher.encrypt(nonce, message_bytes, None)
    except (OverflowError, ValueError) as e:
        raise EncryptionError(f"Encryption failed: {e}") from e

    return EncryptedEnvelope(
        ciphertext=codec.encode(ciphertext),
        nonce=codec.encode(nonce),
    )


def decrypt_message(
    my_private_key: str,
    their_public_key: str,
    envelope: EncryptedEnvelope,
) -> str:
    """
    Decrypt and authenticate a message from a peer.

    The recipient passes its own private key and the sender's public key.
    A sender can read its own messages by passing the recipient's public key.

    Args:
        my_private_key: Our base64 private key
        their_public_key: The other party's base64 public key
        envelope: The encrypted envelope

    Returns:
        The original plaintext, unmodified

    Raises:
        InputFormatError: If a key, the nonce or the ciphertext is malformed
        InvalidKeyError: If their public key is a low-order point
        AuthenticationFailure: If the tag does not verify
        DecryptionError: If verified bytes are not valid UTF-8
    """
    cipher = AESGCM(derive_shared_key(my_private_key, their_public_key))
    nonce = codec.decode_exact(envelope.nonce, NONCE_SIZE, "Nonce")
    ciphertext = codec.decode(envelope.ciphertext)

    try:
        plaintext = cipher.decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise AuthenticationFailure("Message authentication failed") from e

    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecryptionError("Decrypted payload is not valid UTF-8") from e
