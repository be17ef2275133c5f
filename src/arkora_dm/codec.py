"""Base64 transport encoding for keys, nonces and ciphertext."""

import base64
import binascii

from .types import InputFormatError


def encode(data: bytes) -> str:
    """Encode raw bytes as standard padded base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode(text: str) -> bytes:
    """
    Decode standard padded base64 text.

    Args:
        text: Base64 text

    Returns:
        Decoded bytes

    Raises:
        InputFormatError: If text has characters outside the alphabet, bad
            padding, or non-zero trailing bits
    """
    if not isinstance(text, str):
        raise InputFormatError(f"Expected base64 text, got {type(text).__name__}")

    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InputFormatError(f"Invalid base64 encoding: {e}") from e

    # One byte string, one text form: keys can be compared as text
    if encode(data) != text:
        raise InputFormatError("Non-canonical base64 encoding")
    return data


def decode_exact(text: str, size: int, what: str) -> bytes:
    """Decode base64 text that must hold exactly ``size`` bytes."""
    data = decode(text)
    if len(data) != size:
        raise InputFormatError(f"{what} must be {size} bytes, got {len(data)}")
    return data
