"""Encrypted envelope handed to the message relay."""

from dataclasses import dataclass
from typing import Any, Mapping

from .types import InputFormatError


@dataclass(frozen=True)
class EncryptedEnvelope:
    """
    Relay-facing form of an encrypted direct message.

    Both fields are padded base64 text:
        ciphertext: AES-256-GCM output (plaintext + 16-byte tag)
        nonce: 12-byte GCM nonce
    """
    ciphertext: str
    nonce: str

    def to_dict(self) -> dict[str, str]:
        """Return the JSON shape stored by the relay."""
        return {"ciphertext": self.ciphertext, "nonce": self.nonce}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EncryptedEnvelope":
        """
        Build an envelope from the relay's JSON shape.

        Raises:
            InputFormatError: If a field is missing or not a string
        """
        fields = {}
        for name in ("ciphertext", "nonce"):
            value = data.get(name)
            if not isinstance(value, str):
                raise InputFormatError(f"Envelope field '{name}' must be a string")
            fields[name] = value
        return cls(**fields)
