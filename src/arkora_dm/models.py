"""Models for relayed and decrypted direct messages."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .envelope import EncryptedEnvelope


UNDECRYPTABLE_LABEL = "Unable to decrypt"


class MessageDirection(Enum):
    """Direction of a message relative to the current identity."""
    SENT = "sent"
    RECEIVED = "received"


@dataclass(frozen=True)
class RelayMessage:
    """A ciphertext-only message as stored by the relay."""
    id: str
    sender_id: str
    recipient_id: str
    ciphertext: str
    nonce: str
    timestamp: datetime

    @property
    def envelope(self) -> EncryptedEnvelope:
        """The encrypted envelope carried by this message."""
        return EncryptedEnvelope(ciphertext=self.ciphertext, nonce=self.nonce)


@dataclass
class DecryptedMessage:
    """A relay message after a decryption attempt."""
    id: str
    sender_id: str
    timestamp: datetime
    direction: MessageDirection
    text: Optional[str] = None
    failed: bool = False

    @property
    def display_text(self) -> str:
        """Text to render; failed messages never show as empty or garbled."""
        if self.failed or self.text is None:
            return UNDECRYPTABLE_LABEL
        return self.text


class Conversation:
    """A direct-message conversation with one peer."""

    def __init__(self, peer: str, peer_public_key: Optional[str] = None) -> None:
        self.peer = peer
        self.peer_public_key = peer_public_key
        self._messages: list[DecryptedMessage] = []

    @property
    def messages(self) -> list[DecryptedMessage]:
        """Messages oldest first."""
        return list(self._messages)

    @property
    def has_failures(self) -> bool:
        """Whether any message could not be decrypted."""
        return any(m.failed for m in self._messages)

    def merge(self, messages: list[DecryptedMessage]) -> None:
        """Merge messages, dropping duplicates and keeping chronological order."""
        existing_ids = {m.id for m in self._messages}
        for message in messages:
            if message.id not in existing_ids:
                self._messages.append(message)
                existing_ids.add(message.id)
        self._messages.sort(key=lambda m: m.timestamp)

    def last_message(self) -> Optional[DecryptedMessage]:
        """Returns the most recent message."""
        return self._messages[-1] if self._messages else None

    def __len__(self) -> int:
        return len(self._messages)
