"""Message relay interface and implementations.

The relay stores and forwards ciphertext only. It never sees keys or
plaintext and treats envelopes as opaque.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from ..envelope import EncryptedEnvelope
from ..models import RelayMessage
from ..types import InvalidRecipientError


# Largest page a relay returns in one fetch
MAX_FETCH_LIMIT = 100


def check_fetch_limit(limit: int, name: str = "limit") -> int:
    """Reject page sizes outside 1..MAX_FETCH_LIMIT."""
    if not 1 <= limit <= MAX_FETCH_LIMIT:
        raise ValueError(f"{name} must be between 1 and {MAX_FETCH_LIMIT}, got {limit}")
    return limit


class MessageRelay(ABC):
    """Interface for the untrusted store-and-forward relay."""

    @abstractmethod
    async def post(
        self,
        sender_id: str,
        recipient_id: str,
        envelope: EncryptedEnvelope,
    ) -> RelayMessage:
        """Store an encrypted message and return the stored record."""
        ...

    @abstractmethod
    async def fetch(
        self,
        identity: str,
        peer: str,
        before: Optional[datetime] = None,
        limit: int = 50,
    ) -> list[RelayMessage]:
        """
        Fetch messages exchanged between two identities, newest first.

        Args:
            identity: One participant
            peer: The other participant
            before: Only return messages strictly older than this time
            limit: Maximum number of messages, at least 1 (capped at MAX_FETCH_LIMIT)
        """
        ...


class InMemoryMessageRelay(MessageRelay):
    """In-memory implementation of MessageRelay (for testing)."""

    def __init__(self) -> None:
        self._messages: list[RelayMessage] = []

    async def post(
        self,
        sender_id: str,
        recipient_id: str,
        envelope: EncryptedEnvelope,
    ) -> RelayMessage:
        if sender_id == recipient_id:
            raise InvalidRecipientError("Cannot send a direct message to yourself")

        message = RelayMessage(
            id=str(uuid.uuid4()),
            sender_id=sender_id,
            recipient_id=recipient_id,
            ciphertext=envelope.ciphertext,
            nonce=envelope.nonce,
            timestamp=datetime.now(timezone.utc),
        )
        self._messages.append(message)
        return message

    async def fetch(
        self,
        identity: str,
        peer: str,
        before: Optional[datetime] = None,
        limit: int = 50,
    ) -> list[RelayMessage]:
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")

        participants = {identity, peer}
        matching = [
            m for m in self._messages
            if {m.sender_id, m.recipient_id} == participants
            and (before is None or m.timestamp < before)
        ]
        # Stable sort keeps insertion order for equal timestamps
        matching.sort(key=lambda m: m.timestamp, reverse=True)
        return matching[: min(limit, MAX_FETCH_LIMIT)]
