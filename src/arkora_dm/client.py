"""
Direct message session for a local identity.

The DirectMessenger ties the pure crypto functions to the collaborators
around them: the local identity key store, the public key directory and the
message relay.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from . import codec
from .crypto import decrypt_message, encrypt_message
from .keys import IdentityKeyPair, generate_key_pair, key_pair_from_private_key
from .models import Conversation, DecryptedMessage, MessageDirection, RelayMessage
from .storage import (
    IdentityKeyStore,
    MessageRelay,
    PublicKeyDirectory,
    check_fetch_limit,
)
from .types import (
    AuthenticationFailure,
    DecryptionError,
    InputFormatError,
    InvalidKeyError,
    InvalidRecipientError,
    KeyNotFoundError,
)

logger = logging.getLogger(__name__)

# Failures that mark a single message undecryptable without aborting the conversation
_UNDECRYPTABLE = (AuthenticationFailure, DecryptionError, InputFormatError, InvalidKeyError)


@dataclass
class DirectMessageConfig:
    """Configuration for a direct message session."""
    page_size: int = 50

    def __post_init__(self) -> None:
        check_fetch_limit(self.page_size, "page_size")


class DirectMessenger:
    """
    End-to-end encrypted direct messaging for one local identity.

    Example usage:
        ```python
        messenger = DirectMessenger(
            identity="0xalice...",
            key_store=FileIdentityKeyStore(password="..."),
            directory=my_directory,
            relay=my_relay,
        )

        await messenger.ensure_own_key()
        await messenger.send("0xbob...", "Hello, Bob!")

        conv = await messenger.conversation("0xbob...")
        for msg in conv.messages:
            print(f"{msg.sender_id}: {msg.display_text}")
        ```
    """

    def __init__(
        self,
        identity: str,
        key_store: IdentityKeyStore,
        directory: PublicKeyDirectory,
        relay: MessageRelay,
        config: Optional[DirectMessageConfig] = None,
    ) -> None:
        self.identity = identity
        self.key_store = key_store
        self.directory = directory
        self.relay = relay
        self.config = config or DirectMessageConfig()

    # MARK: - Keys

    async def ensure_own_key(self) -> IdentityKeyPair:
        """
        Load this identity's key pair, creating and publishing one if needed.

        Returns:
            The identity's key pair.
        """
        try:
            private_key = await self.key_store.retrieve(self.identity)
        except KeyNotFoundError:
            return await self._create_key_pair()
        return key_pair_from_private_key(codec.encode(private_key))

    async def _create_key_pair(self) -> IdentityKeyPair:
        pair = generate_key_pair()
        await self.key_store.store(codec.decode(pair.private_key), self.identity)
        await self.directory.set_public_key(self.identity, pair.public_key)
        logger.debug("Generated and published a new DM key for %s", self.identity)
        return pair

    async def peer_public_key(self, peer: str) -> str:
        """
        Fetch a peer's current public key from the directory.

        Always read fresh: a peer that generates a new pair must receive
        every later message under its new key.

        Raises:
            PublicKeyNotFoundError: If the peer has not registered a key.
        """
        return await self.directory.get_public_key(peer)

    # MARK: - Sending

    async def send(self, peer: str, text: str) -> RelayMessage:
        """
        Encrypt a message for a peer and post it to the relay.

        Args:
            peer: The recipient identity.
            text: Message text.

        Returns:
            The record stored by the relay.

        Raises:
            InvalidRecipientError: If the peer is this identity.
            PublicKeyNotFoundError: If the peer has no registered key.
        """
        if peer == self.identity:
            raise InvalidRecipientError("Cannot send a direct message to yourself")

        own = await self.ensure_own_key()
        peer_key = await self.peer_public_key(peer)

        envelope = encrypt_message(own.private_key, peer_key, text)
        message = await self.relay.post(self.identity, peer, envelope)

        logger.debug("Posted message %s to %s", message.id, peer)
        return message

    # MARK: - Receiving

    async def open(self, message: RelayMessage, peer_public_key: str) -> DecryptedMessage:
        """
        Decrypt one relay message exchanged with a peer.

        Messages this identity sent decrypt too, since both directions share
        one key. A message that cannot be decrypted is returned with
        ``failed=True`` and no text.
        """
        own = await self.ensure_own_key()
        return self._open(message, own, peer_public_key)

    def _open(
        self,
        message: RelayMessage,
        own: IdentityKeyPair,
        peer_public_key: str,
    ) -> DecryptedMessage:
        direction = (
            MessageDirection.SENT if message.sender_id == self.identity else MessageDirection.RECEIVED
        )
        result = DecryptedMessage(
            id=message.id,
            sender_id=message.sender_id,
            timestamp=message.timestamp,
            direction=direction,
        )

        try:
            result.text = decrypt_message(own.private_key, peer_public_key, message.envelope)
        except _UNDECRYPTABLE as e:
            logger.warning("Could not decrypt message %s: %s", message.id, type(e).__name__)
            result.failed = True

        return result

    async def conversation(
        self,
        peer: str,
        before: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> Conversation:
        """
        Fetch and decrypt a page of the conversation with a peer.

        Args:
            peer: The other participant.
            before: Only fetch messages older than this (pagination).
            limit: Page size between 1 and MAX_FETCH_LIMIT (default from config).

        Returns:
            Conversation with messages oldest first.

        Raises:
            PublicKeyNotFoundError: If the peer has no registered key.
            ValueError: If limit is out of range.
        """
        if limit is None:
            limit = self.config.page_size
        check_fetch_limit(limit)

        peer_key = await self.peer_public_key(peer)
        own = await self.ensure_own_key()
        conv = Conversation(peer=peer, peer_public_key=peer_key)

        page = await self.relay.fetch(
            self.identity,
            peer,
            before=before,
            limit=limit,
        )
        conv.merge([self._open(m, own, peer_key) for m in page])

        if conv.has_failures:
            failed = sum(1 for m in conv.messages if m.failed)
            logger.warning("%d of %d messages with %s could not be decrypted", failed, len(conv), peer)

        return conv

