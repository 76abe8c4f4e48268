from typing import List, Optional
from uuid import uuid4

from vibematch.core import Attachment, Message, ValidationError, log_step
from vibematch.data import DocumentStore, MessageRepository

from .engine import MatchEngine


class MessageService:
    """
    Conversation messages between matched users.

    Delivery and realtime transport live elsewhere; this service only stores
    messages and keeps the match's last_message_at current.
    """

    def __init__(self, store: DocumentStore, engine: MatchEngine) -> None:
        self.repository = MessageRepository(store)
        self.engine = engine

    def send_message(
        self,
        match_id: str,
        sender_id: str,
        content: str = "",
        attachment: Optional[Attachment] = None,
    ) -> Message:
        match = self.engine.matches.get(match_id)
        if not match.involves(sender_id):
            raise ValidationError(f"User {sender_id} is not part of match {match_id}.")
        if not content.strip() and attachment is None:
            raise ValidationError("A message needs text or an attachment.")

        message = Message(
            id=str(uuid4()),
            match_id=match_id,
            sender_id=sender_id,
            receiver_id=match.other_user(sender_id),
            content=content,
            attachment=attachment,
            created_at=self.engine.clock(),
        )
        self.repository.create(message)
        self.engine.touch_last_message(match_id, message.created_at)
        log_step(f"Message {message.id} stored for match {match_id}")
        return message

    def list_messages(self, match_id: str) -> List[Message]:
        """Messages of a conversation, oldest first."""
        return sorted(
            self.repository.list_for_match(match_id),
            key=lambda m: m.created_at,
        )
