# app/conversation/gateway.py
"""
Conversation and notification gateway used by the report lifecycle.

Both gateways only flush; the caller owns the commit so that a failing
side effect can be rolled back without touching an already committed report.
"""

import logging

from sqlalchemy.orm import Session

from app.conversation.models import Conversation, ConversationParticipant, Message, Notification
from app.core.database import insert_ignore

logger = logging.getLogger(__name__)

EVENT_MESSAGES = {
    "assigned": "Report status change to: Assigned",
    "rejected": "Report status change to: Rejected",
    "in_progress": "Report status change to: In Progress",
    "suspended": "Report status change to: Suspended",
    "resolved": "Report status change to: Resolved",
    "external_assignment": "Report assigned to external office",
}


class ConversationGateway:
    def __init__(self, db: Session):
        self.db = db

    def find_or_create_conversation(self, report_id: int, initial_participants, is_internal: bool) -> Conversation:
        created = self.db.execute(
            insert_ignore(self.db, Conversation.__table__).values(
                report_id=report_id, is_internal=is_internal
            )
        ).rowcount
        conversation = (
            self.db.query(Conversation)
            .filter(Conversation.report_id == report_id, Conversation.is_internal == is_internal)
            .one()
        )
        if created:
            logger.info("Opened %s conversation %s for report %s",
                        "internal" if is_internal else "public", conversation.id, report_id)
            for user_id in initial_participants:
                self.add_participant_if_absent(conversation.id, user_id)
        return conversation

    def add_participant_if_absent(self, conversation_id: int, user_id: int) -> bool:
        added = self.db.execute(
            insert_ignore(self.db, ConversationParticipant.__table__).values(
                conversation_id=conversation_id, user_id=user_id
            )
        ).rowcount
        return added == 1

    def conversations_for_report(self, report_id: int) -> list[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(Conversation.report_id == report_id)
            .order_by(Conversation.id)
            .all()
        )

    def participant_ids(self, conversation_id: int) -> list[int]:
        rows = (
            self.db.query(ConversationParticipant.user_id)
            .filter(ConversationParticipant.conversation_id == conversation_id)
            .order_by(ConversationParticipant.joined_at, ConversationParticipant.user_id)
            .all()
        )
        return [user_id for (user_id,) in rows]


class NotificationGateway:
    def __init__(self, db: Session):
        self.db = db

    def notify(self, conversation_id: int, event_kind: str) -> Message:
        message = Message(
            conversation_id=conversation_id,
            content=EVENT_MESSAGES.get(event_kind, event_kind),
            is_system=True,
        )
        self.db.add(message)
        self.db.flush()
        recipients = ConversationGateway(self.db).participant_ids(conversation_id)
        for user_id in recipients:
            self.db.add(Notification(user_id=user_id, message_id=message.id))
        self.db.flush()
        logger.debug("Notified %d participant(s) of conversation %s: %s",
                     len(recipients), conversation_id, event_kind)
        return message
