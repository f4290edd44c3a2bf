# app/conversation/services.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.conversation.models import Conversation, ConversationParticipant, Message, Notification
from app.core.database import translate_store_errors
from app.core.errors import NotFoundError

def get_conversations_for_user(db: Session, user_id: int) -> list[Conversation]:
    with translate_store_errors(db):
        return (
            db.query(Conversation)
            .join(ConversationParticipant, ConversationParticipant.conversation_id == Conversation.id)
            .filter(ConversationParticipant.user_id == user_id)
            .order_by(Conversation.id)
            .all()
        )

def get_messages(db: Session, conversation_id: int) -> list[Message]:
    with translate_store_errors(db):
        if db.query(Conversation).filter(Conversation.id == conversation_id).first() is None:
            raise NotFoundError(f"Conversation {conversation_id} not found")
        return db.query(Message).filter(Message.conversation_id == conversation_id).order_by(Message.id).all()

def get_notifications(db: Session, user_id: int, unread_only: bool = True) -> list[Notification]:
    with translate_store_errors(db):
        query = db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read.is_(False))
        return query.order_by(Notification.id).all()

def mark_conversation_read(db: Session, user_id: int, conversation_id: int) -> int:
    message_ids = select(Message.id).where(Message.conversation_id == conversation_id)
    with translate_store_errors(db):
        updated = (
            db.query(Notification)
            .filter(
                Notification.user_id == user_id,
                Notification.read.is_(False),
                Notification.message_id.in_(message_ids),
            )
            .update({Notification.read: True}, synchronize_session=False)
        )
        db.commit()
    return updated
