# app/conversation/models.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base, utc_now

class Conversation(Base):
    __tablename__ = "conversations"
    __table_args__ = (UniqueConstraint("report_id", "is_internal", name="uq_conversation_report_kind"),)

    id = Column(Integer, primary_key=True, index=True)
    report_id = Column(Integer, ForeignKey("reports.id"), nullable=False, index=True)
    is_internal = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    participants = relationship(
        "ConversationParticipant",
        order_by="ConversationParticipant.joined_at",
        cascade="all, delete-orphan",
    )
    messages = relationship("Message", order_by="Message.id", back_populates="conversation")

    @property
    def participant_ids(self) -> list[int]:
        return [p.user_id for p in self.participants]


class ConversationParticipant(Base):
    __tablename__ = "conversation_participants"

    conversation_id = Column(Integer, ForeignKey("conversations.id"), primary_key=True)
    user_id = Column(Integer, primary_key=True)
    joined_at = Column(DateTime, default=utc_now, nullable=False)


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(Integer, ForeignKey("conversations.id"), nullable=False, index=True)
    sender_id = Column(Integer, nullable=True)
    content = Column(String, nullable=False)
    is_system = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    conversation = relationship("Conversation", back_populates="messages")


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    message_id = Column(Integer, ForeignKey("messages.id"), nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    message = relationship("Message")
