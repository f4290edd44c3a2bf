# app/conversation/schemas.py
from datetime import datetime

from pydantic import BaseModel

class ConversationOut(BaseModel):
    id: int
    report_id: int
    is_internal: bool
    participant_ids: list[int]
    created_at: datetime

    model_config = {"from_attributes": True}

class MessageOut(BaseModel):
    id: int
    conversation_id: int
    sender_id: int | None = None
    content: str
    is_system: bool
    created_at: datetime

    model_config = {"from_attributes": True}

class NotificationOut(BaseModel):
    id: int
    user_id: int
    read: bool
    created_at: datetime
    message: MessageOut

    model_config = {"from_attributes": True}

class MarkRead(BaseModel):
    user_id: int

class MarkReadResult(BaseModel):
    updated: int
