# app/conversation/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.conversation.schemas import ConversationOut, MarkRead, MarkReadResult, MessageOut, NotificationOut
from app.conversation import services as conversation_service
router = APIRouter(tags=["Conversations"])


@router.get("/conversations", response_model=list[ConversationOut])
def list_for_user(user_id: int = Query(..., description="Participant to list conversations for"),
                  db: Session = Depends(get_db)):
    return conversation_service.get_conversations_for_user(db, user_id)


@router.get("/conversations/{conversation_id}/messages", response_model=list[MessageOut])
def list_messages(conversation_id: int, db: Session = Depends(get_db)):
    return conversation_service.get_messages(db, conversation_id)


@router.patch("/conversations/{conversation_id}/read", response_model=MarkReadResult)
def mark_read(conversation_id: int, payload: MarkRead, db: Session = Depends(get_db)):
    updated = conversation_service.mark_conversation_read(db, payload.user_id, conversation_id)
    return MarkReadResult(updated=updated)


@router.get("/notifications", response_model=list[NotificationOut])
def list_notifications(
    user_id: int = Query(...),
    unread: bool = Query(default=True, description="Only unread notifications"),
    db: Session = Depends(get_db),
):
    return conversation_service.get_notifications(db, user_id, unread_only=unread)
