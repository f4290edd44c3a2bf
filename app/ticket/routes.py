# app/ticket/routes.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.ticket.schemas import NextCustomerRequest, TicketCreate, TicketCreated, TicketOut
from app.ticket import services as ticket_service
from app.ticket.store import QueueStore
router = APIRouter(prefix="/queue", tags=["Queue"])


def get_queue_store(db: Session = Depends(get_db)) -> QueueStore:
    return QueueStore(db)


@router.post("/tickets", response_model=TicketCreated, status_code=201)
def create(payload: TicketCreate, store: QueueStore = Depends(get_queue_store)):
    ticket = ticket_service.create_ticket(store, payload.service_id)
    return TicketCreated(id=ticket.id, list_code=ticket.ticket_code)


@router.get("/services/{service_id}/tickets", response_model=list[TicketOut])
def list_pending(service_id: int, store: QueueStore = Depends(get_queue_store)):
    return store.list_pending(service_id)


@router.post(
    "/next",
    response_model=TicketOut,
    responses={204: {"description": "All listed queues are empty"}},
)
def next_customer(payload: NextCustomerRequest, store: QueueStore = Depends(get_queue_store)):
    ticket = ticket_service.next_customer_by_service_ids(store, payload.service_ids)
    if ticket is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return ticket
