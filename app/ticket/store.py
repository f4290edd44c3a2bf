# app/ticket/store.py
from sqlalchemy.orm import Session

from app.core.database import insert_ignore, translate_store_errors
from app.ticket.models import ServiceCounter, Ticket


class QueueStore:
    """Pending tickets per service, backed by the request's session."""

    def __init__(self, db: Session):
        self.db = db

    def count_pending(self, service_id: int) -> int:
        with translate_store_errors(self.db):
            return self.db.query(Ticket).filter(Ticket.service_id == service_id).count()

    def next_sequence(self, service_id: int) -> int:
        """
        Advance the service's counter and return the new value.

        The UPDATE holds the counter's write lock until the caller commits,
        so concurrent creations for the same service are serialized. A
        service seen for the first time is seeded from its pending count.
        """
        with translate_store_errors(self.db):
            seed = insert_ignore(self.db, ServiceCounter.__table__).values(
                service_id=service_id,
                last_sequence=self.count_pending(service_id),
            )
            self.db.execute(seed)
            self.db.query(ServiceCounter).filter(ServiceCounter.service_id == service_id).update(
                {ServiceCounter.last_sequence: ServiceCounter.last_sequence + 1},
                synchronize_session=False,
            )
            return (
                self.db.query(ServiceCounter.last_sequence)
                .filter(ServiceCounter.service_id == service_id)
                .scalar()
            )

    def insert(self, ticket: Ticket) -> Ticket:
        with translate_store_errors(self.db):
            self.db.add(ticket)
            self.db.commit()
            self.db.refresh(ticket)
            return ticket

    def list_pending(self, service_id: int) -> list[Ticket]:
        with translate_store_errors(self.db):
            return (
                self.db.query(Ticket)
                .filter(Ticket.service_id == service_id)
                .order_by(Ticket.id.asc())
                .all()
            )

    def delete_if_present(self, ticket_id: int) -> bool:
        """Claim a ticket; False means another dispatcher removed it first."""
        with translate_store_errors(self.db):
            deleted = (
                self.db.query(Ticket)
                .filter(Ticket.id == ticket_id)
                .delete(synchronize_session=False)
            )
            # keep the served ticket readable after commit
            loaded = self.db.get(Ticket, ticket_id)
            if loaded is not None:
                self.db.expunge(loaded)
            self.db.commit()
            return deleted == 1
