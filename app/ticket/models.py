# app/ticket/models.py
from sqlalchemy import Column, DateTime, Integer, String
from app.core.database import Base, utc_now

class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(Integer, index=True, nullable=False)
    ticket_code = Column(String, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)


class ServiceCounter(Base):
    """Last ticket sequence handed out per service; only ever moves forward."""

    __tablename__ = "service_counters"

    service_id = Column(Integer, primary_key=True)
    last_sequence = Column(Integer, nullable=False, default=0)
