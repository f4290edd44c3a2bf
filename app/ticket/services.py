# app/ticket/services.py
import logging

from app.core.config import get_settings
from app.core.errors import ConflictError
from app.ticket.models import Ticket
from app.ticket.store import QueueStore

logger = logging.getLogger(__name__)


def ticket_code(service_id: int, sequence: int) -> str:
    return f"S{service_id}-{sequence}"


def create_ticket(store: QueueStore, service_id: int) -> Ticket:
    sequence = store.next_sequence(service_id)
    ticket = store.insert(Ticket(service_id=service_id, ticket_code=ticket_code(service_id, sequence)))
    logger.info("Issued ticket %s (id=%s)", ticket.ticket_code, ticket.id)
    return ticket


def _longest_queue(store: QueueStore, service_ids) -> list[Ticket]:
    # strict ">" keeps the earliest service on ties
    longest: list[Ticket] = []
    for service_id in service_ids:
        queue = store.list_pending(service_id)
        if len(queue) > len(longest):
            longest = queue
    return longest


def next_customer_by_service_ids(store: QueueStore, service_ids, max_attempts: int | None = None) -> Ticket | None:
    """
    Serve the oldest ticket of the most backlogged service among ``service_ids``.

    Returns None for empty or non-list input (without touching the store) and
    when every listed queue is empty. If another desk claims the chosen
    ticket first, selection is re-run up to ``max_attempts`` times.
    """
    if not isinstance(service_ids, (list, tuple)) or not service_ids:
        return None

    attempts = get_settings().DISPATCH_MAX_ATTEMPTS if max_attempts is None else max_attempts
    for attempt in range(1, attempts + 1):
        queue = _longest_queue(store, service_ids)
        if not queue:
            return None
        head = queue[0]
        if store.delete_if_present(head.id):
            logger.info("Serving ticket %s from service %s", head.ticket_code, head.service_id)
            return head
        logger.warning(
            "Ticket %s was claimed concurrently (attempt %s/%s)", head.ticket_code, attempt, attempts
        )

    raise ConflictError("Could not claim a ticket, queues are changing too fast; retry")
