# tests/test_tickets.py
import threading
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from app.core.database import SessionLocal
from app.core.errors import ConflictError
from app.main import app
from app.ticket import services as ticket_service
from app.ticket.store import QueueStore

client = TestClient(app)

A, B, C = 1, 2, 3


def enqueue(store, service_id, n):
    return [ticket_service.create_ticket(store, service_id) for _ in range(n)]


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_create_ticket_codes_are_sequential():
    codes = []
    for _ in range(4):
        r = client.post("/queue/tickets", json={"service_id": 4})
        assert r.status_code == 201
        codes.append(r.json()["listCode"])
        assert isinstance(r.json()["id"], int)
    assert codes == ["S4-1", "S4-2", "S4-3", "S4-4"]


def test_sequences_are_independent_per_service(db):
    store = QueueStore(db)
    assert [t.ticket_code for t in enqueue(store, A, 2)] == ["S1-1", "S1-2"]
    assert [t.ticket_code for t in enqueue(store, B, 1)] == ["S2-1"]
    assert ticket_service.create_ticket(store, A).ticket_code == "S1-3"


def test_ticket_numbers_are_not_reused_after_serving(db):
    store = QueueStore(db)
    enqueue(store, A, 2)
    served = ticket_service.next_customer_by_service_ids(store, [A])
    assert served.ticket_code == "S1-1"
    assert ticket_service.create_ticket(store, A).ticket_code == "S1-3"
    assert [t.ticket_code for t in store.list_pending(A)] == ["S1-2", "S1-3"]


def test_next_customer_drains_longest_queue_then_earliest_on_tie(db):
    store = QueueStore(db)
    enqueue(store, A, 3)
    enqueue(store, B, 1)
    enqueue(store, C, 5)

    # [3, 1, 5] -> C
    assert ticket_service.next_customer_by_service_ids(store, [A, B, C]).ticket_code == "S3-1"
    # [3, 1, 4] -> C again
    assert ticket_service.next_customer_by_service_ids(store, [A, B, C]).ticket_code == "S3-2"
    # [3, 1, 3] -> tie, A comes first in the input
    assert ticket_service.next_customer_by_service_ids(store, [A, B, C]).ticket_code == "S1-1"
    # [2, 1, 3] -> C
    assert ticket_service.next_customer_by_service_ids(store, [A, B, C]).ticket_code == "S3-3"


def test_input_order_decides_ties(db):
    store = QueueStore(db)
    enqueue(store, A, 2)
    enqueue(store, C, 2)
    assert ticket_service.next_customer_by_service_ids(store, [C, A]).service_id == C


def test_served_ticket_is_removed_and_readable(db):
    store = QueueStore(db)
    created = ticket_service.create_ticket(store, B)
    served = ticket_service.next_customer_by_service_ids(store, [B])
    assert served.id == created.id
    assert served.ticket_code == "S2-1"
    assert store.count_pending(B) == 0


@pytest.mark.parametrize("service_ids", [None, [], (), "1,2", 3])
def test_next_customer_invalid_input_does_not_touch_store(service_ids):
    store = Mock(spec=QueueStore)
    assert ticket_service.next_customer_by_service_ids(store, service_ids) is None
    assert store.method_calls == []


def test_next_customer_returns_none_when_all_queues_empty(db):
    store = QueueStore(db)
    enqueue(store, C, 1)
    assert ticket_service.next_customer_by_service_ids(store, [A, B]) is None
    assert store.count_pending(C) == 1


def test_lost_claim_is_retried_with_the_next_ticket(db):
    class RacingStore(QueueStore):
        raced = False

        def delete_if_present(self, ticket_id):
            if not self.raced:
                self.raced = True
                # another desk serves the same ticket first
                assert QueueStore(self.db).delete_if_present(ticket_id)
            return super().delete_if_present(ticket_id)

    store = RacingStore(db)
    enqueue(store, A, 2)
    served = ticket_service.next_customer_by_service_ids(store, [A])
    assert served.ticket_code == "S1-2"
    assert store.count_pending(A) == 0


def test_dispatch_gives_up_after_max_attempts(db):
    class AlwaysLosingStore(QueueStore):
        def delete_if_present(self, ticket_id):
            return False

    store = AlwaysLosingStore(db)
    enqueue(store, A, 1)
    with pytest.raises(ConflictError):
        ticket_service.next_customer_by_service_ids(store, [A], max_attempts=2)
    assert store.count_pending(A) == 1


def test_zero_attempts_is_not_replaced_by_the_default():
    store = Mock(spec=QueueStore)
    with pytest.raises(ConflictError):
        ticket_service.next_customer_by_service_ids(store, [A], max_attempts=0)
    assert store.method_calls == []


def test_delete_if_present_is_false_for_missing_ticket(db):
    store = QueueStore(db)
    ticket = ticket_service.create_ticket(store, A)
    assert store.delete_if_present(ticket.id) is True
    assert store.delete_if_present(ticket.id) is False


def test_next_customer_endpoint():
    for service_id in (8, 9, 9):
        client.post("/queue/tickets", json={"service_id": service_id})

    r = client.post("/queue/next", json={"service_ids": [8, 9]})
    assert r.status_code == 200
    data = r.json()
    assert data["ticket_code"] == "S9-1"
    assert data["service_id"] == 9

    r2 = client.get("/queue/services/9/tickets")
    assert [t["ticket_code"] for t in r2.json()] == ["S9-2"]


def test_next_customer_endpoint_no_content():
    r = client.post("/queue/next", json={"service_ids": [42]})
    assert r.status_code == 204
    assert r.content == b""

    r2 = client.post("/queue/next", json={})
    assert r2.status_code == 204


def test_create_ticket_validation_errors():
    assert client.post("/queue/tickets", json={}).status_code == 422
    assert client.post("/queue/tickets", json={"service_id": 0}).status_code == 422


def test_concurrent_creations_never_share_a_sequence():
    workers = 8
    barrier = threading.Barrier(workers)
    codes, errors = [], []
    lock = threading.Lock()

    def issue():
        session = SessionLocal()
        try:
            barrier.wait()
            ticket = ticket_service.create_ticket(QueueStore(session), 6)
            with lock:
                codes.append(ticket.ticket_code)
        except Exception as exc:
            with lock:
                errors.append(exc)
        finally:
            session.close()

    threads = [threading.Thread(target=issue) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert sorted(codes, key=lambda c: int(c.split("-")[1])) == [f"S6-{n}" for n in range(1, workers + 1)]


def test_created_at_is_stamped_in_utc(db):
    before = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(seconds=1)
    ticket = ticket_service.create_ticket(QueueStore(db), A)
    assert ticket.created_at.tzinfo is None
    assert before <= ticket.created_at <= before + timedelta(minutes=1)
