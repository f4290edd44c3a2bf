# tests/conftest.py
import os
import tempfile

# point the app at a throwaway database before app.core.database is imported
_db_dir = tempfile.mkdtemp(prefix="civic-desk-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"

import pytest

from app.core.database import Base, SessionLocal, engine
from app.main import app  # noqa: F401  (registers every model on Base)
from app.conversation.gateway import ConversationGateway, NotificationGateway
from app.office.models import Category, Office, UserOffice
from app.report.lifecycle import ReportLifecycle
from app.report.models import Photo, Report
from app.report.store import ReportStore

REPORTER = 500
STAFF = (100, 101)
MAINTAINER = 77


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def world(db):
    """
    Offices and categories used across the lifecycle tests.

    category 5: internal office 1, external office 10 (external, member 77)
    category 6: internal office 1, "external" office 20 not flagged external (member 88)
    category 7: internal office 1, no external office
    """
    db.add_all([
        Office(id=1, name="Roads", is_external=False),
        Office(id=10, name="Acme Maintenance", is_external=True),
        Office(id=20, name="Parks", is_external=False),
    ])
    db.add_all([UserOffice(user_id=uid, office_id=1, role="technician") for uid in STAFF])
    db.add_all([
        UserOffice(user_id=MAINTAINER, office_id=10, role="maintainer"),
        UserOffice(user_id=88, office_id=20, role="maintainer"),
    ])
    db.add_all([
        Category(id=5, name="Potholes", office_id=1, external_office_id=10),
        Category(id=6, name="Trees", office_id=1, external_office_id=20),
        Category(id=7, name="Graffiti", office_id=1, external_office_id=None),
    ])
    db.commit()
    return db


@pytest.fixture
def make_report(world):
    def _make(status="pending", category_id=5, user_id=REPORTER, **fields):
        report = Report(
            title=fields.pop("title", "Pothole on Via Roma"),
            description=fields.pop("description", "Deep hole near the crossing"),
            latitude=45.07,
            longitude=7.68,
            category_id=category_id,
            user_id=user_id,
            status=status,
            photos=[Photo(position=0, uri="/public/pothole.jpg")],
            **fields,
        )
        world.add(report)
        world.commit()
        return report
    return _make


@pytest.fixture
def lifecycle(db):
    return ReportLifecycle(ReportStore(db), ConversationGateway(db), NotificationGateway(db))
