# app/core/database.py
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from app.core.config import get_settings
from app.core.errors import ConflictError, StoreFailureError

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def utc_now() -> datetime:
    # naive UTC, matching the DateTime columns
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Common DB dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def translate_store_errors(db: Session):
    """Roll back and re-raise database failures as the app's typed errors."""
    try:
        yield
    except StaleDataError as exc:
        db.rollback()
        raise ConflictError("Record was modified concurrently, retry the request") from exc
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(f"Integrity violation: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreFailureError(f"Store operation failed: {exc}") from exc


def insert_ignore(db: Session, table):
    """INSERT ... ON CONFLICT DO NOTHING for the session's dialect."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(table).on_conflict_do_nothing()
    if dialect == "sqlite":
        return sqlite.insert(table).on_conflict_do_nothing()
    raise StoreFailureError(f"Unsupported database dialect: {dialect}")
