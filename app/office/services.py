# app/office/services.py
from sqlalchemy.orm import Session

from app.core.database import insert_ignore, translate_store_errors
from app.core.errors import NotFoundError
from app.office.models import Category, Office, UserOffice
from app.office.schemas import CategoryCreate, MemberAdd, OfficeCreate

def get_all_offices(db: Session) -> list[Office]:
    with translate_store_errors(db):
        return db.query(Office).order_by(Office.id).all()

def get_office(db: Session, office_id: int) -> Office:
    with translate_store_errors(db):
        office = db.query(Office).filter(Office.id == office_id).first()
    if not office:
        raise NotFoundError(f"Office {office_id} not found")
    return office

def create_office(db: Session, payload: OfficeCreate) -> Office:
    db_office = Office(**payload.model_dump())
    with translate_store_errors(db):
        db.add(db_office)
        db.commit()
        db.refresh(db_office)
    return db_office

def add_member(db: Session, office_id: int, payload: MemberAdd) -> UserOffice:
    get_office(db, office_id)
    with translate_store_errors(db):
        db.execute(
            insert_ignore(db, UserOffice.__table__).values(
                user_id=payload.user_id, office_id=office_id, role=payload.role
            )
        )
        db.commit()
        return (
            db.query(UserOffice)
            .filter(UserOffice.user_id == payload.user_id, UserOffice.office_id == office_id)
            .one()
        )

def get_all_categories(db: Session) -> list[Category]:
    with translate_store_errors(db):
        return db.query(Category).order_by(Category.id).all()

def create_category(db: Session, payload: CategoryCreate) -> Category:
    get_office(db, payload.office_id)
    if payload.external_office_id is not None:
        get_office(db, payload.external_office_id)
    db_category = Category(**payload.model_dump())
    with translate_store_errors(db):
        db.add(db_category)
        db.commit()
        db.refresh(db_category)
    return db_category
