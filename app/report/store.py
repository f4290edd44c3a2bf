# app/report/store.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.database import translate_store_errors
from app.core.errors import NotFoundError, StoreFailureError
from app.office.models import Category, UserOffice
from app.report.models import Report


class ReportStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, report_id: int) -> Report:
        with translate_store_errors(self.db):
            report = self.db.query(Report).filter(Report.id == report_id).first()
        if report is None:
            raise NotFoundError(f"Report {report_id} not found")
        return report

    def find_all(self, status: str | None = None, category_id: int | None = None) -> list[Report]:
        with translate_store_errors(self.db):
            query = self.db.query(Report)
            if status:
                query = query.filter(Report.status == status)
            if category_id is not None:
                query = query.filter(Report.category_id == category_id)
            return query.order_by(Report.id).all()

    def save(self, report: Report) -> Report:
        with translate_store_errors(self.db):
            self.db.add(report)
            self.db.commit()
            self.db.refresh(report)
            return report

    def find_category_with_office(self, category_id: int) -> Category:
        with translate_store_errors(self.db):
            category = (
                self.db.query(Category)
                .options(joinedload(Category.office), joinedload(Category.external_office))
                .filter(Category.id == category_id)
                .first()
            )
        if category is None:
            raise NotFoundError(f"Category {category_id} not found")
        return category

    def find_office_membership(self, user_id: int, office_id: int) -> UserOffice:
        with translate_store_errors(self.db):
            membership = (
                self.db.query(UserOffice)
                .filter(UserOffice.user_id == user_id, UserOffice.office_id == office_id)
                .first()
            )
        if membership is None:
            raise NotFoundError(f"User {user_id} is not a member of office {office_id}")
        return membership

    def office_member_ids(self, office_id: int) -> list[int]:
        with translate_store_errors(self.db):
            rows = (
                self.db.query(UserOffice.user_id)
                .filter(UserOffice.office_id == office_id)
                .order_by(UserOffice.user_id)
                .all()
            )
        return [user_id for (user_id,) in rows]

    def commit(self) -> None:
        with translate_store_errors(self.db):
            self.db.commit()

    def rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError as exc:
            raise StoreFailureError(f"Rollback failed: {exc}") from exc
