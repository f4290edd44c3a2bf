# app/report/models.py
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base, utc_now
from app.office.models import Category
from app.report.workflow import ReportStatus

class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    user_id = Column(Integer, nullable=True, index=True)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    status = Column(String, nullable=False, default=ReportStatus.PENDING.value, index=True)
    reject_explanation = Column(String, nullable=True)
    assigned_external = Column(Boolean, nullable=False, default=False)
    external_maintainer_id = Column(Integer, nullable=True)
    technician_id = Column(Integer, nullable=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    category = relationship(Category)
    photos = relationship("Photo", order_by="Photo.position", cascade="all, delete-orphan")

    # UPDATE ... WHERE version = :seen, so two writers cannot both win
    __mapper_args__ = {"version_id_col": version}


class Photo(Base):
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, index=True)
    report_id = Column(Integer, ForeignKey("reports.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    uri = Column(String, nullable=False)
