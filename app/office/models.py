# app/office/models.py
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base

class Office(Base):
    __tablename__ = "offices"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    is_external = Column(Boolean, nullable=False, default=False)

    members = relationship("UserOffice", back_populates="office")


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    office_id = Column(Integer, ForeignKey("offices.id"), nullable=False)
    external_office_id = Column(Integer, ForeignKey("offices.id"), nullable=True)

    office = relationship("Office", foreign_keys=[office_id])
    external_office = relationship("Office", foreign_keys=[external_office_id])


class UserOffice(Base):
    __tablename__ = "user_offices"

    user_id = Column(Integer, primary_key=True)
    office_id = Column(Integer, ForeignKey("offices.id"), primary_key=True)
    role = Column(String, nullable=True)

    office = relationship("Office", back_populates="members")
