# app/office/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.office.schemas import CategoryCreate, CategoryOut, MemberAdd, MemberOut, OfficeCreate, OfficeOut
from app.office import services as office_service
router = APIRouter(tags=["Offices"])


@router.post("/offices", response_model=OfficeOut, status_code=201)
def create_office(office: OfficeCreate, db: Session = Depends(get_db)):
    return office_service.create_office(db, office)


@router.get("/offices", response_model=list[OfficeOut])
def list_offices(db: Session = Depends(get_db)):
    return office_service.get_all_offices(db)


@router.post("/offices/{office_id}/members", response_model=MemberOut, status_code=201)
def add_member(office_id: int, member: MemberAdd, db: Session = Depends(get_db)):
    return office_service.add_member(db, office_id, member)


@router.post("/categories", response_model=CategoryOut, status_code=201)
def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    return office_service.create_category(db, category)


@router.get("/categories", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return office_service.get_all_categories(db)
