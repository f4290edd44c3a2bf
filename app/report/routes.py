# app/report/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.conversation.gateway import ConversationGateway, NotificationGateway
from app.report.lifecycle import ReportLifecycle
from app.report.schemas import (
    ExternalAction,
    ExternalAssignment,
    ExternalStatusChange,
    ReportCreate,
    ReportOut,
    ReviewRequest,
    TechnicianAction,
)
from app.report import services as report_service
from app.report.store import ReportStore
from app.report.workflow import ReportStatus
router = APIRouter(prefix="/reports", tags=["Reports"])


def get_report_store(db: Session = Depends(get_db)) -> ReportStore:
    return ReportStore(db)


def get_lifecycle(db: Session = Depends(get_db)) -> ReportLifecycle:
    return ReportLifecycle(ReportStore(db), ConversationGateway(db), NotificationGateway(db))


@router.post("", response_model=ReportOut, status_code=201)
def create(report: ReportCreate, store: ReportStore = Depends(get_report_store)):
    return report_service.create_report(store, report)


@router.get("", response_model=list[ReportOut])
def list_all(
    status: ReportStatus | None = Query(default=None, description="Filter by lifecycle status"),
    category_id: int | None = Query(default=None),
    store: ReportStore = Depends(get_report_store),
):
    return report_service.get_all_reports(store, status.value if status else None, category_id)


@router.get("/{report_id}", response_model=ReportOut)
def get(report_id: int, store: ReportStore = Depends(get_report_store)):
    return report_service.get_report(store, report_id)


@router.patch("/{report_id}/review", response_model=ReportOut)
def review(report_id: int, payload: ReviewRequest, lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.review_report(report_id, payload.action, payload.explanation, payload.category_id)


@router.patch("/{report_id}/assign_external", response_model=ReportOut)
def assign_external(report_id: int, payload: ExternalAssignment,
                    lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.assign_report_to_external_maintainer(report_id, payload.external_maintainer_id)


@router.patch("/{report_id}/start", response_model=ReportOut)
def start(report_id: int, payload: TechnicianAction | None = None,
          lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.start_report(report_id, payload.technician_id if payload else None)


@router.patch("/{report_id}/suspend", response_model=ReportOut)
def suspend(report_id: int, payload: TechnicianAction | None = None,
            lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.suspend_report(report_id, payload.technician_id if payload else None)


@router.patch("/{report_id}/resume", response_model=ReportOut)
def resume(report_id: int, payload: TechnicianAction | None = None,
           lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.resume_report(report_id, payload.technician_id if payload else None)


@router.patch("/{report_id}/finish", response_model=ReportOut)
def finish(report_id: int, payload: TechnicianAction | None = None,
           lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.finish_report(report_id, payload.technician_id if payload else None)


@router.patch("/{report_id}/external/status", response_model=ReportOut)
def external_status(report_id: int, payload: ExternalStatusChange,
                    lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.external_change_status(report_id, payload.status, payload.external_maintainer_id)


@router.patch("/{report_id}/external/start", response_model=ReportOut)
def external_start(report_id: int, payload: ExternalAction, lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.external_start(report_id, payload.external_maintainer_id)


@router.patch("/{report_id}/external/suspend", response_model=ReportOut)
def external_suspend(report_id: int, payload: ExternalAction, lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.external_suspend(report_id, payload.external_maintainer_id)


@router.patch("/{report_id}/external/resume", response_model=ReportOut)
def external_resume(report_id: int, payload: ExternalAction, lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.external_resume(report_id, payload.external_maintainer_id)


@router.patch("/{report_id}/external/finish", response_model=ReportOut)
def external_finish(report_id: int, payload: ExternalAction, lifecycle: ReportLifecycle = Depends(get_lifecycle)):
    return lifecycle.external_finish(report_id, payload.external_maintainer_id)
