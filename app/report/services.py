# app/report/services.py
import logging

from app.report.models import Photo, Report
from app.report.schemas import ReportCreate
from app.report.store import ReportStore
from app.report.workflow import ReportStatus

logger = logging.getLogger(__name__)

def create_report(store: ReportStore, payload: ReportCreate) -> Report:
    store.find_category_with_office(payload.category_id)
    report = Report(
        **payload.model_dump(exclude={"photos"}),
        status=ReportStatus.PENDING.value,
        photos=[Photo(position=i, uri=uri) for i, uri in enumerate(payload.photos)],
    )
    report = store.save(report)
    logger.info("Report %s submitted in category %s", report.id, report.category_id)
    return report

def get_report(store: ReportStore, report_id: int) -> Report:
    return store.get(report_id)

def get_all_reports(store: ReportStore, status: str | None = None, category_id: int | None = None) -> list[Report]:
    return store.find_all(status=status, category_id=category_id)
