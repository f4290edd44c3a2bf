# app/report/lifecycle.py
"""
Report lifecycle engine.

Every operation loads the report, validates the move against
``app.report.workflow`` and commits the new status first. Conversation and
notification work runs afterwards in its own unit: if it fails it is rolled
back and logged, and the committed status stands.

External maintainers are re-authorized on every call from the category's
external office and their membership of it; nothing is cached between calls.
"""

import logging
from contextlib import contextmanager

from app.conversation.gateway import ConversationGateway, NotificationGateway
from app.core.errors import ForbiddenError, IllegalTransitionError, NotFoundError
from app.office.models import Category
from app.report.models import Report
from app.report.store import ReportStore
from app.report.workflow import (
    EXTERNAL_TARGETS,
    ReportStatus,
    ReviewAction,
    allowed_targets,
    can_transition,
)

logger = logging.getLogger(__name__)

EXTERNAL_ASSIGNMENT = "external_assignment"


class ReportLifecycle:
    def __init__(self, store: ReportStore, conversations: ConversationGateway, notifications: NotificationGateway):
        self.store = store
        self.conversations = conversations
        self.notifications = notifications

    # -- review and assignment -------------------------------------------

    def review_report(self, report_id: int, action, explanation: str | None = None,
                      category_id: int | None = None) -> Report:
        """Accept (-> assigned) or reject (-> rejected) a pending report."""
        report = self.store.get(report_id)
        try:
            action = ReviewAction(action)
        except ValueError:
            raise IllegalTransitionError(f"Unknown review action '{action}'") from None
        target = ReportStatus.ASSIGNED if action is ReviewAction.ACCEPT else ReportStatus.REJECTED
        self._require(report, target, sources={ReportStatus.PENDING})

        if action is ReviewAction.ACCEPT:
            if category_id is not None and category_id != report.category_id:
                self.store.find_category_with_office(category_id)
                report.category_id = category_id
            report.reject_explanation = None
        else:
            report.reject_explanation = explanation if explanation is not None else ""

        report = self._commit_status(report, target)
        self._notify_report(report.id, target.value)
        return report

    def assign_report_to_external_maintainer(self, report_id: int, maintainer_id: int) -> Report:
        """
        Delegate an assigned report to an external maintainer.

        The status stays ``assigned``. The report's internal conversation is
        opened (reporter plus internal office staff) if it does not exist yet,
        and the maintainer joins it; re-assigning the same maintainer does not
        duplicate them.
        """
        report = self.store.get(report_id)
        if report.status != ReportStatus.ASSIGNED.value:
            raise IllegalTransitionError(
                f"Report {report_id} must be '{ReportStatus.ASSIGNED.value}' to be assigned externally, "
                f"it is '{report.status}'"
            )
        report.assigned_external = True
        report.external_maintainer_id = maintainer_id
        report = self.store.save(report)
        logger.info("Report %s delegated to external maintainer %s", report.id, maintainer_id)

        with self._best_effort(report.id, "external assignment conversation"):
            category = self.store.find_category_with_office(report.category_id)
            conversation = self._escalation_conversation(report, category)
            self.conversations.add_participant_if_absent(conversation.id, maintainer_id)
        self._notify_report(report.id, EXTERNAL_ASSIGNMENT)
        return report

    # -- internal execution ----------------------------------------------

    def start_report(self, report_id: int, technician_id: int | None = None) -> Report:
        report = self.store.get(report_id)
        self._require(report, ReportStatus.IN_PROGRESS, sources={ReportStatus.ASSIGNED})
        if technician_id is not None:
            report.technician_id = technician_id
        report = self._commit_status(report, ReportStatus.IN_PROGRESS)

        if technician_id is not None:
            with self._best_effort(report.id, "technician participation"):
                for conversation in self.conversations.conversations_for_report(report.id):
                    self.conversations.add_participant_if_absent(conversation.id, technician_id)
        self._notify_report(report.id, ReportStatus.IN_PROGRESS.value)
        return report

    def suspend_report(self, report_id: int, technician_id: int | None = None) -> Report:
        return self._internal_step(report_id, technician_id, ReportStatus.SUSPENDED, {ReportStatus.IN_PROGRESS})

    def resume_report(self, report_id: int, technician_id: int | None = None) -> Report:
        return self._internal_step(report_id, technician_id, ReportStatus.IN_PROGRESS, {ReportStatus.SUSPENDED})

    def finish_report(self, report_id: int, technician_id: int | None = None) -> Report:
        return self._internal_step(
            report_id, technician_id, ReportStatus.RESOLVED, {ReportStatus.IN_PROGRESS, ReportStatus.SUSPENDED}
        )

    # -- external execution ----------------------------------------------

    def external_start(self, report_id: int, maintainer_id: int) -> Report:
        return self._external_step(report_id, maintainer_id, ReportStatus.IN_PROGRESS, {ReportStatus.ASSIGNED})

    def external_suspend(self, report_id: int, maintainer_id: int) -> Report:
        return self._external_step(report_id, maintainer_id, ReportStatus.SUSPENDED, {ReportStatus.IN_PROGRESS})

    def external_resume(self, report_id: int, maintainer_id: int) -> Report:
        return self._external_step(report_id, maintainer_id, ReportStatus.IN_PROGRESS, {ReportStatus.SUSPENDED})

    def external_finish(self, report_id: int, maintainer_id: int) -> Report:
        return self._external_step(
            report_id, maintainer_id, ReportStatus.RESOLVED, {ReportStatus.IN_PROGRESS, ReportStatus.SUSPENDED}
        )

    def external_change_status(self, report_id: int, status, external_maintainer_id: int) -> Report:
        """
        Apply a status requested by a member of the report's external office.

        Raises NotFoundError when the report, its category, the category's
        external office or the maintainer's membership is missing,
        ForbiddenError when that office is not flagged external, and
        IllegalTransitionError when the status is unknown, not an execution
        status, or not reachable from the current one.
        """
        report = self.store.get(report_id)
        return self._apply_external(report, status, external_maintainer_id)

    # -- helpers -----------------------------------------------------------

    def _internal_step(self, report_id, technician_id, target: ReportStatus, sources) -> Report:
        report = self.store.get(report_id)
        if technician_id is not None and report.technician_id is not None \
                and report.technician_id != technician_id:
            raise ForbiddenError(f"Report {report_id} is being worked on by another technician")
        self._require(report, target, sources=sources)
        report = self._commit_status(report, target)
        self._notify_report(report.id, target.value)
        return report

    def _external_step(self, report_id, maintainer_id, target: ReportStatus, sources) -> Report:
        report = self.store.get(report_id)
        if report.external_maintainer_id is None or report.external_maintainer_id != maintainer_id:
            raise ForbiddenError(f"Report {report_id} is not assigned to external maintainer {maintainer_id}")
        return self._apply_external(report, target, maintainer_id, sources=sources)

    def _apply_external(self, report: Report, status, maintainer_id: int, sources=None) -> Report:
        category = self.store.find_category_with_office(report.category_id)
        office = category.external_office
        if office is None:
            raise NotFoundError(f"Category {category.id} has no external office")
        if not office.is_external:
            raise ForbiddenError(f"Office {office.id} is not an external office")
        self.store.find_office_membership(maintainer_id, office.id)

        try:
            target = ReportStatus(status)
        except ValueError:
            raise IllegalTransitionError(f"Unknown report status '{status}'") from None
        if target not in EXTERNAL_TARGETS:
            raise IllegalTransitionError(f"External maintainers cannot set status '{target.value}'")
        self._require(report, target, sources=sources)

        report = self._commit_status(report, target)
        with self._best_effort(report.id, "maintainer participation"):
            conversation = self._escalation_conversation(report, category)
            self.conversations.add_participant_if_absent(conversation.id, maintainer_id)
        self._notify_report(report.id, target.value)
        return report

    @staticmethod
    def _require(report: Report, target: ReportStatus, sources=None) -> None:
        current = ReportStatus(report.status)
        if (sources is not None and current not in sources) or not can_transition(current, target):
            raise IllegalTransitionError(
                f"Cannot move report {report.id} from '{current.value}' to '{target.value}'. "
                f"Allowed from '{current.value}': {allowed_targets(current.value)}"
            )

    def _commit_status(self, report: Report, target: ReportStatus) -> Report:
        previous = report.status
        report.status = target.value
        report = self.store.save(report)
        logger.info("Report %s: %s -> %s", report.id, previous, target.value)
        return report

    def _escalation_conversation(self, report: Report, category: Category):
        initial = []
        if report.user_id is not None:
            initial.append(report.user_id)
        initial.extend(self.store.office_member_ids(category.office_id))
        return self.conversations.find_or_create_conversation(
            report.id, list(dict.fromkeys(initial)), is_internal=True
        )

    def _notify_report(self, report_id: int, event_kind: str) -> None:
        with self._best_effort(report_id, f"'{event_kind}' notification"):
            for conversation in self.conversations.conversations_for_report(report_id):
                self.notifications.notify(conversation.id, event_kind)

    @contextmanager
    def _best_effort(self, report_id: int, what: str):
        try:
            yield
            self.store.commit()
        except Exception:
            self.store.rollback()
            logger.exception("Report %s: %s failed after the status change was committed", report_id, what)
