# app/report/workflow.py
"""
Report status lifecycle.

    pending -> assigned -> in_progress <-> suspended -> resolved
    pending -> rejected
    assigned -> resolved            (external flows)

External delegation is not a state of its own: it rides on
``assigned_external``/``external_maintainer_id`` next to whatever status the
report is in.
"""

from enum import Enum


class ReportStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    SUSPENDED = "suspended"
    REJECTED = "rejected"
    RESOLVED = "resolved"


class ReviewAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


ALLOWED_TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.PENDING: frozenset({ReportStatus.ASSIGNED, ReportStatus.REJECTED}),
    ReportStatus.ASSIGNED: frozenset({ReportStatus.IN_PROGRESS, ReportStatus.RESOLVED}),
    ReportStatus.IN_PROGRESS: frozenset({ReportStatus.SUSPENDED, ReportStatus.RESOLVED}),
    ReportStatus.SUSPENDED: frozenset({ReportStatus.IN_PROGRESS, ReportStatus.RESOLVED}),
    ReportStatus.REJECTED: frozenset(),
    ReportStatus.RESOLVED: frozenset(),
}

# External maintainers execute work; they never review.
EXTERNAL_TARGETS = frozenset({ReportStatus.IN_PROGRESS, ReportStatus.SUSPENDED, ReportStatus.RESOLVED})


def can_transition(current: ReportStatus, target: ReportStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def allowed_targets(current: str) -> list[str]:
    try:
        return sorted(s.value for s in ALLOWED_TRANSITIONS[ReportStatus(current)])
    except ValueError:
        return []
