"""Module: reminder_quota.

Pure helpers over a clinic's reminder fields. Any object exposing
``can_send_reminders``, ``reminder_monthly_limit``, ``reminder_sent_this_cycle``
and ``current_cycle_start_date`` works: ORM rows, schemas, or test doubles.

A missing limit is read as ``UNLIMITED``.
"""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any

from vetcare.core.dates import add_months

UNLIMITED = -1
DISABLED = 0
CRITICAL_PERCENT = 90
WARNING_PERCENT = 75


class QuotaSeverity(StrEnum):
    DISABLED = "disabled"
    UNLIMITED = "unlimited"
    CRITICAL = "critical"
    WARNING = "warning"
    NORMAL = "normal"


@dataclass(frozen=True)
class ReminderUsage:
    count: int
    limit: int
    percent: float | None
    severity: QuotaSeverity

    def as_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "limit": self.limit,
            "percent": self.percent,
            "severity": self.severity.value,
        }


def effective_limit(clinic: Any) -> int:
    limit = getattr(clinic, "reminder_monthly_limit", None)
    return UNLIMITED if limit is None else int(limit)


def _sent(clinic: Any) -> int:
    return int(getattr(clinic, "reminder_sent_this_cycle", None) or 0)


def can_send(clinic: Any) -> bool:
    if not getattr(clinic, "can_send_reminders", False):
        return False
    limit = effective_limit(clinic)
    if limit == DISABLED:
        return False
    if limit == UNLIMITED:
        return True
    return _sent(clinic) < limit


def classify_percent(percent: float) -> QuotaSeverity:
    if percent >= CRITICAL_PERCENT:
        return QuotaSeverity.CRITICAL
    if percent >= WARNING_PERCENT:
        return QuotaSeverity.WARNING
    return QuotaSeverity.NORMAL


def usage_summary(clinic: Any) -> ReminderUsage:
    count = _sent(clinic)
    limit = effective_limit(clinic)

    if not getattr(clinic, "can_send_reminders", False) or limit == DISABLED:
        return ReminderUsage(count=count, limit=limit, percent=None, severity=QuotaSeverity.DISABLED)
    if limit == UNLIMITED:
        return ReminderUsage(count=count, limit=limit, percent=None, severity=QuotaSeverity.UNLIMITED)

    percent = min(max(count / limit * 100, 0.0), 100.0)
    return ReminderUsage(count=count, limit=limit, percent=percent, severity=classify_percent(percent))


def owner_reminders_effective(clinic_can_send: bool, owner_allows: bool) -> bool:
    # The owner flag is kept as stored; the clinic switch only masks it.
    return bool(clinic_can_send) and bool(owner_allows)


def next_cycle_start(cycle_start: date) -> date:
    return add_months(cycle_start, 1)


def cycle_rollover_due(cycle_start: date | None, today: date) -> bool:
    if cycle_start is None:
        return False
    return today >= next_cycle_start(cycle_start)
