import unittest
from datetime import date
from types import SimpleNamespace

from vetcare.services.reminder_quota import (
    QuotaSeverity,
    can_send,
    classify_percent,
    cycle_rollover_due,
    effective_limit,
    next_cycle_start,
    owner_reminders_effective,
    usage_summary,
)


def clinic(can_send_reminders=True, limit=-1, sent=0, cycle_start=None):
    return SimpleNamespace(
        can_send_reminders=can_send_reminders,
        reminder_monthly_limit=limit,
        reminder_sent_this_cycle=sent,
        current_cycle_start_date=cycle_start,
    )


class CanSendTestCase(unittest.TestCase):
    def test_switch_off_always_refuses(self) -> None:
        for limit in (-1, 0, 10):
            self.assertFalse(can_send(clinic(can_send_reminders=False, limit=limit)))

    def test_zero_limit_disables_sending(self) -> None:
        self.assertFalse(can_send(clinic(limit=0)))

    def test_unlimited_ignores_counter(self) -> None:
        self.assertTrue(can_send(clinic(limit=-1, sent=10_000)))

    def test_positive_limit_compares_counter(self) -> None:
        self.assertTrue(can_send(clinic(limit=100, sent=99)))
        self.assertFalse(can_send(clinic(limit=100, sent=100)))
        self.assertFalse(can_send(clinic(limit=100, sent=150)))

    def test_missing_limit_reads_as_unlimited(self) -> None:
        subject = clinic(limit=None, sent=5)
        self.assertEqual(effective_limit(subject), -1)
        self.assertTrue(can_send(subject))


class UsageSummaryTestCase(unittest.TestCase):
    def test_thresholds(self) -> None:
        self.assertEqual(classify_percent(90), QuotaSeverity.CRITICAL)
        self.assertEqual(classify_percent(89.9), QuotaSeverity.WARNING)
        self.assertEqual(classify_percent(75), QuotaSeverity.WARNING)
        self.assertEqual(classify_percent(74.9), QuotaSeverity.NORMAL)

    def test_capped_usage(self) -> None:
        usage = usage_summary(clinic(limit=100, sent=80))
        self.assertEqual(usage.percent, 80)
        self.assertEqual(usage.severity, QuotaSeverity.WARNING)

    def test_percent_is_clamped_when_over_limit(self) -> None:
        usage = usage_summary(clinic(limit=10, sent=25))
        self.assertEqual(usage.percent, 100)
        self.assertEqual(usage.severity, QuotaSeverity.CRITICAL)
        self.assertEqual(usage.count, 25)

    def test_disabled_and_unlimited_have_no_percent(self) -> None:
        self.assertEqual(usage_summary(clinic(limit=0)).severity, QuotaSeverity.DISABLED)
        self.assertEqual(usage_summary(clinic(can_send_reminders=False, limit=50)).severity, QuotaSeverity.DISABLED)
        unlimited = usage_summary(clinic(limit=-1, sent=3))
        self.assertEqual(unlimited.severity, QuotaSeverity.UNLIMITED)
        self.assertIsNone(unlimited.percent)

    def test_as_dict_uses_plain_values(self) -> None:
        self.assertEqual(
            usage_summary(clinic(limit=4, sent=1)).as_dict(),
            {"count": 1, "limit": 4, "percent": 25.0, "severity": "normal"},
        )


class OwnerRemindersTestCase(unittest.TestCase):
    def test_clinic_switch_masks_owner_flag(self) -> None:
        self.assertTrue(owner_reminders_effective(True, True))
        self.assertFalse(owner_reminders_effective(False, True))
        self.assertFalse(owner_reminders_effective(True, False))


class CycleTestCase(unittest.TestCase):
    def test_next_cycle_is_one_calendar_month_later(self) -> None:
        self.assertEqual(next_cycle_start(date(2026, 3, 15)), date(2026, 4, 15))
        self.assertEqual(next_cycle_start(date(2026, 1, 31)), date(2026, 2, 28))
        self.assertEqual(next_cycle_start(date(2026, 12, 5)), date(2027, 1, 5))

    def test_rollover_due_from_anniversary(self) -> None:
        start = date(2026, 3, 15)
        self.assertFalse(cycle_rollover_due(start, date(2026, 4, 14)))
        self.assertTrue(cycle_rollover_due(start, date(2026, 4, 15)))
        self.assertTrue(cycle_rollover_due(start, date(2026, 6, 1)))

    def test_no_cycle_start_never_rolls_over(self) -> None:
        self.assertFalse(cycle_rollover_due(None, date(2026, 4, 15)))
