"""Module: reminders.

Daily reminder job: cycle rollover for capped clinics, then WhatsApp
dispatch for visits whose reminder date falls today or tomorrow (UTC).
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from vetcare.core.config import settings
from vetcare.core.dates import utc_day_range, utcnow
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.visit import Visit
from vetcare.integrations.messaging import MessagingError
from vetcare.services.reminder_quota import can_send, cycle_rollover_due

logger = logging.getLogger(__name__)


class ReminderSender(Protocol):
    def send_whatsapp(self, to: str, body: str) -> str: ...


@dataclass
class DispatchReport:
    sent: int = 0
    failed: int = 0
    skipped_no_phone: int = 0
    skipped_quota: int = 0

    @property
    def processed(self) -> int:
        return self.sent + self.failed + self.skipped_no_phone + self.skipped_quota


def format_whatsapp_number(phone: str | None, country_code: str | None = None) -> str:
    """Normalize a local or international number to E.164 (``+<cc><digits>``)."""
    if not phone:
        return ""
    code = country_code or settings.default_country_code
    digits = re.sub(r"\D", "", phone)
    if digits.startswith("0"):
        digits = digits[1:]
    if not digits.startswith(code):
        digits = f"{code}{digits}"
    return f"+{digits}"


def _format_due_date(value: datetime | None) -> str:
    if value is None:
        return "soon"
    return f"{value:%b} {value.day}, {value.year}"


def build_reminder_message(clinic: Clinic, pet: Pet, visit: Visit) -> str:
    clinic_name = clinic.name or "[Clinic Name Unavailable]"
    clinic_phone = clinic.phone or "[Clinic Phone Unavailable]"
    pet_name = pet.name or "[Pet Name Unavailable]"
    visit_type = visit.visit_type or "health check"
    return (
        f"Reminder from {clinic_name}: {pet_name}'s {visit_type} visit is due on "
        f"{_format_due_date(visit.next_reminder_date)}. Please call us at {clinic_phone} to schedule."
    )


def reset_reminder_cycles(db: Session, today: date | None = None) -> int:
    """Open a new cycle for every capped clinic whose current one has run a full month."""
    today = today or utcnow().date()
    clinics = db.execute(
        select(Clinic).where(
            Clinic.is_active.is_(True),
            Clinic.subscription_end_date.is_not(None),
            Clinic.subscription_end_date >= today,
            Clinic.reminder_monthly_limit > 0,
            Clinic.current_cycle_start_date.is_not(None),
        )
    ).scalars().all()

    reset = 0
    for clinic in clinics:
        if not cycle_rollover_due(clinic.current_cycle_start_date, today):
            continue
        logger.info(
            "Clinic %s: new reminder cycle from %s (previous cycle sent %s)",
            clinic.clinic_id,
            today,
            clinic.reminder_sent_this_cycle,
        )
        clinic.reminder_sent_this_cycle = 0
        clinic.current_cycle_start_date = today
        reset += 1

    db.commit()
    return reset


def due_reminders(db: Session, now: datetime | None = None) -> list[tuple[Visit, Pet, Owner, Clinic]]:
    current = now or utcnow()
    start, end = utc_day_range(current, days_ahead=1)
    rows = db.execute(
        select(Visit, Pet, Owner, Clinic)
        .join(Pet, Pet.pet_id == Visit.pet_id)
        .join(Owner, Owner.owner_id == Pet.owner_id)
        .join(Clinic, Clinic.clinic_id == Owner.clinic_id)
        .where(
            Visit.reminder_sent.is_(False),
            Visit.is_reminder_enabled.is_(True),
            Visit.next_reminder_date >= start,
            Visit.next_reminder_date <= end,
            Owner.allow_automated_reminders.is_(True),
            Clinic.is_active.is_(True),
            Clinic.can_send_reminders.is_(True),
            Clinic.subscription_end_date.is_not(None),
            Clinic.subscription_end_date >= current.date(),
        )
        .order_by(Visit.next_reminder_date)
    ).all()
    return [tuple(row) for row in rows]


def dispatch_due_reminders(db: Session, sender: ReminderSender, now: datetime | None = None) -> DispatchReport:
    report = DispatchReport()
    due = due_reminders(db, now)
    logger.info("Found %d visits needing reminders", len(due))

    for visit, pet, owner, clinic in due:
        if not owner.phone or not owner.phone.strip():
            logger.warning("No phone number for owner of pet %s (visit %s)", pet.name, visit.visit_id)
            report.skipped_no_phone += 1
            continue

        # Quota exhausted or disabled by limit: the reminder is consumed without sending.
        if not can_send(clinic):
            logger.warning(
                "Clinic %s reminder quota reached (%s/%s); skipping visit %s",
                clinic.clinic_id,
                clinic.reminder_sent_this_cycle,
                clinic.reminder_monthly_limit,
                visit.visit_id,
            )
            visit.reminder_sent = True
            db.commit()
            report.skipped_quota += 1
            continue

        to = f"whatsapp:{format_whatsapp_number(owner.phone)}"
        try:
            sid = sender.send_whatsapp(to, build_reminder_message(clinic, pet, visit))
        except MessagingError as exc:
            logger.error("Failed to send WhatsApp reminder to %s: %s", to, exc)
            visit.reminder_sent = True
            db.commit()
            report.failed += 1
            continue

        logger.info("WhatsApp reminder sent to %s for pet %s (sid %s)", to, pet.name, sid)
        visit.reminder_sent = True
        if (clinic.reminder_monthly_limit or 0) > 0:
            clinic.reminder_sent_this_cycle = (clinic.reminder_sent_this_cycle or 0) + 1
        db.commit()
        report.sent += 1

    return report


def run_daily(db: Session, sender: ReminderSender, now: datetime | None = None) -> DispatchReport:
    current = now or utcnow()
    reset = reset_reminder_cycles(db, current.date())
    if reset:
        logger.info("Reset reminder cycles for %d clinics", reset)
    return dispatch_due_reminders(db, sender, current)
