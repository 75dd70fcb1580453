"""Run the daily reminder job once: cycle rollover, then WhatsApp dispatch.

Meant for cron (the clinic reminders went out at 13:00 UTC):

    python -m vetcare.scripts.run_reminders
"""

import logging
import sys

from vetcare.core.config import settings
from vetcare.core.logging import configure_logging
from vetcare.db.session import SessionLocal
from vetcare.integrations.messaging import MessagingClient
from vetcare.services.reminders import run_daily

logger = logging.getLogger("vetcare.scripts.run_reminders")


def main() -> int:
    configure_logging()
    if not settings.messaging_sender_number:
        logger.error("MESSAGING_SENDER_NUMBER is not set; no reminders sent")
        return 1

    db = SessionLocal()
    try:
        with MessagingClient() as sender:
            report = run_daily(db, sender)
    finally:
        db.close()

    logger.info(
        "Reminder run complete: sent=%d failed=%d no_phone=%d quota=%d",
        report.sent,
        report.failed,
        report.skipped_no_phone,
        report.skipped_quota,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
