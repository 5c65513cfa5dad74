"""
Celery tasks for lead emails via Mailtrap.

Customer confirmation and admin notification are separate tasks so a retry
of one never re-sends the other. Each attempt is recorded
(sent/failed/skipped) in the email_logs table.
"""
from __future__ import annotations

import logging
from typing import Optional

from app.workers.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(
    name="app.workers.tasks.email_tasks.send_lead_confirmation_email",
    autoretry_for=(Exception,),
    max_retries=3,
    retry_backoff=True,
)
def send_lead_confirmation_email(lead_id: str) -> dict:
    """Send the configuration summary to the customer."""
    from uuid import UUID

    from app.core.database_sync import get_sync_db
    from app.models.lead import Lead
    from app.services.email_service import EmailService

    with get_sync_db() as db:
        lead = db.get(Lead, UUID(lead_id))
        if lead is None:
            logger.warning("Lead %s not found, skipping confirmation", lead_id)
            return {"status": "skipped", "reason": "lead_not_found"}

        svc = EmailService(db)
        if not svc.is_configured():
            logger.info("Email not configured, skipping confirmation for %s", lead.email)
            svc.log_skipped(lead.email, "lead_confirmation", lead_id=lead.id)
            return {"status": "skipped", "reason": "email_not_configured"}
        svc.send_lead_confirmation(lead)
        return {"status": "sent", "to": lead.email}


@celery_app.task(
    name="app.workers.tasks.email_tasks.send_lead_notification_email",
    autoretry_for=(Exception,),
    max_retries=3,
    retry_backoff=True,
)
def send_lead_notification_email(lead_id: str, admin_email: Optional[str] = None) -> dict:
    """Notify the site owner about a new lead."""
    from uuid import UUID

    from app.core.config import settings
    from app.core.database_sync import get_sync_db
    from app.models.lead import Lead
    from app.services.email_service import EmailService

    to_email = admin_email or settings.ADMIN_NOTIFICATION_EMAIL
    if not to_email:
        return {"status": "skipped", "reason": "no_admin_email"}

    with get_sync_db() as db:
        lead = db.get(Lead, UUID(lead_id))
        if lead is None:
            logger.warning("Lead %s not found, skipping notification", lead_id)
            return {"status": "skipped", "reason": "lead_not_found"}

        svc = EmailService(db)
        if not svc.is_configured():
            logger.info("Email not configured, skipping notification for lead %s", lead_id)
            svc.log_skipped(to_email, "lead_notification", lead_id=lead.id)
            return {"status": "skipped", "reason": "email_not_configured"}
        svc.send_lead_notification(lead, to_email)
        return {"status": "sent", "to": to_email}


def queue_lead_emails(lead_id: str) -> None:
    """Enqueue both lead emails. Broker errors propagate to the caller."""
    send_lead_confirmation_email.delay(lead_id)
    send_lead_notification_email.delay(lead_id)
