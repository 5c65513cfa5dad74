"""
EmailService — sends lead emails via the Mailtrap SDK and records logs.

Synchronous (Celery workers). Configuration comes from ``settings``.
"""
from __future__ import annotations

import logging
from datetime import datetime
from html import escape
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.email_log import EmailLog
from app.models.lead import Lead
from app.services.pricing_service import format_price

logger = logging.getLogger(__name__)

BRAND_NAME = "KNX Namų Automatizacija"


class EmailService:
    """Sends transactional lead emails using Mailtrap and logs every attempt."""

    def __init__(self, db: Session) -> None:
        self._db = db
        self._api_key: Optional[str] = settings.MAILTRAP_API_KEY or None
        self._sender_email = settings.MAIL_SENDER_EMAIL
        self._sender_name = settings.MAIL_SENDER_NAME

    def is_configured(self) -> bool:
        """Email is enabled and an API key is present."""
        return bool(settings.EMAIL_ENABLED and self._api_key)

    # ------------------------------------------------------------------
    # Log helper
    # ------------------------------------------------------------------

    def _log(
        self,
        *,
        recipient_email: str,
        lead_id: Optional[UUID],
        email_type: str,
        subject: str,
        status: str,
        error_message: Optional[str] = None,
    ) -> None:
        """Persist one row in email_logs."""
        entry = EmailLog(
            recipient_email=recipient_email,
            lead_id=lead_id,
            email_type=email_type,
            subject=subject,
            status=status,
            error_message=error_message,
        )
        self._db.add(entry)
        self._db.flush()

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def _send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        *,
        email_type: str,
        lead_id: Optional[UUID] = None,
    ) -> None:
        """Send through Mailtrap and record the outcome. Re-raises on failure."""
        import mailtrap as mt

        try:
            mail = mt.Mail(
                sender=mt.Address(email=self._sender_email, name=self._sender_name),
                to=[mt.Address(email=to_email)],
                subject=subject,
                html=html_body,
                category="lead",
            )
            client = mt.MailtrapClient(token=self._api_key)
            client.send(mail)

            self._log(
                recipient_email=to_email,
                lead_id=lead_id,
                email_type=email_type,
                subject=subject,
                status="sent",
            )
            logger.info("Email sent to %s: %s", to_email, subject)

        except Exception as exc:
            self._log(
                recipient_email=to_email,
                lead_id=lead_id,
                email_type=email_type,
                subject=subject,
                status="failed",
                error_message=str(exc)[:500],
            )
            logger.error("Email to %s failed: %s", to_email, exc)
            # Keep the failure row when the worker rolls back for a retry.
            self._db.commit()
            raise

    def log_skipped(
        self,
        to_email: str,
        email_type: str,
        *,
        lead_id: Optional[UUID] = None,
    ) -> None:
        """Record that an email was skipped (service not configured)."""
        self._log(
            recipient_email=to_email,
            lead_id=lead_id,
            email_type=email_type,
            subject="(skipped)",
            status="skipped",
            error_message="email_not_configured",
        )

    # ------------------------------------------------------------------
    # Lead emails
    # ------------------------------------------------------------------

    def send_lead_confirmation(self, lead: Lead) -> None:
        """Confirmation with the configuration summary, to the customer."""
        subject = f"Jūsų užklausa - {lead.plan_name or 'KNX Planas'}"
        self._send(
            lead.email,
            subject,
            render_lead_email(lead, is_admin=False),
            email_type="lead_confirmation",
            lead_id=lead.id,
        )

    def send_lead_notification(self, lead: Lead, admin_email: str) -> None:
        """New-lead notification, to the site owner."""
        subject = f"Nauja užklausa: {lead.name} - {lead.plan_name or 'Nenurodyta'}"
        self._send(
            admin_email,
            subject,
            render_lead_email(lead, is_admin=True),
            email_type="lead_notification",
            lead_id=lead.id,
        )


def _options_rows(options: list[dict[str, Any]]) -> str:
    cell = "padding:8px 12px;border-bottom:1px solid #e5e7eb"
    return "".join(
        f"""
      <tr>
        <td style="{cell}">{escape(str(opt.get("label", "")))}</td>
        <td style="{cell};text-align:center">{int(opt.get("quantity", 0))}</td>
        <td style="{cell};text-align:right">{format_price(int(opt.get("total_price_cents", 0)))}</td>
      </tr>"""
        for opt in options
    )


def render_lead_email(lead: Lead, *, is_admin: bool) -> str:
    """Render the inline-styled HTML for the customer or admin email.

    User supplied fields are HTML-escaped.
    """
    options = list(lead.selected_options or [])
    name = escape(lead.name)

    if is_admin:
        greeting = f'<p style="color:#374151;font-size:16px">Gauta nauja užklausa iš <strong>{name}</strong>.</p>'
        subtitle = "Nauja užklausa"
        closing = "Susisiekite su klientu kuo greičiau."
    else:
        greeting = (
            f'<p style="color:#374151;font-size:16px">Sveiki, <strong>{name}</strong>!</p>'
            '<p style="color:#374151;font-size:16px">Dėkojame už jūsų užklausą. '
            "Štai jūsų pasirinkta konfigūracija:</p>"
        )
        subtitle = "Jūsų užklausos patvirtinimas"
        closing = "Su jumis susisieksime artimiausiu metu."

    options_table = ""
    if options:
        options_table = f"""
      <h3 style="color:#374151;font-size:16px;margin-bottom:12px">Pasirinktos opcijos</h3>
      <table style="width:100%;border-collapse:collapse;margin-bottom:24px">
        <thead>
          <tr style="background-color:#f3f4f6">
            <th style="padding:12px;text-align:left;font-size:14px;color:#6b7280">Opcija</th>
            <th style="padding:12px;text-align:center;font-size:14px;color:#6b7280">Kiekis</th>
            <th style="padding:12px;text-align:right;font-size:14px;color:#6b7280">Kaina</th>
          </tr>
        </thead>
        <tbody>{_options_rows(options)}
        </tbody>
      </table>"""

    contact_rows = [("El. paštas:", lead.email)]
    if lead.phone:
        contact_rows.append(("Telefonas:", lead.phone))
    if lead.city:
        contact_rows.append(("Miestas/Objektas:", lead.city))
    contact_html = "".join(
        f'<tr><td style="padding:4px 0;color:#6b7280;width:140px">{label}</td>'
        f'<td style="padding:4px 0;color:#374151">{escape(value)}</td></tr>'
        for label, value in contact_rows
    )
    comment_html = ""
    if lead.comment:
        comment_html = (
            '<div style="margin-top:16px"><p style="color:#6b7280;margin:0 0 8px 0">Komentaras:</p>'
            '<p style="color:#374151;margin:0;padding:12px;background-color:#f9fafb;border-radius:6px">'
            f"{escape(lead.comment)}</p></div>"
        )

    return f"""<!DOCTYPE html>
<html lang="lt">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width,initial-scale=1">
</head>
<body style="margin:0;padding:0;font-family:'Segoe UI',Tahoma,Geneva,Verdana,sans-serif;background-color:#f3f4f6">
  <div style="max-width:600px;margin:20px auto;background-color:#ffffff;border-radius:8px;overflow:hidden;
              box-shadow:0 4px 6px -1px rgba(0,0,0,0.1)">
    <!-- Header -->
    <div style="background:linear-gradient(135deg,#1e40af 0%,#3b82f6 100%);padding:32px;text-align:center">
      <h1 style="color:#ffffff;margin:0;font-size:24px;font-weight:600">{BRAND_NAME}</h1>
      <p style="color:#bfdbfe;margin:8px 0 0 0;font-size:14px">{subtitle}</p>
    </div>
    <!-- Content -->
    <div style="padding:32px">
      {greeting}
      <div style="background-color:#f0f9ff;border-radius:8px;padding:16px;margin:24px 0">
        <h2 style="margin:0 0 8px 0;color:#1e40af;font-size:18px">Pasirinktas planas</h2>
        <p style="margin:0;color:#374151;font-size:20px;font-weight:600">{escape(lead.plan_name or "Nenurodyta")}</p>
      </div>
      {options_table}
      <div style="background-color:#1e40af;border-radius:8px;padding:20px;text-align:center">
        <p style="margin:0 0 4px 0;color:#bfdbfe;font-size:14px">Bendra kaina</p>
        <p style="margin:0;color:#ffffff;font-size:32px;font-weight:700">{format_price(lead.total_price_cents)}</p>
      </div>
      <div style="margin-top:24px;padding-top:24px;border-top:1px solid #e5e7eb">
        <h3 style="color:#374151;font-size:16px;margin-bottom:12px">Kontaktinė informacija</h3>
        <table style="width:100%">{contact_html}</table>
        {comment_html}
      </div>
    </div>
    <!-- Footer -->
    <div style="background-color:#f9fafb;padding:24px;text-align:center;border-top:1px solid #e5e7eb">
      <p style="margin:0;color:#6b7280;font-size:14px">{closing}</p>
      <p style="margin:12px 0 0 0;color:#9ca3af;font-size:12px">&copy; {datetime.utcnow().year} {BRAND_NAME}</p>
    </div>
  </div>
</body>
</html>"""
