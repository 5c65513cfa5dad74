"""
Lead email rendering, sending and logging tests.
"""
from __future__ import annotations

import sys
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest

from app.core.config import settings
from app.models.email_log import EmailLog
from app.services.email_service import BRAND_NAME, EmailService, render_lead_email


def _lead(**overrides) -> SimpleNamespace:
    data = {
        "id": uuid4(),
        "name": "Jonas Jonaitis",
        "email": "jonas@example.com",
        "phone": "+37060000000",
        "city": "Vilnius",
        "comment": None,
        "plan_name": "Pradinis",
        "selected_options": [
            {
                "option_id": str(uuid4()),
                "label": "Apšvietimo taškas",
                "quantity": 10,
                "unit_price_cents": 4500,
                "total_price_cents": 45000,
            }
        ],
        "total_price_cents": 344900,
        "created_at": datetime(2026, 3, 5, 14, 7),
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def _logged(db: MagicMock) -> list[EmailLog]:
    return [c.args[0] for c in db.add.call_args_list]


def test_customer_email_contains_summary() -> None:
    html = render_lead_email(_lead(), is_admin=False)

    assert "Sveiki, <strong>Jonas Jonaitis</strong>!" in html
    assert "Apšvietimo taškas" in html
    assert "450,00 €" in html
    assert "3449,00 €" in html
    assert BRAND_NAME in html
    assert "Su jumis susisieksime artimiausiu metu." in html


def test_admin_email_has_contact_block() -> None:
    html = render_lead_email(_lead(comment="Skambinti vakare"), is_admin=True)

    assert "Gauta nauja užklausa" in html
    assert "Miestas/Objektas:" in html
    assert "Skambinti vakare" in html


def test_user_fields_are_escaped() -> None:
    html = render_lead_email(
        _lead(name="<script>alert(1)</script>", comment="a & b", selected_options=[]),
        is_admin=True,
    )

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "a &amp; b" in html
    assert "Pasirinktos opcijos" not in html


def test_not_configured_without_api_key(monkeypatch) -> None:
    monkeypatch.setattr(settings, "EMAIL_ENABLED", True)
    monkeypatch.setattr(settings, "MAILTRAP_API_KEY", "")

    assert EmailService(MagicMock()).is_configured() is False


def test_send_confirmation_logs_sent(monkeypatch) -> None:
    monkeypatch.setattr(settings, "EMAIL_ENABLED", True)
    monkeypatch.setattr(settings, "MAILTRAP_API_KEY", "token")
    db = MagicMock()
    fake_mt = MagicMock()
    lead = _lead()

    with patch.dict(sys.modules, {"mailtrap": fake_mt}):
        EmailService(db).send_lead_confirmation(lead)

    fake_mt.MailtrapClient.assert_called_once_with(token="token")
    fake_mt.MailtrapClient.return_value.send.assert_called_once()
    assert fake_mt.Mail.call_args.kwargs["subject"] == "Jūsų užklausa - Pradinis"
    (entry,) = _logged(db)
    assert entry.status == "sent"
    assert entry.email_type == "lead_confirmation"
    assert entry.recipient_email == "jonas@example.com"
    assert entry.lead_id == lead.id


def test_send_failure_is_logged_and_reraised(monkeypatch) -> None:
    monkeypatch.setattr(settings, "EMAIL_ENABLED", True)
    monkeypatch.setattr(settings, "MAILTRAP_API_KEY", "token")
    db = MagicMock()
    fake_mt = MagicMock()
    fake_mt.MailtrapClient.return_value.send.side_effect = RuntimeError("smtp down")

    with patch.dict(sys.modules, {"mailtrap": fake_mt}):
        with pytest.raises(RuntimeError):
            EmailService(db).send_lead_notification(_lead(plan_name=None), "admin@example.com")

    (entry,) = _logged(db)
    assert entry.status == "failed"
    assert entry.error_message == "smtp down"
    assert entry.subject == "Nauja užklausa: Jonas Jonaitis - Nenurodyta"


def test_log_skipped() -> None:
    db = MagicMock()
    lead_id = uuid4()

    EmailService(db).log_skipped("jonas@example.com", "lead_confirmation", lead_id=lead_id)

    (entry,) = _logged(db)
    assert entry.status == "skipped"
    assert entry.error_message == "email_not_configured"
    assert entry.lead_id == lead_id
