"""
Public lead intake endpoint.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limit import lead_rate_limit
from app.schemas.lead import LeadCreate, LeadCreatedResponse
from app.services.lead_service import LeadService, LeadServiceError
from app.workers.tasks.email_tasks import queue_lead_emails

logger = logging.getLogger(__name__)

router = APIRouter()


def _raise_lead_http_error(exc: LeadServiceError) -> None:
    """Convert lead domain errors to HTTP responses."""
    status_code = status.HTTP_400_BAD_REQUEST
    if exc.code in {"plan_not_found", "lead_not_found"}:
        status_code = status.HTTP_404_NOT_FOUND
    raise HTTPException(status_code=status_code, detail=exc.detail) from exc


@router.post(
    "",
    response_model=LeadCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(lead_rate_limit)],
)
async def create_lead(
    body: LeadCreate,
    db: AsyncSession = Depends(get_db),
) -> LeadCreatedResponse:
    """
    Submit an inquiry. The returned total is the server-side price.
    """
    try:
        lead = await LeadService.create_lead(db, body)
    except LeadServiceError as exc:
        _raise_lead_http_error(exc)

    # Lead must be durable before the worker looks it up.
    await db.commit()

    try:
        queue_lead_emails(str(lead.id))
    except Exception:
        logger.exception("Failed to queue emails for lead %s", lead.id)

    return LeadCreatedResponse(
        id=lead.id,
        plan_name=lead.plan_name,
        selected_options=lead.selected_options,
        total_price_cents=lead.total_price_cents,
    )
