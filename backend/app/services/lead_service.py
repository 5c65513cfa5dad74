"""
LeadService — lead intake, admin listing and CSV export.

Intake never trusts a client price: the selection is cleaned at the input
boundary (unknown options dropped, quantities clamped) and priced again with
``pricing_service.compute_total`` against the catalog as it is right now.
"""
from __future__ import annotations

import csv
import io
import logging
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.lead import Lead
from app.schemas.lead import LeadCreate
from app.services.catalog_service import Catalog, CatalogService
from app.services.pricing_service import (
    PriceQuote,
    Selection,
    compute_total,
    format_price_whole,
    sanitize_selections,
)

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Vardas", "El. paštas", "Telefonas", "Miestas", "Planas", "Kaina", "Data"]


class LeadServiceError(Exception):
    """Domain error for lead operations."""

    def __init__(self, detail: str, *, code: str = "lead_error") -> None:
        super().__init__(detail)
        self.detail = detail
        self.code = code


def quote_for(catalog: Catalog, plan_id: UUID, selections: list[Selection]) -> PriceQuote:
    """
    Price a raw client selection against a loaded catalog.

    Raises:
        LeadServiceError: code ``plan_not_found`` when the plan is unknown or inactive.
    """
    plan = catalog.plan(plan_id)
    if plan is None:
        raise LeadServiceError("Planas nerastas", code="plan_not_found")
    options = catalog.options_by_id
    cleaned = sanitize_selections(selections, options)
    return compute_total(plan, cleaned, options)


def snapshot_options(quote: PriceQuote) -> list[dict[str, Any]]:
    """JSON-ready snapshot of the priced line items stored on the lead."""
    return [
        {
            "option_id": str(item.option_id),
            "label": item.label,
            "quantity": item.quantity,
            "unit_price_cents": item.unit_price_cents,
            "total_price_cents": item.total_cents,
        }
        for item in quote.line_items
    ]


class LeadService:
    """Create, query and export leads."""

    @staticmethod
    async def create_lead(db: AsyncSession, payload: LeadCreate) -> Lead:
        """
        Persist a lead with a server-side price.

        Uses flush() so the row participates in the request transaction;
        ``get_db`` commits or rolls back as a whole.
        """
        catalog = await CatalogService.load_catalog(db)
        selections = [Selection(s.option_id, s.quantity) for s in payload.selected_options]
        quote = quote_for(catalog, payload.plan_id, selections)
        plan = catalog.plan(payload.plan_id)

        if len(quote.line_items) != len(selections):
            logger.info(
                "lead_stale_options plan=%s submitted=%d priced=%d",
                payload.plan_id,
                len(selections),
                len(quote.line_items),
            )

        lead = Lead(
            name=payload.name,
            email=str(payload.email),
            phone=payload.phone,
            city=payload.city,
            comment=payload.comment,
            plan_id=plan.id,
            plan_name=plan.name,
            selected_options=snapshot_options(quote),
            total_price_cents=quote.total_cents,
        )
        db.add(lead)
        await db.flush()
        await db.refresh(lead)

        logger.info("lead_created id=%s plan=%s total=%d", lead.id, plan.slug, lead.total_price_cents)
        return lead

    @staticmethod
    def _search_filter(search: Optional[str]) -> list[Any]:
        if not search:
            return []
        term = f"%{search.strip()}%"
        return [
            or_(
                Lead.name.ilike(term),
                Lead.email.ilike(term),
                Lead.city.ilike(term),
                Lead.plan_name.ilike(term),
            )
        ]

    @staticmethod
    async def list_leads(
        db: AsyncSession,
        *,
        page: int = 1,
        limit: int = 50,
        search: Optional[str] = None,
    ) -> tuple[list[Lead], int]:
        """
        Paginated lead list, newest first.

        Returns:
            Tuple of (leads on the page, total matching count).
        """
        filters = LeadService._search_filter(search)

        count_q = select(func.count()).select_from(Lead)
        if filters:
            count_q = count_q.where(*filters)
        total = int((await db.execute(count_q)).scalar_one())

        q = select(Lead).order_by(desc(Lead.created_at)).offset((page - 1) * limit).limit(limit)
        if filters:
            q = q.where(*filters)
        leads = list((await db.execute(q)).scalars().all())
        return leads, total

    @staticmethod
    async def export_leads(db: AsyncSession, *, search: Optional[str] = None) -> list[Lead]:
        """All matching leads, newest first, for CSV export."""
        q = select(Lead).order_by(desc(Lead.created_at))
        filters = LeadService._search_filter(search)
        if filters:
            q = q.where(*filters)
        return list((await db.execute(q)).scalars().all())

    @staticmethod
    async def get_lead(db: AsyncSession, lead_id: UUID) -> Lead:
        lead = (await db.execute(select(Lead).where(Lead.id == lead_id))).scalar_one_or_none()
        if lead is None:
            raise LeadServiceError("Užklausa nerasta", code="lead_not_found")
        return lead

    @staticmethod
    async def dashboard_stats(db: AsyncSession) -> dict[str, Any]:
        """Counts and totals for the admin dashboard."""
        total_leads = int((await db.execute(select(func.count()).select_from(Lead))).scalar_one())
        total_value = int(
            (await db.execute(select(func.coalesce(func.sum(Lead.total_price_cents), 0)))).scalar_one()
        )
        plans = await CatalogService.list_plans(db)
        recent = (
            await db.execute(select(Lead).order_by(desc(Lead.created_at)).limit(5))
        ).scalars().all()
        return {
            "active_plans": len(plans),
            "total_leads": total_leads,
            "total_value_cents": total_value,
            "recent_leads": list(recent),
        }

    @staticmethod
    def leads_to_csv(leads: list[Lead]) -> str:
        """
        Render leads as CSV with every cell quoted, matching the admin export.
        """
        output = io.StringIO()
        writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for lead in leads:
            created_at = lead.created_at
            writer.writerow(
                [
                    lead.name,
                    lead.email,
                    lead.phone or "",
                    lead.city or "",
                    lead.plan_name or "",
                    format_price_whole(lead.total_price_cents),
                    created_at.strftime("%Y-%m-%d %H:%M") if isinstance(created_at, datetime) else "",
                ]
            )
        return output.getvalue()
