"""
Admin endpoints — dashboard, plans, configurator options, feature matrix, leads, email log.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models.email_log import EmailLog
from app.models.feature import Feature, FeatureGroup
from app.models.option import Option, OptionGroup
from app.models.plan import Plan
from app.schemas.admin import (
    DashboardStats,
    EmailLogResponse,
    FeatureCreate,
    FeatureGroupCreate,
    FeatureGroupUpdate,
    FeatureUpdate,
    OptionAdminResponse,
    OptionCreate,
    OptionGroupAdminResponse,
    OptionGroupCreate,
    OptionGroupUpdate,
    OptionUpdate,
    PlanCreate,
    PlanFeatureBatchRequest,
    PlanFeatureBatchResponse,
    PlanResponse,
    PlanUpdate,
)
from app.schemas.lead import LeadListResponse, LeadResponse, PaginationMeta
from app.schemas.plan import FeatureGroupResponse, FeatureResponse
from app.services.catalog_service import CatalogService, CatalogServiceError
from app.services.lead_service import LeadService, LeadServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


def _raise_lead_http_error(exc: LeadServiceError) -> None:
    """Convert lead domain errors to HTTP responses."""
    status_code = status.HTTP_400_BAD_REQUEST
    if exc.code == "lead_not_found":
        status_code = status.HTTP_404_NOT_FOUND
    raise HTTPException(status_code=status_code, detail=exc.detail) from exc


def _raise_catalog_http_error(exc: CatalogServiceError) -> None:
    """Convert catalog domain errors to HTTP responses."""
    status_code = status.HTTP_400_BAD_REQUEST
    if exc.code.endswith("_not_found"):
        status_code = status.HTTP_404_NOT_FOUND
    elif exc.code == "value_type_mismatch":
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    raise HTTPException(status_code=status_code, detail=exc.detail) from exc


async def _get_or_404(db: AsyncSession, model: Any, row_id: UUID, detail: str) -> Any:
    row = (await db.execute(select(model).where(model.id == row_id))).scalar_one_or_none()
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return row


def _apply_changes(row: Any, update_data: dict[str, Any]) -> dict[str, Any]:
    changes = {}
    for field, value in update_data.items():
        old = getattr(row, field)
        if old != value:
            changes[field] = {"from": old, "to": value}
            setattr(row, field, value)
    return changes


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
) -> DashboardStats:
    """Aggregated dashboard statistics."""
    stats = await LeadService.dashboard_stats(db)
    return DashboardStats(
        active_plans=stats["active_plans"],
        total_leads=stats["total_leads"],
        total_value_cents=stats["total_value_cents"],
        recent_leads=[LeadResponse.model_validate(lead) for lead in stats["recent_leads"]],
    )


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

@router.get("/plans", response_model=list[PlanResponse])
async def list_plans(
    db: AsyncSession = Depends(get_db),
) -> list[PlanResponse]:
    """List all plans (including inactive)."""
    plans = await CatalogService.list_plans(db, include_inactive=True)
    return [PlanResponse.model_validate(p) for p in plans]


@router.post("/plans", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    body: PlanCreate,
    db: AsyncSession = Depends(get_db),
) -> PlanResponse:
    """Create a plan. Slugs are unique."""
    existing = (
        await db.execute(select(Plan).where(Plan.slug == body.slug))
    ).scalar_one_or_none()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Planas '{body.slug}' jau egzistuoja",
        )

    plan = Plan(**body.model_dump())
    db.add(plan)
    await db.flush()
    await db.refresh(plan)
    logger.info("Plan created: %s (%s)", plan.slug, plan.id)
    return PlanResponse.model_validate(plan)


@router.patch("/plans/{plan_id}", response_model=PlanResponse)
async def update_plan(
    plan_id: UUID,
    body: PlanUpdate,
    db: AsyncSession = Depends(get_db),
) -> PlanResponse:
    """Partially update a plan."""
    plan = await _get_or_404(db, Plan, plan_id, "Planas nerastas")

    update_data = body.model_dump(exclude_unset=True)
    if update_data.get("slug") is None:
        update_data.pop("slug", None)
    if "slug" in update_data and update_data["slug"] != plan.slug:
        clash = (
            await db.execute(select(Plan).where(Plan.slug == update_data["slug"]))
        ).scalar_one_or_none()
        if clash:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Planas '{update_data['slug']}' jau egzistuoja",
            )

    changes = _apply_changes(plan, update_data)
    if changes:
        plan.updated_at = datetime.utcnow()
        logger.info("Plan %s updated: %s", plan.id, sorted(changes))

    await db.flush()
    await db.refresh(plan)
    return PlanResponse.model_validate(plan)


@router.delete("/plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(
    plan_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a plan. Its matrix values go with it; leads keep the plan name."""
    plan = await _get_or_404(db, Plan, plan_id, "Planas nerastas")
    await db.delete(plan)
    await db.flush()
    logger.info("Plan deleted: %s", plan_id)


# ---------------------------------------------------------------------------
# Option groups / options
# ---------------------------------------------------------------------------

@router.get("/option-groups", response_model=list[OptionGroupAdminResponse])
async def list_option_groups(
    db: AsyncSession = Depends(get_db),
) -> list[OptionGroupAdminResponse]:
    rows = (await db.execute(select(OptionGroup).order_by(OptionGroup.sort_order))).scalars().all()
    return [OptionGroupAdminResponse.model_validate(r) for r in rows]


@router.post(
    "/option-groups",
    response_model=OptionGroupAdminResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_option_group(
    body: OptionGroupCreate,
    db: AsyncSession = Depends(get_db),
) -> OptionGroupAdminResponse:
    group = OptionGroup(**body.model_dump())
    db.add(group)
    await db.flush()
    await db.refresh(group)
    return OptionGroupAdminResponse.model_validate(group)


@router.patch("/option-groups/{group_id}", response_model=OptionGroupAdminResponse)
async def update_option_group(
    group_id: UUID,
    body: OptionGroupUpdate,
    db: AsyncSession = Depends(get_db),
) -> OptionGroupAdminResponse:
    group = await _get_or_404(db, OptionGroup, group_id, "Parinkčių grupė nerasta")
    update_data = {
        k: v for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k == "description"
    }
    _apply_changes(group, update_data)
    await db.flush()
    await db.refresh(group)
    return OptionGroupAdminResponse.model_validate(group)


@router.delete("/option-groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_option_group(
    group_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a group together with its options."""
    group = await _get_or_404(db, OptionGroup, group_id, "Parinkčių grupė nerasta")
    await db.delete(group)
    await db.flush()


@router.get("/options", response_model=list[OptionAdminResponse])
async def list_options(
    group_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[OptionAdminResponse]:
    stmt = select(Option).order_by(Option.sort_order)
    if group_id is not None:
        stmt = stmt.where(Option.group_id == group_id)
    rows = (await db.execute(stmt)).scalars().all()
    return [OptionAdminResponse.model_validate(r) for r in rows]


@router.post("/options", response_model=OptionAdminResponse, status_code=status.HTTP_201_CREATED)
async def create_option(
    body: OptionCreate,
    db: AsyncSession = Depends(get_db),
) -> OptionAdminResponse:
    await _get_or_404(db, OptionGroup, body.group_id, "Parinkčių grupė nerasta")
    option = Option(**body.model_dump())
    db.add(option)
    await db.flush()
    await db.refresh(option)
    return OptionAdminResponse.model_validate(option)


@router.patch("/options/{option_id}", response_model=OptionAdminResponse)
async def update_option(
    option_id: UUID,
    body: OptionUpdate,
    db: AsyncSession = Depends(get_db),
) -> OptionAdminResponse:
    """Partially update an option; the merged quantities must stay ordered."""
    option = await _get_or_404(db, Option, option_id, "Parinktis nerasta")
    update_data = {
        k: v for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k == "description"
    }

    min_qty = update_data.get("min_qty", option.min_qty)
    max_qty = update_data.get("max_qty", option.max_qty)
    default_qty = update_data.get("default_qty", option.default_qty)
    if not min_qty <= default_qty <= max_qty:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="quantities must satisfy min_qty <= default_qty <= max_qty",
        )
    if "group_id" in update_data:
        await _get_or_404(db, OptionGroup, update_data["group_id"], "Parinkčių grupė nerasta")

    _apply_changes(option, update_data)
    await db.flush()
    await db.refresh(option)
    return OptionAdminResponse.model_validate(option)


@router.delete("/options/{option_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_option(
    option_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    option = await _get_or_404(db, Option, option_id, "Parinktis nerasta")
    await db.delete(option)
    await db.flush()


# ---------------------------------------------------------------------------
# Feature groups / features / plan features
# ---------------------------------------------------------------------------

@router.post(
    "/feature-groups",
    response_model=FeatureGroupResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_feature_group(
    body: FeatureGroupCreate,
    db: AsyncSession = Depends(get_db),
) -> FeatureGroupResponse:
    group = FeatureGroup(**body.model_dump())
    db.add(group)
    await db.flush()
    await db.refresh(group)
    return FeatureGroupResponse.model_validate(group)


@router.patch("/feature-groups/{group_id}", response_model=FeatureGroupResponse)
async def update_feature_group(
    group_id: UUID,
    body: FeatureGroupUpdate,
    db: AsyncSession = Depends(get_db),
) -> FeatureGroupResponse:
    group = await _get_or_404(db, FeatureGroup, group_id, "Funkcijų grupė nerasta")
    update_data = body.model_dump(exclude_unset=True)
    for required in ("title", "sort_order", "tooltip_enabled"):
        if update_data.get(required, ...) is None:
            update_data.pop(required)
    _apply_changes(group, update_data)
    await db.flush()
    await db.refresh(group)
    return FeatureGroupResponse.model_validate(group)


@router.delete("/feature-groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feature_group(
    group_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a group; its features and their plan values cascade."""
    group = await _get_or_404(db, FeatureGroup, group_id, "Funkcijų grupė nerasta")
    await db.delete(group)
    await db.flush()


@router.post("/features", response_model=FeatureResponse, status_code=status.HTTP_201_CREATED)
async def create_feature(
    body: FeatureCreate,
    db: AsyncSession = Depends(get_db),
) -> FeatureResponse:
    await _get_or_404(db, FeatureGroup, body.group_id, "Funkcijų grupė nerasta")
    feature = Feature(**body.model_dump())
    db.add(feature)
    await db.flush()
    await db.refresh(feature)
    return FeatureResponse.model_validate(feature)


@router.patch("/features/{feature_id}", response_model=FeatureResponse)
async def update_feature(
    feature_id: UUID,
    body: FeatureUpdate,
    db: AsyncSession = Depends(get_db),
) -> FeatureResponse:
    feature = await _get_or_404(db, Feature, feature_id, "Funkcija nerasta")
    update_data = body.model_dump(exclude_unset=True)
    for required in ("group_id", "label", "value_type", "sort_order", "tooltip_enabled"):
        if update_data.get(required, ...) is None:
            update_data.pop(required)
    if "group_id" in update_data:
        await _get_or_404(db, FeatureGroup, update_data["group_id"], "Funkcijų grupė nerasta")
    _apply_changes(feature, update_data)
    await db.flush()
    await db.refresh(feature)
    return FeatureResponse.model_validate(feature)


@router.delete("/features/{feature_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feature(
    feature_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    feature = await _get_or_404(db, Feature, feature_id, "Funkcija nerasta")
    await db.delete(feature)
    await db.flush()


@router.put("/plan-features", response_model=PlanFeatureBatchResponse)
async def upsert_plan_features(
    body: PlanFeatureBatchRequest,
    db: AsyncSession = Depends(get_db),
) -> PlanFeatureBatchResponse:
    """Batch save of matrix cells keyed by (feature_id, plan_id)."""
    try:
        created, updated = await CatalogService.upsert_plan_features(
            db, [u.model_dump() for u in body.updates]
        )
    except CatalogServiceError as exc:
        _raise_catalog_http_error(exc)
    logger.info("Plan features saved: %d created, %d updated", created, updated)
    return PlanFeatureBatchResponse(created=created, updated=updated)


# ---------------------------------------------------------------------------
# Leads
# ---------------------------------------------------------------------------

@router.get("/leads", response_model=LeadListResponse)
async def list_leads(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    search: Optional[str] = Query(None, max_length=255),
    db: AsyncSession = Depends(get_db),
) -> LeadListResponse:
    """Paginated lead list with search over name, email, city and plan."""
    leads, total = await LeadService.list_leads(db, page=page, limit=limit, search=search)
    return LeadListResponse(
        items=[LeadResponse.model_validate(lead) for lead in leads],
        pagination=PaginationMeta(
            total=total,
            page=page,
            pages=(total + limit - 1) // limit if total else 0,
            limit=limit,
        ),
    )


@router.get("/leads/export")
async def export_leads(
    search: Optional[str] = Query(None, max_length=255),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """CSV export of every matching lead."""
    leads = await LeadService.export_leads(db, search=search)
    filename = f"uzklausos_{date.today().isoformat()}.csv"
    return Response(
        content=LeadService.leads_to_csv(leads),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/leads/{lead_id}", response_model=LeadResponse)
async def get_lead(
    lead_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> LeadResponse:
    try:
        lead = await LeadService.get_lead(db, lead_id)
    except LeadServiceError as exc:
        _raise_lead_http_error(exc)
    return LeadResponse.model_validate(lead)


# ---------------------------------------------------------------------------
# Email log
# ---------------------------------------------------------------------------

@router.get("/email-logs", response_model=list[EmailLogResponse])
async def list_email_logs(
    limit: int = Query(100, ge=1, le=500),
    lead_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[EmailLogResponse]:
    """Most recent email attempts, newest first."""
    stmt = select(EmailLog).order_by(desc(EmailLog.created_at)).limit(limit)
    if lead_id is not None:
        stmt = stmt.where(EmailLog.lead_id == lead_id)
    rows = (await db.execute(stmt)).scalars().all()
    return [EmailLogResponse.model_validate(r) for r in rows]
