"""
Public catalog endpoints — no authentication required.
Plans, configurator options, feature comparison and price preview for the landing page.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models.feature import Feature, FeatureGroup, PlanFeature
from app.schemas.plan import (
    CatalogResponse,
    FeatureMatrixResponse,
    FeatureTablesResponse,
    LineItemResponse,
    MatrixCellResponse,
    MatrixGroupResponse,
    MatrixPlanColumn,
    MatrixRowResponse,
    OptionGroupResponse,
    OptionResponse,
    PublicPlanResponse,
    QuoteRequest,
    QuoteResponse,
    SelectionItem,
    TooltipResponse,
)
from app.services.catalog_service import CatalogService
from app.services.feature_matrix_service import FeatureMatrix, Tooltip, project_matrix
from app.services.lead_service import LeadServiceError, quote_for
from app.services.pricing_service import Selection, default_selections

router = APIRouter()


def _tooltip(tooltip: Tooltip | None) -> TooltipResponse | None:
    return TooltipResponse.model_validate(tooltip) if tooltip else None


def matrix_response(matrix: FeatureMatrix) -> FeatureMatrixResponse:
    """Serialize a projected matrix; absent cells carry ``absent=True`` and no value."""
    return FeatureMatrixResponse(
        plans=[
            MatrixPlanColumn(id=p.id, name=p.name, is_highlighted=p.is_highlighted)
            for p in matrix.plans
        ],
        groups=[
            MatrixGroupResponse(
                group_id=g.group.id,
                title=g.group.title,
                tooltip=_tooltip(g.group.tooltip),
                rows=[
                    MatrixRowResponse(
                        feature_id=row.feature.id,
                        label=row.feature.label,
                        value_type=row.feature.value_type,
                        tooltip=_tooltip(row.feature.tooltip),
                        cells=[
                            MatrixCellResponse(
                                plan_id=cell.plan_id,
                                absent=cell.is_absent,
                                value=None if cell.is_absent else cell.value,
                                display=cell.display,
                            )
                            for cell in row.cells
                        ],
                    )
                    for row in g.rows
                ],
            )
            for g in matrix.groups
        ],
    )


@router.get("/plans", response_model=list[PublicPlanResponse])
async def list_public_plans(
    db: AsyncSession = Depends(get_db),
) -> list[PublicPlanResponse]:
    """List active plans."""
    plans = await CatalogService.list_plans(db)
    return [PublicPlanResponse.model_validate(p) for p in plans]


@router.get("/catalog", response_model=CatalogResponse)
async def get_catalog(
    db: AsyncSession = Depends(get_db),
) -> CatalogResponse:
    """Everything the configurator needs, including its starting selection."""
    catalog = await CatalogService.load_catalog(db)
    return CatalogResponse(
        plans=[PublicPlanResponse.model_validate(p) for p in catalog.plans],
        option_groups=[OptionGroupResponse.model_validate(g) for g in catalog.option_groups],
        options=[OptionResponse.model_validate(o) for o in catalog.options],
        default_selections=[
            SelectionItem.model_validate(s)
            for s in default_selections(catalog.option_groups, catalog.options)
        ],
    )


@router.get("/features", response_model=FeatureTablesResponse)
async def get_feature_tables(
    db: AsyncSession = Depends(get_db),
) -> FeatureTablesResponse:
    """Flat feature groups, features and plan values."""
    groups = (await db.execute(select(FeatureGroup).order_by(FeatureGroup.sort_order))).scalars().all()
    features = (await db.execute(select(Feature).order_by(Feature.sort_order))).scalars().all()
    plan_features = (await db.execute(select(PlanFeature))).scalars().all()
    return FeatureTablesResponse.model_validate(
        {"groups": groups, "features": features, "plan_features": plan_features},
        from_attributes=True,
    )


@router.get("/features/matrix", response_model=FeatureMatrixResponse)
async def get_feature_matrix(
    db: AsyncSession = Depends(get_db),
) -> FeatureMatrixResponse:
    """Comparison matrix projected for display."""
    fc = await CatalogService.load_feature_catalog(db)
    matrix = project_matrix(fc.groups, fc.features, fc.plan_features, fc.plans)
    return matrix_response(matrix)


@router.post("/quote", response_model=QuoteResponse)
async def quote(
    body: QuoteRequest,
    db: AsyncSession = Depends(get_db),
) -> QuoteResponse:
    """Price preview with the same rules lead intake applies."""
    catalog = await CatalogService.load_catalog(db)
    selections = [Selection(s.option_id, s.quantity) for s in body.selected_options]
    try:
        result = quote_for(catalog, body.plan_id, selections)
    except LeadServiceError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.detail) from exc
    return QuoteResponse(
        plan_id=result.plan_id,
        base_price_cents=result.base_price_cents,
        line_items=[LineItemResponse.model_validate(item) for item in result.line_items],
        total_cents=result.total_cents,
    )
