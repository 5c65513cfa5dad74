"""
Pydantic schemas for the public catalog API (plans, options, feature matrix, quotes).
"""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PublicPlanResponse(BaseModel):
    """Plan info exposed on the public landing page."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name: str
    tagline: Optional[str] = None
    description: Optional[str] = None
    base_price_cents: int
    is_highlighted: bool
    sort_order: int


class OptionGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    group_type: str
    title: str
    description: Optional[str] = None
    sort_order: int


class OptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    group_id: UUID
    label: str
    description: Optional[str] = None
    unit_price_cents: int
    min_qty: int
    max_qty: int
    default_qty: int
    is_default: bool
    sort_order: int


class SelectionItem(BaseModel):
    """One (option, quantity) entry of the configurator state."""

    model_config = ConfigDict(from_attributes=True)

    option_id: UUID
    quantity: int = Field(..., ge=0, le=10000)


class CatalogResponse(BaseModel):
    plans: list[PublicPlanResponse]
    option_groups: list[OptionGroupResponse]
    options: list[OptionResponse]
    default_selections: list[SelectionItem]


class QuoteRequest(BaseModel):
    plan_id: UUID
    selected_options: list[SelectionItem] = Field(default_factory=list)


class LineItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    option_id: UUID
    label: str
    quantity: int
    unit_price_cents: int
    total_cents: int


class QuoteResponse(BaseModel):
    plan_id: UUID
    base_price_cents: int
    line_items: list[LineItemResponse]
    total_cents: int


# ---------------------------------------------------------------------------
# Feature matrix
# ---------------------------------------------------------------------------

class TooltipResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    text: Optional[str] = None
    link: Optional[str] = None
    image: Optional[str] = None


class FeatureGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    sort_order: int
    tooltip_enabled: bool = False
    tooltip_text: Optional[str] = None
    tooltip_link: Optional[str] = None
    tooltip_image: Optional[str] = None


class FeatureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    group_id: UUID
    label: str
    value_type: str
    sort_order: int
    tooltip_enabled: bool = False
    tooltip_text: Optional[str] = None
    tooltip_link: Optional[str] = None
    tooltip_image: Optional[str] = None


class PlanFeatureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    feature_id: UUID
    plan_id: UUID
    value_boolean: Optional[bool] = None
    value_text: Optional[str] = None


class FeatureTablesResponse(BaseModel):
    """Flat tables, as the admin matrix editor consumes them."""

    groups: list[FeatureGroupResponse]
    features: list[FeatureResponse]
    plan_features: list[PlanFeatureResponse]


class MatrixCellResponse(BaseModel):
    plan_id: UUID
    absent: bool
    value: Optional[bool | str] = None
    display: str


class MatrixRowResponse(BaseModel):
    feature_id: UUID
    label: str
    value_type: str
    tooltip: Optional[TooltipResponse] = None
    cells: list[MatrixCellResponse]


class MatrixGroupResponse(BaseModel):
    group_id: UUID
    title: str
    tooltip: Optional[TooltipResponse] = None
    rows: list[MatrixRowResponse]


class MatrixPlanColumn(BaseModel):
    id: UUID
    name: str
    is_highlighted: bool


class FeatureMatrixResponse(BaseModel):
    plans: list[MatrixPlanColumn]
    groups: list[MatrixGroupResponse]
