"""
Pydantic schemas for admin endpoints (catalog management, dashboard, email logs).
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.lead import LeadResponse

_SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------

class PlanCreate(BaseModel):
    slug: str = Field(..., max_length=50, pattern=_SLUG_PATTERN)
    name: str = Field(..., min_length=1, max_length=100)
    tagline: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    base_price_cents: int = Field(default=0, ge=0)
    is_highlighted: bool = False
    is_active: bool = True
    sort_order: int = 0


class PlanUpdate(BaseModel):
    slug: Optional[str] = Field(None, max_length=50, pattern=_SLUG_PATTERN)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    tagline: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    base_price_cents: Optional[int] = Field(None, ge=0)
    is_highlighted: Optional[bool] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class PlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name: str
    tagline: Optional[str]
    description: Optional[str]
    base_price_cents: int
    is_highlighted: bool
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

class OptionGroupCreate(BaseModel):
    group_type: str = Field(..., pattern="^(quantity|switch|addon)$")
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    sort_order: int = 0


class OptionGroupUpdate(BaseModel):
    group_type: Optional[str] = Field(None, pattern="^(quantity|switch|addon)$")
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    sort_order: Optional[int] = None


class OptionCreate(BaseModel):
    group_id: UUID
    label: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    unit_price_cents: int = Field(default=0, ge=0)
    min_qty: int = Field(default=1, ge=0)
    max_qty: int = Field(default=1, ge=0)
    default_qty: int = Field(default=1, ge=0)
    is_default: bool = False
    sort_order: int = 0

    @model_validator(mode="after")
    def validate_quantity_bounds(self) -> "OptionCreate":
        """Enforce min_qty <= default_qty <= max_qty."""
        if not self.min_qty <= self.default_qty <= self.max_qty:
            raise ValueError("quantities must satisfy min_qty <= default_qty <= max_qty")
        return self


class OptionUpdate(BaseModel):
    group_id: Optional[UUID] = None
    label: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    unit_price_cents: Optional[int] = Field(None, ge=0)
    min_qty: Optional[int] = Field(None, ge=0)
    max_qty: Optional[int] = Field(None, ge=0)
    default_qty: Optional[int] = Field(None, ge=0)
    is_default: Optional[bool] = None
    sort_order: Optional[int] = None


class OptionAdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    group_id: UUID
    label: str
    description: Optional[str]
    unit_price_cents: int
    min_qty: int
    max_qty: int
    default_qty: int
    is_default: bool
    sort_order: int


class OptionGroupAdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    group_type: str
    title: str
    description: Optional[str]
    sort_order: int


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------

class TooltipFields(BaseModel):
    tooltip_enabled: bool = False
    tooltip_text: Optional[str] = None
    tooltip_link: Optional[str] = Field(None, max_length=500)
    tooltip_image: Optional[str] = Field(None, max_length=500)


class FeatureGroupCreate(TooltipFields):
    title: str = Field(..., min_length=1, max_length=255)
    sort_order: int = 0


class FeatureGroupUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    sort_order: Optional[int] = None
    tooltip_enabled: Optional[bool] = None
    tooltip_text: Optional[str] = None
    tooltip_link: Optional[str] = Field(None, max_length=500)
    tooltip_image: Optional[str] = Field(None, max_length=500)


class FeatureCreate(TooltipFields):
    group_id: UUID
    label: str = Field(..., min_length=1, max_length=255)
    value_type: str = Field(default="boolean", pattern="^(boolean|text)$")
    sort_order: int = 0


class FeatureUpdate(BaseModel):
    group_id: Optional[UUID] = None
    label: Optional[str] = Field(None, min_length=1, max_length=255)
    value_type: Optional[str] = Field(None, pattern="^(boolean|text)$")
    sort_order: Optional[int] = None
    tooltip_enabled: Optional[bool] = None
    tooltip_text: Optional[str] = None
    tooltip_link: Optional[str] = Field(None, max_length=500)
    tooltip_image: Optional[str] = Field(None, max_length=500)


class PlanFeatureUpdate(BaseModel):
    feature_id: UUID
    plan_id: UUID
    value_boolean: Optional[bool] = None
    value_text: Optional[str] = Field(None, max_length=255)


class PlanFeatureBatchRequest(BaseModel):
    updates: list[PlanFeatureUpdate] = Field(default_factory=list, max_length=2000)


class PlanFeatureBatchResponse(BaseModel):
    created: int
    updated: int


# ---------------------------------------------------------------------------
# Dashboard / email log
# ---------------------------------------------------------------------------

class DashboardStats(BaseModel):
    active_plans: int
    total_leads: int
    total_value_cents: int
    recent_leads: list[LeadResponse]


class EmailLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    recipient_email: str
    lead_id: Optional[UUID]
    email_type: str
    subject: str
    status: str
    error_message: Optional[str]
    created_at: datetime
