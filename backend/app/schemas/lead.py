"""
Pydantic schemas for lead intake and the admin lead views.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.plan import SelectionItem


class LeadCreate(BaseModel):
    """
    Public submission payload.

    Carries the raw (option, quantity) selection only; the price is always
    recomputed server-side from the current catalog.
    """

    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    city: str = Field(..., min_length=2, max_length=255)
    comment: Optional[str] = Field(None, max_length=5000)
    plan_id: UUID
    selected_options: list[SelectionItem] = Field(default_factory=list)

    @field_validator("name", "city", mode="before")
    @classmethod
    def strip_required(cls, value: object) -> object:
        """Trim required text so whitespace-only input fails min_length."""
        return value.strip() if isinstance(value, str) else value

    @field_validator("phone", "comment", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        """Normalize optional text: empty strings become None."""
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("selected_options")
    @classmethod
    def reject_duplicate_options(cls, value: list[SelectionItem]) -> list[SelectionItem]:
        """One selection entry per option."""
        seen: set[UUID] = set()
        for item in value:
            if item.option_id in seen:
                raise ValueError(f"option {item.option_id} selected more than once")
            seen.add(item.option_id)
        return value


class SelectedOptionData(BaseModel):
    """Snapshot of a priced option stored on the lead."""

    option_id: UUID
    label: str
    quantity: int
    unit_price_cents: int
    total_price_cents: int


class LeadCreatedResponse(BaseModel):
    id: UUID
    plan_name: Optional[str]
    selected_options: list[SelectedOptionData]
    total_price_cents: int


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    city: Optional[str] = None
    comment: Optional[str] = None
    plan_id: Optional[UUID] = None
    plan_name: Optional[str] = None
    selected_options: list[SelectedOptionData]
    total_price_cents: int
    created_at: datetime


class PaginationMeta(BaseModel):
    total: int
    page: int
    pages: int
    limit: int


class LeadListResponse(BaseModel):
    items: list[LeadResponse]
    pagination: PaginationMeta
