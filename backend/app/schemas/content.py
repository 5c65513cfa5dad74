"""
Pydantic schemas for site content, SEO settings, footer links and custom pages.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SiteContentUpdate(BaseModel):
    heading: Optional[str] = Field(None, max_length=255)
    body: Optional[str] = None
    cta_label: Optional[str] = Field(None, max_length=100)


class SiteContentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    heading: Optional[str]
    body: Optional[str]
    cta_label: Optional[str]


class SeoSettingsUpdate(BaseModel):
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    og_title: Optional[str] = Field(None, max_length=255)
    og_description: Optional[str] = None
    og_image: Optional[str] = Field(None, max_length=500)
    google_analytics_id: Optional[str] = Field(None, max_length=50)
    google_analytics_script: Optional[str] = None
    custom_head_code: Optional[str] = None
    robots_txt: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        """The admin form sends empty inputs; store them as NULL."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SeoSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    google_analytics_id: Optional[str] = None
    google_analytics_script: Optional[str] = None
    custom_head_code: Optional[str] = None
    robots_txt: Optional[str] = None


class FooterLinkCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=500)
    open_in_new_tab: bool = False
    is_active: bool = True
    sort_order: int = 0


class FooterLinkUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=255)
    url: Optional[str] = Field(None, min_length=1, max_length=500)
    open_in_new_tab: Optional[bool] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class FooterLinkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    label: str
    url: str
    open_in_new_tab: bool
    is_active: bool
    sort_order: int


class CustomPageCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    is_html: bool = False
    is_active: bool = True


class CustomPageUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None
    is_html: Optional[bool] = None
    is_active: Optional[bool] = None


class CustomPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    content: Optional[str]
    is_html: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
