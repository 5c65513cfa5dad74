"""
Admin content endpoints — site text, SEO, footer links and custom pages.
"""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.content import (
    CustomPageCreate,
    CustomPageResponse,
    CustomPageUpdate,
    FooterLinkCreate,
    FooterLinkResponse,
    FooterLinkUpdate,
    SeoSettingsResponse,
    SeoSettingsUpdate,
    SiteContentResponse,
    SiteContentUpdate,
)
from app.services.content_service import ContentService, ContentServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


def _raise_content_http_error(exc: ContentServiceError) -> None:
    """Convert content domain errors to HTTP responses."""
    status_code = status.HTTP_400_BAD_REQUEST
    if exc.code in {"footer_link_not_found", "page_not_found"}:
        status_code = status.HTTP_404_NOT_FOUND
    elif exc.code == "page_slug_conflict":
        status_code = status.HTTP_409_CONFLICT
    elif exc.code in {"content_key_unknown", "page_slug_invalid"}:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    raise HTTPException(status_code=status_code, detail=exc.detail) from exc


# ---------------------------------------------------------------------------
# Site content
# ---------------------------------------------------------------------------

@router.put("/site-content/{key}", response_model=SiteContentResponse)
async def upsert_site_content(
    key: str,
    body: SiteContentUpdate,
    db: AsyncSession = Depends(get_db),
) -> SiteContentResponse:
    try:
        row = await ContentService.upsert_site_content(
            db, key, heading=body.heading, body=body.body, cta_label=body.cta_label
        )
    except ContentServiceError as exc:
        _raise_content_http_error(exc)
    logger.info("Site content '%s' saved", key)
    return SiteContentResponse.model_validate(row)


# ---------------------------------------------------------------------------
# SEO
# ---------------------------------------------------------------------------

@router.get("/seo-settings", response_model=SeoSettingsResponse)
async def get_seo_settings(
    db: AsyncSession = Depends(get_db),
) -> SeoSettingsResponse:
    row = await ContentService.get_seo_settings(db)
    if row is None:
        return SeoSettingsResponse()
    return SeoSettingsResponse.model_validate(row)


@router.put("/seo-settings", response_model=SeoSettingsResponse)
async def upsert_seo_settings(
    body: SeoSettingsUpdate,
    db: AsyncSession = Depends(get_db),
) -> SeoSettingsResponse:
    """Replace all SEO fields; omitted fields are cleared."""
    row = await ContentService.upsert_seo_settings(db, body.model_dump())
    logger.info("SEO settings saved")
    return SeoSettingsResponse.model_validate(row)


# ---------------------------------------------------------------------------
# Footer links
# ---------------------------------------------------------------------------

@router.get("/footer-links", response_model=list[FooterLinkResponse])
async def list_footer_links(
    db: AsyncSession = Depends(get_db),
) -> list[FooterLinkResponse]:
    """All footer links, inactive included."""
    rows = await ContentService.list_footer_links(db)
    return [FooterLinkResponse.model_validate(r) for r in rows]


@router.post("/footer-links", response_model=FooterLinkResponse, status_code=status.HTTP_201_CREATED)
async def create_footer_link(
    body: FooterLinkCreate,
    db: AsyncSession = Depends(get_db),
) -> FooterLinkResponse:
    row = await ContentService.create_footer_link(db, body.model_dump())
    return FooterLinkResponse.model_validate(row)


@router.patch("/footer-links/{link_id}", response_model=FooterLinkResponse)
async def update_footer_link(
    link_id: UUID,
    body: FooterLinkUpdate,
    db: AsyncSession = Depends(get_db),
) -> FooterLinkResponse:
    data = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    try:
        row = await ContentService.update_footer_link(db, link_id, data)
    except ContentServiceError as exc:
        _raise_content_http_error(exc)
    return FooterLinkResponse.model_validate(row)


@router.delete("/footer-links/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_footer_link(
    link_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await ContentService.delete_footer_link(db, link_id)
    except ContentServiceError as exc:
        _raise_content_http_error(exc)


# ---------------------------------------------------------------------------
# Custom pages
# ---------------------------------------------------------------------------

@router.get("/pages", response_model=list[CustomPageResponse])
async def list_pages(
    db: AsyncSession = Depends(get_db),
) -> list[CustomPageResponse]:
    rows = await ContentService.list_pages(db)
    return [CustomPageResponse.model_validate(r) for r in rows]


@router.get("/pages/{page_id}", response_model=CustomPageResponse)
async def get_page(
    page_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> CustomPageResponse:
    try:
        row = await ContentService.get_page(db, page_id)
    except ContentServiceError as exc:
        _raise_content_http_error(exc)
    return CustomPageResponse.model_validate(row)


@router.post("/pages", response_model=CustomPageResponse, status_code=status.HTTP_201_CREATED)
async def create_page(
    body: CustomPageCreate,
    db: AsyncSession = Depends(get_db),
) -> CustomPageResponse:
    """Create a page. Without a slug one is derived from the title."""
    try:
        row = await ContentService.create_page(db, body.model_dump())
    except ContentServiceError as exc:
        _raise_content_http_error(exc)
    logger.info("Page created: /%s", row.slug)
    return CustomPageResponse.model_validate(row)


@router.patch("/pages/{page_id}", response_model=CustomPageResponse)
async def update_page(
    page_id: UUID,
    body: CustomPageUpdate,
    db: AsyncSession = Depends(get_db),
) -> CustomPageResponse:
    data = body.model_dump(exclude_unset=True)
    for required in ("title", "is_html", "is_active"):
        if data.get(required, ...) is None:
            data.pop(required)
    try:
        row = await ContentService.update_page(db, page_id, data)
    except ContentServiceError as exc:
        _raise_content_http_error(exc)
    return CustomPageResponse.model_validate(row)


@router.delete("/pages/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page(
    page_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await ContentService.delete_page(db, page_id)
    except ContentServiceError as exc:
        _raise_content_http_error(exc)
