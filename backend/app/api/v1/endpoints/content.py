"""
Public content endpoints — site text, SEO settings, footer links and custom pages.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.content import (
    CustomPageResponse,
    FooterLinkResponse,
    SeoSettingsResponse,
    SiteContentResponse,
)
from app.services.content_service import ContentService, ContentServiceError

router = APIRouter()


def _raise_content_http_error(exc: ContentServiceError) -> None:
    """Convert content domain errors to HTTP responses."""
    status_code = status.HTTP_400_BAD_REQUEST
    if exc.code.endswith("_not_found"):
        status_code = status.HTTP_404_NOT_FOUND
    elif exc.code.endswith("_conflict"):
        status_code = status.HTTP_409_CONFLICT
    raise HTTPException(status_code=status_code, detail=exc.detail) from exc


@router.get("/site-content", response_model=list[SiteContentResponse])
async def list_site_content(
    db: AsyncSession = Depends(get_db),
) -> list[SiteContentResponse]:
    """All site text blocks."""
    rows = await ContentService.list_site_content(db)
    return [SiteContentResponse.model_validate(r) for r in rows]


@router.get("/seo-settings", response_model=SeoSettingsResponse)
async def get_seo_settings(
    db: AsyncSession = Depends(get_db),
) -> SeoSettingsResponse:
    """SEO metadata; empty fields when never configured."""
    row = await ContentService.get_seo_settings(db)
    if row is None:
        return SeoSettingsResponse()
    return SeoSettingsResponse.model_validate(row)


@router.get("/footer-links", response_model=list[FooterLinkResponse])
async def list_footer_links(
    db: AsyncSession = Depends(get_db),
) -> list[FooterLinkResponse]:
    """Active footer links in display order."""
    rows = await ContentService.list_footer_links(db, active_only=True)
    return [FooterLinkResponse.model_validate(r) for r in rows]


@router.get("/pages/{slug}", response_model=CustomPageResponse)
async def get_page(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> CustomPageResponse:
    """Active custom page by slug."""
    try:
        page = await ContentService.get_active_page(db, slug)
    except ContentServiceError as exc:
        _raise_content_http_error(exc)
    return CustomPageResponse.model_validate(page)
