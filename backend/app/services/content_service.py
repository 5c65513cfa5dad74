"""
ContentService — site text blocks, SEO settings, footer links and custom pages.
"""
from __future__ import annotations

import re
import unicodedata
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.content import SITE_CONTENT_KEYS, CustomPage, FooterLink, SeoSettings, SiteContent

DEFAULT_ROBOTS_TXT = "User-agent: *\nAllow: /\n"

# Routes owned by the app itself; a custom page may not shadow them.
RESERVED_SLUGS = frozenset({"admin", "api", "robots.txt", "health", "docs", "redoc"})


class ContentServiceError(Exception):
    """Domain error for content operations."""

    def __init__(self, detail: str, *, code: str = "content_error") -> None:
        super().__init__(detail)
        self.detail = detail
        self.code = code


def slugify(text: str) -> str:
    """
    URL slug from a page title: ``"Privatumo politika"`` -> ``"privatumo-politika"``.

    Lithuanian diacritics are folded to ASCII.
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^\w\s-]", "", folded.lower())
    slug = re.sub(r"[\s_]+", "-", slug.strip())
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def _apply(row: Any, data: dict[str, Any]) -> dict[str, Any]:
    """Set changed attributes and return a {field: {from, to}} diff."""
    changes: dict[str, Any] = {}
    for field, value in data.items():
        old = getattr(row, field)
        if old != value:
            changes[field] = {"from": old, "to": value}
            setattr(row, field, value)
    return changes


class ContentService:
    """Async CRUD for the content tables."""

    # ------------------------------------------------------------------
    # Site content
    # ------------------------------------------------------------------

    @staticmethod
    async def list_site_content(db: AsyncSession) -> list[SiteContent]:
        stmt = select(SiteContent).order_by(SiteContent.key)
        return list((await db.execute(stmt)).scalars().all())

    @staticmethod
    async def upsert_site_content(
        db: AsyncSession,
        key: str,
        *,
        heading: Optional[str],
        body: Optional[str],
        cta_label: Optional[str],
    ) -> SiteContent:
        """Insert or replace the text block for ``key``."""
        if key not in SITE_CONTENT_KEYS:
            raise ContentServiceError(f"Nežinomas turinio raktas '{key}'", code="content_key_unknown")

        stmt = select(SiteContent).where(SiteContent.key == key)
        row = (await db.execute(stmt)).scalar_one_or_none()
        if row is None:
            row = SiteContent(key=key)
            db.add(row)
        row.heading = heading
        row.body = body
        row.cta_label = cta_label
        row.updated_at = datetime.utcnow()

        await db.flush()
        await db.refresh(row)
        return row

    # ------------------------------------------------------------------
    # SEO
    # ------------------------------------------------------------------

    @staticmethod
    async def get_seo_settings(db: AsyncSession) -> Optional[SeoSettings]:
        stmt = select(SeoSettings).order_by(SeoSettings.updated_at).limit(1)
        return (await db.execute(stmt)).scalar_one_or_none()

    @staticmethod
    async def upsert_seo_settings(db: AsyncSession, data: dict[str, Any]) -> SeoSettings:
        """Replace every SEO field on the singleton row, creating it if needed."""
        row = await ContentService.get_seo_settings(db)
        if row is None:
            row = SeoSettings()
            db.add(row)
        for field, value in data.items():
            setattr(row, field, value)
        row.updated_at = datetime.utcnow()

        await db.flush()
        await db.refresh(row)
        return row

    @staticmethod
    async def robots_txt(db: AsyncSession) -> str:
        row = await ContentService.get_seo_settings(db)
        if row is None or not row.robots_txt:
            return DEFAULT_ROBOTS_TXT
        return row.robots_txt

    # ------------------------------------------------------------------
    # Footer links
    # ------------------------------------------------------------------

    @staticmethod
    async def list_footer_links(db: AsyncSession, *, active_only: bool = False) -> list[FooterLink]:
        stmt = select(FooterLink).order_by(FooterLink.sort_order, FooterLink.created_at)
        if active_only:
            stmt = stmt.where(FooterLink.is_active.is_(True))
        return list((await db.execute(stmt)).scalars().all())

    @staticmethod
    async def get_footer_link(db: AsyncSession, link_id: UUID) -> FooterLink:
        row = (await db.execute(select(FooterLink).where(FooterLink.id == link_id))).scalar_one_or_none()
        if row is None:
            raise ContentServiceError("Nuoroda nerasta", code="footer_link_not_found")
        return row

    @staticmethod
    async def create_footer_link(db: AsyncSession, data: dict[str, Any]) -> FooterLink:
        row = FooterLink(**data)
        db.add(row)
        await db.flush()
        await db.refresh(row)
        return row

    @staticmethod
    async def update_footer_link(db: AsyncSession, link_id: UUID, data: dict[str, Any]) -> FooterLink:
        row = await ContentService.get_footer_link(db, link_id)
        _apply(row, data)
        await db.flush()
        await db.refresh(row)
        return row

    @staticmethod
    async def delete_footer_link(db: AsyncSession, link_id: UUID) -> None:
        row = await ContentService.get_footer_link(db, link_id)
        await db.delete(row)
        await db.flush()

    # ------------------------------------------------------------------
    # Custom pages
    # ------------------------------------------------------------------

    @staticmethod
    async def list_pages(db: AsyncSession) -> list[CustomPage]:
        stmt = select(CustomPage).order_by(CustomPage.created_at)
        return list((await db.execute(stmt)).scalars().all())

    @staticmethod
    async def get_page(db: AsyncSession, page_id: UUID) -> CustomPage:
        row = (await db.execute(select(CustomPage).where(CustomPage.id == page_id))).scalar_one_or_none()
        if row is None:
            raise ContentServiceError("Puslapis nerastas", code="page_not_found")
        return row

    @staticmethod
    async def get_active_page(db: AsyncSession, slug: str) -> CustomPage:
        stmt = select(CustomPage).where(CustomPage.slug == slug, CustomPage.is_active.is_(True))
        row = (await db.execute(stmt)).scalar_one_or_none()
        if row is None:
            raise ContentServiceError("Puslapis nerastas", code="page_not_found")
        return row

    @staticmethod
    async def _ensure_slug_available(
        db: AsyncSession,
        slug: str,
        *,
        exclude_id: Optional[UUID] = None,
    ) -> str:
        normalized = slugify(slug)
        if not normalized:
            raise ContentServiceError("Nuorodos kelias privalomas", code="page_slug_invalid")
        if normalized in RESERVED_SLUGS:
            raise ContentServiceError(f"Kelias '/{normalized}' rezervuotas", code="page_slug_conflict")
        stmt = select(CustomPage).where(CustomPage.slug == normalized)
        existing = (await db.execute(stmt)).scalar_one_or_none()
        if existing is not None and existing.id != exclude_id:
            raise ContentServiceError(f"Puslapis '/{normalized}' jau egzistuoja", code="page_slug_conflict")
        return normalized

    @staticmethod
    async def create_page(db: AsyncSession, data: dict[str, Any]) -> CustomPage:
        """Create a page; the slug defaults to ``slugify(title)``."""
        data = dict(data)
        data["slug"] = await ContentService._ensure_slug_available(db, data.get("slug") or data["title"])
        row = CustomPage(**data)
        db.add(row)
        await db.flush()
        await db.refresh(row)
        return row

    @staticmethod
    async def update_page(db: AsyncSession, page_id: UUID, data: dict[str, Any]) -> CustomPage:
        row = await ContentService.get_page(db, page_id)
        data = dict(data)
        if data.get("slug") is not None:
            data["slug"] = await ContentService._ensure_slug_available(db, data["slug"], exclude_id=row.id)
        else:
            data.pop("slug", None)
        if _apply(row, data):
            row.updated_at = datetime.utcnow()
        await db.flush()
        await db.refresh(row)
        return row

    @staticmethod
    async def delete_page(db: AsyncSession, page_id: UUID) -> None:
        row = await ContentService.get_page(db, page_id)
        await db.delete(row)
        await db.flush()
