"""
Content models — editable site text, SEO metadata, footer links and custom pages.
"""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID as SQLAlchemyUUID

from app.core.database import Base

SITE_CONTENT_KEYS = ("header", "hero", "contact", "footer", "thankYou")


class SiteContent(Base):
    """Text block addressed by a fixed section key."""

    __tablename__ = "site_content"

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    key = Column(String(50), unique=True, nullable=False, index=True, comment="header|hero|contact|footer|thankYou")
    heading = Column(String(255), nullable=True)
    body = Column(Text, nullable=True)
    cta_label = Column(String(100), nullable=True)

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SiteContent(key='{self.key}')>"


class SeoSettings(Base):
    """Singleton row with meta tags, analytics snippets and robots.txt."""

    __tablename__ = "seo_settings"

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    meta_title = Column(String(255), nullable=True)
    meta_description = Column(Text, nullable=True)
    meta_keywords = Column(Text, nullable=True)
    og_title = Column(String(255), nullable=True)
    og_description = Column(Text, nullable=True)
    og_image = Column(String(500), nullable=True)
    google_analytics_id = Column(String(50), nullable=True)
    google_analytics_script = Column(Text, nullable=True)
    custom_head_code = Column(Text, nullable=True)
    robots_txt = Column(Text, nullable=True)

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SeoSettings(id={self.id})>"


class FooterLink(Base):
    """Link in the footer menu (privacy policy, terms, ...)."""

    __tablename__ = "footer_links"

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    label = Column(String(255), nullable=False)
    url = Column(String(500), nullable=False)
    open_in_new_tab = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<FooterLink(label='{self.label}', url='{self.url}')>"


class CustomPage(Base):
    """Free-form page served at ``/{slug}``; content is plain text or HTML."""

    __tablename__ = "custom_pages"

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=True)
    is_html = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CustomPage(slug='{self.slug}', active={self.is_active})>"
