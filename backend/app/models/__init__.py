"""
Database Models Package
SQLAlchemy ORM models for PostgreSQL.
"""

from app.models.plan import Plan
from app.models.option import Option, OptionGroup
from app.models.feature import Feature, FeatureGroup, PlanFeature
from app.models.lead import Lead
from app.models.content import CustomPage, FooterLink, SeoSettings, SiteContent
from app.models.email_log import EmailLog

__all__ = [
    "Plan",
    "OptionGroup",
    "Option",
    "FeatureGroup",
    "Feature",
    "PlanFeature",
    "Lead",
    "SiteContent",
    "SeoSettings",
    "FooterLink",
    "CustomPage",
    "EmailLog",
]
