"""
Plan model — purchasable base packages shown on the pricing section.
"""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID as SQLAlchemyUUID
from sqlalchemy.orm import relationship

from app.core.database import Base


class Plan(Base):
    """
    Base package with a fixed price in euro cents.
    """

    __tablename__ = "plans"
    __table_args__ = (
        CheckConstraint("base_price_cents >= 0", name="base_price_non_negative"),
    )

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    slug = Column(String(50), unique=True, nullable=False, comment="starter, professional, premium")
    name = Column(String(100), nullable=False)
    tagline = Column(String(255), nullable=True)
    description = Column(Text, nullable=True, comment="One bullet per line")

    base_price_cents = Column(Integer, nullable=False, default=0, comment="Price in cents (EUR)")

    # Status / ordering
    is_highlighted = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    plan_features = relationship(
        "PlanFeature",
        back_populates="plan",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Plan(id={self.id}, slug='{self.slug}', price={self.base_price_cents})>"
