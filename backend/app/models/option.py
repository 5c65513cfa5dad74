"""
OptionGroup / Option models — add-ons the customer configures on top of a plan.
"""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID as SQLAlchemyUUID
from sqlalchemy.orm import relationship

from app.core.database import Base


class OptionGroup(Base):
    """
    Selection group; ``group_type`` decides the widget the landing page shows
    (quantity stepper, single-choice switch, on/off addon).
    """

    __tablename__ = "option_groups"
    __table_args__ = (
        CheckConstraint(
            "group_type IN ('quantity', 'switch', 'addon')",
            name="group_type_known",
        ),
    )

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    group_type = Column(String(20), nullable=False, comment="quantity|switch|addon")
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    options = relationship(
        "Option",
        back_populates="group",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<OptionGroup(id={self.id}, type='{self.group_type}', title='{self.title}')>"


class Option(Base):
    """
    Priced add-on line item. Quantity bounds satisfy
    0 <= min_qty <= default_qty <= max_qty.
    """

    __tablename__ = "options"
    __table_args__ = (
        CheckConstraint("unit_price_cents >= 0", name="unit_price_non_negative"),
        CheckConstraint(
            "min_qty >= 0 AND min_qty <= default_qty AND default_qty <= max_qty",
            name="quantity_bounds",
        ),
    )

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    group_id = Column(
        SQLAlchemyUUID(as_uuid=True),
        ForeignKey("option_groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    unit_price_cents = Column(Integer, nullable=False, default=0, comment="Price in cents (EUR)")
    min_qty = Column(Integer, nullable=False, default=1)
    max_qty = Column(Integer, nullable=False, default=1)
    default_qty = Column(Integer, nullable=False, default=1)
    is_default = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    group = relationship("OptionGroup", back_populates="options")

    def __repr__(self) -> str:
        return f"<Option(id={self.id}, label='{self.label}', unit_price={self.unit_price_cents})>"
