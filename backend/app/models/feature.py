"""
FeatureGroup / Feature / PlanFeature models — rows of the plan comparison matrix.
"""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as SQLAlchemyUUID
from sqlalchemy.orm import relationship

from app.core.database import Base


class FeatureGroup(Base):
    """Matrix category (Aparatūra, Programinė įranga, ...)."""

    __tablename__ = "feature_groups"

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    title = Column(String(255), nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    # Info tooltip
    tooltip_enabled = Column(Boolean, default=False, nullable=False)
    tooltip_text = Column(Text, nullable=True)
    tooltip_link = Column(String(500), nullable=True)
    tooltip_image = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    features = relationship(
        "Feature",
        back_populates="group",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<FeatureGroup(id={self.id}, title='{self.title}')>"


class Feature(Base):
    """Matrix row; ``value_type`` is boolean (check/cross) or text."""

    __tablename__ = "features"

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    group_id = Column(
        SQLAlchemyUUID(as_uuid=True),
        ForeignKey("feature_groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label = Column(String(255), nullable=False)
    value_type = Column(String(20), nullable=False, default="boolean", comment="boolean|text")
    sort_order = Column(Integer, default=0, nullable=False)

    tooltip_enabled = Column(Boolean, default=False, nullable=False)
    tooltip_text = Column(Text, nullable=True)
    tooltip_link = Column(String(500), nullable=True)
    tooltip_image = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    group = relationship("FeatureGroup", back_populates="features")
    plan_features = relationship(
        "PlanFeature",
        back_populates="feature",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Feature(id={self.id}, label='{self.label}', type='{self.value_type}')>"


class PlanFeature(Base):
    """
    Value of one feature for one plan. A missing row means the matrix shows
    a dash for that cell.
    """

    __tablename__ = "plan_features"
    __table_args__ = (
        UniqueConstraint("feature_id", "plan_id", name="uq_plan_features_feature_plan"),
    )

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)
    feature_id = Column(
        SQLAlchemyUUID(as_uuid=True),
        ForeignKey("features.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    plan_id = Column(
        SQLAlchemyUUID(as_uuid=True),
        ForeignKey("plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    value_boolean = Column(Boolean, nullable=True)
    value_text = Column(String(255), nullable=True)

    feature = relationship("Feature", back_populates="plan_features")
    plan = relationship("Plan", back_populates="plan_features")

    def __repr__(self) -> str:
        return f"<PlanFeature(feature_id={self.feature_id}, plan_id={self.plan_id})>"
