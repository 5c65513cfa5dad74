"""
Lead model — immutable snapshot of a customer inquiry.
"""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID as SQLAlchemyUUID
from sqlalchemy.orm import relationship

from app.core.database import Base


class Lead(Base):
    """
    Customer inquiry with the priced configuration captured at submission.

    ``selected_options`` is a snapshot (label, quantity, prices) and not a live
    reference, so later catalog edits never change what the customer saw.
    Rows are written once and never updated.
    """

    __tablename__ = "leads"

    id = Column(SQLAlchemyUUID(as_uuid=True), primary_key=True, default=uuid4, index=True)

    # Contact
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    city = Column(String(255), nullable=True)
    comment = Column(Text, nullable=True)

    # Configuration snapshot
    plan_id = Column(
        SQLAlchemyUUID(as_uuid=True),
        ForeignKey("plans.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    plan_name = Column(String(100), nullable=True)
    selected_options = Column(
        JSONB,
        nullable=False,
        default=list,
        comment='[{"option_id", "label", "quantity", "unit_price_cents", "total_price_cents"}]',
    )
    total_price_cents = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    plan = relationship("Plan")

    def __repr__(self) -> str:
        return f"<Lead(id={self.id}, email='{self.email}', total={self.total_price_cents})>"
