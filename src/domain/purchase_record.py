"""Purchase Record Domain Entity

Append-only log of bundles bought with airtime balance.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Numeric, String
from src.domain.base import BaseModel, BigIntId, utc_now


class PurchaseRecord(BaseModel, table=True):
    """
    Purchase Record - One successful bundle purchase

    Domain Rules:
    - Created exactly once per successful purchase, in the same unit of work
      as the balance debit
    - Immutable except for remaining (consumption is handled elsewhere)
    - remaining starts at the offer quantity
    """

    __tablename__ = "purchase_records"
    __table_args__ = (
        Index('ix_purchase_records_phone_number', 'phone_number'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    phone_number: str = Field(
        sa_column=Column(String(20), ForeignKey("accounts.phone_number"), nullable=False),
        description="Foreign key to Account"
    )

    offer_id: int = Field(
        sa_column=Column(BigIntId, ForeignKey("offers.id"), nullable=False),
        description="Foreign key to Offer"
    )

    remaining: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Quantity left to consume"
    )

    purchased_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Purchase timestamp (immutable)"
    )


class AccountBundleEntry(BaseModel):
    """A purchase record joined with the descriptors of its offer"""

    purchase_id: int
    main_category: str
    sub_category: str
    period: str
    quantity: Decimal
    price: Decimal
    remaining: Decimal
    purchased_at: datetime
