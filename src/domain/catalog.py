"""Bundle Catalog Domain Entities

Four-level reference hierarchy:
MainCategory -> SubCategory -> Period -> Offer (quantity at price).
Seeded and administered outside the purchase flow; read-mostly.
"""

from decimal import Decimal
from typing import Optional, Tuple
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from src.domain.base import BaseModel, BigIntId


class MainCategory(BaseModel, table=True):
    """Top-level bundle family (e.g. "voice_sms", "internet")"""

    __tablename__ = "main_categories"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    name: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False),
        description="Unique category name"
    )


class SubCategory(BaseModel, table=True):
    """
    Named bundle line inside a main category

    Name uniqueness is expected per main category but not enforced.
    """

    __tablename__ = "sub_categories"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
    )

    main_category_id: int = Field(
        sa_column=Column(BigIntId, ForeignKey("main_categories.id"), nullable=False, index=True),
        description="Foreign key to MainCategory"
    )


class Period(BaseModel, table=True):
    """Billing period of a sub category ("day", "week", "month")"""

    __tablename__ = "periods"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
    )

    label: str = Field(
        sa_column=Column(String(20), nullable=False),
    )

    sub_category_id: int = Field(
        sa_column=Column(BigIntId, ForeignKey("sub_categories.id"), nullable=False, index=True),
        description="Foreign key to SubCategory"
    )


class Offer(BaseModel, table=True):
    """
    Offer - Purchasable quantity at a price within a period

    Domain Rules:
    - Offers of one period are ordered by id; that order defines option numbers
    - Price is non-negative, quantity positive
    """

    __tablename__ = "offers"
    __table_args__ = (
        CheckConstraint('price >= 0', name='offer_price_non_negative'),
        CheckConstraint('quantity > 0', name='offer_quantity_positive'),
        Index('ix_offers_period_id', 'period_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
        description="Offer identifier; also the canonical ordering key"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Units granted (minutes, SMS, MB...)"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Cost debited from the balance"
    )

    period_id: int = Field(
        sa_column=Column(BigIntId, ForeignKey("periods.id"), nullable=False),
        description="Foreign key to Period"
    )


class CatalogEntry(BaseModel):
    """One offer joined with its full Period/SubCategory/MainCategory chain"""

    main_category_id: int
    main_category: str
    sub_category_id: int
    sub_category: str
    period_id: int
    period: str
    offer_id: int
    quantity: Decimal
    price: Decimal

    @property
    def group_key(self) -> Tuple[int, int, int]:
        return (self.main_category_id, self.sub_category_id, self.period_id)

    @property
    def label(self) -> str:
        return f"{self.main_category} > {self.sub_category} > {self.period}"
