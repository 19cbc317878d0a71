"""Account Domain Entity

A subscriber's airtime wallet, identified by phone number.
"""

from datetime import datetime
from decimal import Decimal
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, DateTime, Numeric, String
from src.domain.base import BaseModel, utc_now


class Account(BaseModel, table=True):
    """
    Account - Subscriber wallet keyed by phone number

    Domain Rules:
    - phone_number is the identity (no surrogate id)
    - Balance must be non-negative
    - Balance is mutated only by top-up and bundle purchase
    - Accounts are never deleted
    """

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint('balance >= 0', name='account_balance_non_negative'),
    )

    phone_number: str = Field(
        sa_column=Column(String(20), primary_key=True),
        description="Subscriber phone number (primary key)"
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display name"
    )

    balance: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Airtime balance (must be >= 0, precision: 12,2)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Registration timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last balance update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "phone_number": "0781234567",
                "name": "John Doe",
                "balance": "500.00",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }
