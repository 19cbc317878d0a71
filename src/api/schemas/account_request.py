"""Request schemas for Account API

Pydantic models for validating incoming HTTP requests.
"""

from decimal import Decimal
from pydantic import BaseModel, Field, field_validator


class RegisterAccountRequestSchema(BaseModel):
    """
    Request schema for registering an account

    Used for POST /users endpoint.
    """

    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Subscriber phone number (required, non-empty)"
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name (required, non-empty)"
    )

    @field_validator('phone_number', 'name')
    @classmethod
    def validate_not_blank(cls, v):
        """Reject whitespace-only values"""
        if not v.strip():
            raise ValueError("Value must not be blank")
        return v.strip()

    class Config:
        json_schema_extra = {
            "example": {
                "name": "John Doe",
                "phone_number": "0781234567"
            }
        }


class TopUpRequestSchema(BaseModel):
    """
    Request schema for topping up airtime

    Used for POST /users/{phone}/topup endpoint.
    """

    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=12,
        decimal_places=2,
        description="Amount to add (must be > 0)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "500"
            }
        }
