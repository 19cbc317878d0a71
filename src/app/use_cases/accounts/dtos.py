"""Data Transfer Objects for Account Use Cases"""

from decimal import Decimal
from pydantic import BaseModel, Field


class RegisterAccountCommandDTO(BaseModel):
    """
    Command DTO for registering an account

    Used as input to RegisterAccount use case.
    """

    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Subscriber phone number (account identity)"
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )

    class Config:
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "phone_number": "0781234567",
                "name": "John Doe"
            }
        }


class TopUpCommandDTO(BaseModel):
    """
    Command DTO for topping up airtime

    Used as input to TopUpBalance use case.
    """

    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=12,
        decimal_places=2,
        description="Amount to add (must be > 0)"
    )


class AccountResponseDTO(BaseModel):
    """Response DTO for a registered account"""

    phone_number: str
    name: str
    balance: Decimal

    class Config:
        json_schema_extra = {
            "example": {
                "phone_number": "0781234567",
                "name": "John Doe",
                "balance": "0.00"
            }
        }


class BalanceResponseDTO(BaseModel):
    """
    Response DTO for balance lookups and top-ups

    Returned by GetBalance and TopUpBalance.
    """

    phone_number: str = Field(
        ...,
        description="Subscriber phone number"
    )

    balance: Decimal = Field(
        ...,
        description="Current airtime balance"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "phone_number": "0781234567",
                "balance": "500.00"
            }
        }
