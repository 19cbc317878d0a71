"""Request schemas for Bundle API

Pydantic models for validating incoming HTTP requests.
"""

from pydantic import BaseModel, Field, field_validator


class PurchaseRequestSchema(BaseModel):
    """
    Request schema for purchasing a bundle

    Used for POST /bundles/purchase endpoint.
    """

    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Buyer phone number (required, non-empty)"
    )

    main_category: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Main category name (e.g., 'voice_sms')"
    )

    sub_category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Sub category name (e.g., 'tubitayeho')"
    )

    period: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Period label (e.g., 'day', 'week', 'month')"
    )

    option_number: int = Field(
        ...,
        strict=True,
        description="Option number from GET /bundles"
    )

    @field_validator('phone_number', 'main_category', 'sub_category', 'period')
    @classmethod
    def validate_not_blank(cls, v):
        """Reject whitespace-only values"""
        if not v.strip():
            raise ValueError("Value must not be blank")
        return v.strip()

    class Config:
        json_schema_extra = {
            "example": {
                "phone_number": "0781234567",
                "main_category": "voice_sms",
                "sub_category": "tubitayeho",
                "period": "day",
                "option_number": 2
            }
        }
