"""Data Transfer Objects for Bundle Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List
from pydantic import BaseModel, Field


class CatalogOptionDTO(BaseModel):
    """One numbered offer inside a catalog group"""

    option_number: int = Field(
        ...,
        ge=1,
        description="1-based rank of the offer within its group"
    )

    offer_id: int = Field(
        ...,
        description="Offer identifier"
    )

    quantity: Decimal = Field(
        ...,
        description="Units granted"
    )

    price: Decimal = Field(
        ...,
        description="Price debited from the balance"
    )


class CatalogGroupDTO(BaseModel):
    """
    Offers of one (main category, sub category, period) triple

    Identified by the triple of ids; the label is for display only.
    """

    main_category_id: int
    sub_category_id: int
    period_id: int
    main_category: str
    sub_category: str
    period: str
    label: str
    options: List[CatalogOptionDTO]


class CatalogResponseDTO(BaseModel):
    """
    Response DTO for the catalog listing

    Returned by ListCatalog.
    """

    groups: List[CatalogGroupDTO] = Field(
        default_factory=list,
        description="Groups ordered by main category, sub category and period ids"
    )

    def to_mapping(self) -> Dict[str, List[CatalogOptionDTO]]:
        """
        Presentation view: "main > sub > period" label -> numbered options

        Groups whose labels collide keep the first (lowest ids) group.
        """
        mapping: Dict[str, List[CatalogOptionDTO]] = {}
        for group in self.groups:
            mapping.setdefault(group.label, group.options)
        return mapping


class ResolvedOfferDTO(BaseModel):
    """Offer selected by (main, sub, period, option_number)"""

    offer_id: int
    main_category: str
    sub_category: str
    period: str
    option_number: int
    quantity: Decimal
    price: Decimal


class PurchaseCommandDTO(BaseModel):
    """
    Command DTO for purchasing a bundle

    Used as input to PurchaseBundle use case.
    """

    phone_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Buyer phone number"
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
        description="Period label (e.g., 'day')"
    )

    option_number: int = Field(
        ...,
        strict=True,
        description="Option number as shown in the catalog listing"
    )

    class Config:
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "phone_number": "0781234567",
                "main_category": "voice_sms",
                "sub_category": "tubitayeho",
                "period": "day",
                "option_number": 2
            }
        }


class PurchaseResponseDTO(BaseModel):
    """
    Response DTO for a successful purchase

    Echoes the selection and the purchased quantity/price only.
    """

    message: str = Field(
        default="Bundle purchased",
    )

    main_category: str
    sub_category: str
    period: str
    quantity: Decimal
    price: Decimal
    option_number: int

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Bundle purchased",
                "main_category": "voice_sms",
                "sub_category": "tubitayeho",
                "period": "day",
                "quantity": "200.00",
                "price": "180.00",
                "option_number": 2
            }
        }


class AccountBundleDTO(BaseModel):
    """A purchased bundle on an account statement"""

    purchase_id: int
    main_category: str
    sub_category: str
    period: str
    quantity: Decimal
    price: Decimal
    remaining: Decimal
    purchased_at: datetime


class AccountBundlesResponseDTO(BaseModel):
    """
    Response DTO for an account's bundles

    Returned by GetAccountBundles. Bundles are ordered oldest first.
    """

    phone_number: str
    bundles: List[AccountBundleDTO] = Field(default_factory=list)


class OfferSeedDTO(BaseModel):
    quantity: Decimal = Field(..., gt=0)
    price: Decimal = Field(..., ge=0)


class CatalogSeedDTO(BaseModel):
    """
    Command DTO for seeding the catalog

    Every sub category receives every period, and every period receives
    every offer, in list order.
    """

    main_categories: Dict[str, List[str]] = Field(
        ...,
        description="Main category name -> sub category names"
    )

    periods: List[str] = Field(
        ...,
        min_length=1,
        description="Period labels created under each sub category"
    )

    offers: List[OfferSeedDTO] = Field(
        ...,
        min_length=1,
        description="Quantity/price tiers created under each period"
    )


class SeedCatalogResultDTO(BaseModel):
    """Response DTO for catalog seeding"""

    periods_seeded: int
    periods_skipped: int
    offers_created: int
