from .base import BaseModel, BigIntId, utc_now
from .account import Account
from .catalog import MainCategory, SubCategory, Period, Offer, CatalogEntry
from .purchase_record import PurchaseRecord, AccountBundleEntry

__all__ = [
    "BaseModel",
    "BigIntId",
    "utc_now",
    "Account",
    "MainCategory",
    "SubCategory",
    "Period",
    "Offer",
    "CatalogEntry",
    "PurchaseRecord",
    "AccountBundleEntry",
]
