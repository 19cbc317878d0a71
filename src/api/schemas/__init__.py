from .account_request import RegisterAccountRequestSchema, TopUpRequestSchema
from .bundle_request import PurchaseRequestSchema

__all__ = [
    "RegisterAccountRequestSchema",
    "TopUpRequestSchema",
    "PurchaseRequestSchema",
]
