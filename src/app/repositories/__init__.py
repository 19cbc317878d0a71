from .account_repository import AccountRepository
from .catalog_repository import CatalogRepository
from .ledger_repository import LedgerRepository

__all__ = [
    "AccountRepository",
    "CatalogRepository",
    "LedgerRepository",
]
