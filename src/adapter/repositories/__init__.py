from .account_repository import SqlAlchemyAccountRepository
from .catalog_repository import SqlAlchemyCatalogRepository
from .ledger_repository import SqlAlchemyLedgerRepository

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyLedgerRepository",
]
