"""Get Account Bundles Use Case

Lists the bundles an account has purchased, for statement display.
"""

from libs.result import Result, Return, Error
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.ledger_repository import LedgerRepository
from .dtos import AccountBundleDTO, AccountBundlesResponseDTO


class GetAccountBundles:
    """
    Get Account Bundles Use Case

    Read-only. Bundles are ordered by purchase, oldest first.

    Errors:
        ACCOUNT_NOT_FOUND: Phone number is not registered
    """

    def __init__(self, account_repo: AccountRepository, ledger_repo: LedgerRepository):
        self.account_repo = account_repo
        self.ledger_repo = ledger_repo

    async def execute(self, phone_number: str) -> Result[AccountBundlesResponseDTO]:
        if not await self.account_repo.exists(phone_number):
            return Return.err(
                Error(
                    code="ACCOUNT_NOT_FOUND",
                    message=f"Account {phone_number} not found",
                )
            )

        entries = await self.ledger_repo.list_purchases(phone_number)

        return Return.ok(
            AccountBundlesResponseDTO(
                phone_number=phone_number,
                bundles=[AccountBundleDTO(**entry.model_dump()) for entry in entries],
            )
        )
