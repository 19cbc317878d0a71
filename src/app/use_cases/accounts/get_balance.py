"""Get Balance Use Case

Retrieves an account's current airtime balance.
"""

from libs.result import Result, Return, Error
from src.app.repositories.ledger_repository import LedgerRepository
from .dtos import BalanceResponseDTO


class GetBalance:
    """
    Get Balance Use Case

    Read-only operation that retrieves the current balance for a phone number.
    """

    def __init__(self, ledger_repo: LedgerRepository):
        self.ledger_repo = ledger_repo

    async def execute(self, phone_number: str) -> Result[BalanceResponseDTO]:
        """
        Execute get balance operation

        Errors:
            ACCOUNT_NOT_FOUND: Phone number is not registered
        """
        balance = await self.ledger_repo.read_balance(phone_number)

        if balance is None:
            return Return.err(
                Error(
                    code="ACCOUNT_NOT_FOUND",
                    message=f"Account {phone_number} not found",
                )
            )

        return Return.ok(BalanceResponseDTO(phone_number=phone_number, balance=balance))
