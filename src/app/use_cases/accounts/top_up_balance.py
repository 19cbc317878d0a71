"""TopUpBalance Use Case

Adds airtime to an account as a single atomic increment.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.ledger_repository import LedgerRepository
from .dtos import BalanceResponseDTO, TopUpCommandDTO

logger = logging.getLogger(__name__)


class TopUpBalance:
    """
    Use Case: Top up airtime balance

    The increment is one UPDATE (balance = balance + amount); there is no
    read-then-write gap for a concurrent purchase to slip into.
    """

    def __init__(self, uow: UnitOfWork, ledger_repo: LedgerRepository):
        self.uow = uow
        self.ledger_repo = ledger_repo

    async def execute(self, command: TopUpCommandDTO) -> Result[BalanceResponseDTO]:
        try:
            adjusted = await self.ledger_repo.adjust_balance(command.phone_number, command.amount)

            if adjusted.is_err():
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="ACCOUNT_NOT_FOUND",
                        message=f"Account {command.phone_number} not found",
                    )
                )

            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.warning(f"Top-up aborted by store error: phone={command.phone_number}: {e}")
            return Return.err(
                Error(
                    code="STORE_UNAVAILABLE",
                    message="Top-up could not be completed, no changes were made",
                    reason=str(e),
                )
            )

        logger.info(f"Balance topped up: phone={command.phone_number}, amount={command.amount}")

        return Return.ok(
            BalanceResponseDTO(phone_number=command.phone_number, balance=adjusted.value)
        )
