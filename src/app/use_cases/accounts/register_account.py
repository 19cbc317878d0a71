"""RegisterAccount Use Case

Creates a subscriber account with a zero balance.
"""

import logging
from decimal import Decimal
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.domain.account import Account
from .dtos import AccountResponseDTO, RegisterAccountCommandDTO

logger = logging.getLogger(__name__)


class RegisterAccount:
    """
    Use Case: Register a subscriber

    Business Rules:
    1. Phone number is unique
    2. New accounts start with balance 0
    """

    def __init__(self, uow: UnitOfWork, account_repo: AccountRepository):
        self.uow = uow
        self.account_repo = account_repo

    async def execute(self, command: RegisterAccountCommandDTO) -> Result[AccountResponseDTO]:
        if await self.account_repo.exists(command.phone_number):
            return self._already_exists(command.phone_number)

        try:
            account = await self.account_repo.create(
                Account(
                    phone_number=command.phone_number,
                    name=command.name,
                    balance=Decimal("0"),
                )
            )
            await self.uow.commit()
        except IntegrityError:
            # Registered concurrently between the check and the insert
            await self.uow.rollback()
            return self._already_exists(command.phone_number)

        logger.info(f"Account registered: phone={account.phone_number}")

        return Return.ok(
            AccountResponseDTO(
                phone_number=account.phone_number,
                name=account.name,
                balance=account.balance,
            )
        )

    def _already_exists(self, phone_number: str) -> Result:
        return Return.err(
            Error(
                code="ACCOUNT_ALREADY_EXISTS",
                message=f"Account {phone_number} is already registered",
            )
        )
