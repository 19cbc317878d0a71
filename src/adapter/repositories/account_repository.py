"""SQLAlchemy implementation of AccountRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.account_repository import AccountRepository
from src.domain.account import Account


class SqlAlchemyAccountRepository(AccountRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_phone(self, phone_number: str) -> Optional[Account]:
        stmt = select(Account).where(Account.phone_number == phone_number)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists(self, phone_number: str) -> bool:
        stmt = select(Account.phone_number).where(Account.phone_number == phone_number)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def create(self, account: Account) -> Account:
        """
        Create a new account

        Raises:
            IntegrityError: If the phone number is already registered
        """
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account
