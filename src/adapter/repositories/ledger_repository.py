"""SQLAlchemy implementation of LedgerRepository

Balance changes are single conditional UPDATE ... RETURNING statements, so
two concurrent debits can never both pass the sufficiency check. Works on
PostgreSQL (row lock + WHERE re-check under READ COMMITTED) and on SQLite
(single writer).
"""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from libs.result import Result, Return, Error
from src.app.repositories.ledger_repository import LedgerRepository
from src.domain.account import Account
from src.domain.base import utc_now
from src.domain.catalog import MainCategory, Offer, Period, SubCategory
from src.domain.purchase_record import AccountBundleEntry, PurchaseRecord


class SqlAlchemyLedgerRepository(LedgerRepository):
    """
    SQLAlchemy implementation of LedgerRepository

    Features:
    - Compare-and-swap debit (UPDATE ... WHERE balance >= :minimum)
    - Atomic increment for top-ups
    - Append-only purchase records
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def read_balance(self, phone_number: str) -> Optional[Decimal]:
        stmt = select(Account.balance).where(Account.phone_number == phone_number)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def adjust_balance(
        self,
        phone_number: str,
        delta: Decimal,
        expected_minimum: Optional[Decimal] = None,
    ) -> Result[Decimal]:
        """
        Add delta to the balance in one statement

        The affected row decides the outcome. When no row comes back the
        account is looked up again (inside the same transaction) to tell a
        missing account from a failed minimum check.

        Note:
            Does not commit; the caller's unit of work owns the transaction
        """
        stmt = (
            update(Account)
            .where(Account.phone_number == phone_number)
            .values(balance=Account.balance + delta, updated_at=utc_now())
            .returning(Account.balance)
            .execution_options(synchronize_session=False)
        )
        if expected_minimum is not None:
            stmt = stmt.where(Account.balance >= expected_minimum)

        result = await self.session.execute(stmt)
        new_balance = result.scalar_one_or_none()

        if new_balance is not None:
            return Return.ok(new_balance)

        current = await self.read_balance(phone_number)
        if current is None:
            return Return.err(
                Error(
                    code="ACCOUNT_NOT_FOUND",
                    message=f"Account {phone_number} not found",
                )
            )
        return Return.err(
            Error(
                code="BALANCE_CONFLICT",
                message=f"Balance of {phone_number} is below the required minimum",
                reason=f"balance={current}, expected_minimum={expected_minimum}",
            )
        )

    async def append_purchase(
        self, phone_number: str, offer_id: int, remaining: Decimal
    ) -> PurchaseRecord:
        record = PurchaseRecord(
            phone_number=phone_number,
            offer_id=offer_id,
            remaining=remaining,
        )
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def list_purchases(self, phone_number: str) -> List[AccountBundleEntry]:
        stmt = (
            select(
                PurchaseRecord.id.label("purchase_id"),
                MainCategory.name.label("main_category"),
                SubCategory.name.label("sub_category"),
                Period.label.label("period"),
                Offer.quantity,
                Offer.price,
                PurchaseRecord.remaining,
                PurchaseRecord.purchased_at,
            )
            .select_from(PurchaseRecord)
            .join(Offer, PurchaseRecord.offer_id == Offer.id)
            .join(Period, Offer.period_id == Period.id)
            .join(SubCategory, Period.sub_category_id == SubCategory.id)
            .join(MainCategory, SubCategory.main_category_id == MainCategory.id)
            .where(PurchaseRecord.phone_number == phone_number)
            .order_by(PurchaseRecord.id)
        )
        result = await self.session.execute(stmt)
        return [AccountBundleEntry(**row._mapping) for row in result.all()]
