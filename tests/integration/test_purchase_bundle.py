"""Integration tests for PurchaseBundle use case

Tests cover:
- Literal end-to-end purchase on the seeded catalog
- Failure paths leave balance and purchases untouched
- Concurrent purchases against one account cannot double-spend
- Store failures and timeouts inside the atomic phase roll back the debit
"""

import asyncio
import sqlite3
import pytest
from decimal import Decimal
from sqlalchemy.exc import OperationalError

from src.app.use_cases.bundles.purchase_bundle import PurchaseBundle
from src.app.use_cases.bundles.dtos import PurchaseCommandDTO
from src.adapter.repositories.catalog_repository import SqlAlchemyCatalogRepository
from src.adapter.repositories.ledger_repository import SqlAlchemyLedgerRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork

PHONE = "0781234567"


def build_use_case(session, ledger_repo=None, **kwargs):
    return PurchaseBundle(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCatalogRepository(session),
        ledger_repo or SqlAlchemyLedgerRepository(session),
        **kwargs,
    )


def purchase_command(option_number, phone_number=PHONE, main="voice_sms", sub="tubitayeho", period="day"):
    return PurchaseCommandDTO(
        phone_number=phone_number,
        main_category=main,
        sub_category=sub,
        period=period,
        option_number=option_number,
    )


class FailingAppendLedgerRepository(SqlAlchemyLedgerRepository):
    """Debits normally, then fails while writing the purchase record"""

    async def append_purchase(self, phone_number, offer_id, remaining):
        raise OperationalError("INSERT INTO purchase_records", {}, Exception("disk I/O error"))


class SlowAppendLedgerRepository(SqlAlchemyLedgerRepository):
    """Debits normally, then stalls before writing the purchase record"""

    async def append_purchase(self, phone_number, offer_id, remaining):
        await asyncio.sleep(5)
        return await super().append_purchase(phone_number, offer_id, remaining)


@pytest.mark.asyncio
class TestPurchaseBundleIntegration:
    """Integration tests with real database"""

    async def test_end_to_end_purchase_then_invalid_option(
        self, db_session, seeded_catalog, create_account, read_balance, list_purchases
    ):
        """
        Given: Account with balance 500 and the voice_sms > tubitayeho > day
               group priced [100, 180, 400]
        When: Option 2 is purchased, then option 4 is attempted
        Then: 180 is debited, one record with remaining 200 exists, and
              option 4 fails with INVALID_OPTION without side effects
        """
        # Arrange
        await create_account(PHONE, "500")
        use_case = build_use_case(db_session)

        # Act
        result = await use_case.execute(purchase_command(2))

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.main_category == "voice_sms"
        assert response.sub_category == "tubitayeho"
        assert response.period == "day"
        assert response.option_number == 2
        assert response.quantity == Decimal("200")
        assert response.price == Decimal("180")

        assert await read_balance(PHONE) == Decimal("320")
        purchases = await list_purchases(PHONE)
        assert len(purchases) == 1
        assert purchases[0].remaining == Decimal("200")

        # Act - option 4 does not exist (group size is 3)
        second = await use_case.execute(purchase_command(4))

        # Assert
        assert second.is_err()
        assert second.error.code == "INVALID_OPTION"
        assert await read_balance(PHONE) == Decimal("320")
        assert len(await list_purchases(PHONE)) == 1

    async def test_option_numbers_follow_offer_creation_order(
        self, db_session, seeded_catalog, create_account, read_balance
    ):
        """Option 1 of the week group is the first-created offer (900), not the cheapest"""
        await create_account(PHONE, "1000")

        result = await build_use_case(db_session).execute(purchase_command(1, period="week"))

        assert result.is_ok()
        assert result.value.price == Decimal("900")
        assert await read_balance(PHONE) == Decimal("100")

    async def test_insufficient_balance_changes_nothing(
        self, db_session, seeded_catalog, create_account, read_balance, list_purchases
    ):
        await create_account(PHONE, "150")

        result = await build_use_case(db_session).execute(purchase_command(2))

        assert result.is_err()
        assert result.error.code == "INSUFFICIENT_BALANCE"
        assert await read_balance(PHONE) == Decimal("150")
        assert await list_purchases(PHONE) == []

    async def test_below_minimum_price_rejected_regardless_of_balance(
        self, db_session, seeded_catalog, create_account, read_balance, list_purchases
    ):
        await create_account(PHONE, "100000")

        result = await build_use_case(db_session).execute(
            purchase_command(1, main="internet", sub="foleva", period="day")
        )

        assert result.is_err()
        assert result.error.code == "BELOW_MINIMUM_PRICE"
        assert await read_balance(PHONE) == Decimal("100000")
        assert await list_purchases(PHONE) == []

    async def test_unknown_account(self, db_session, seeded_catalog, read_balance):
        result = await build_use_case(db_session).execute(purchase_command(1, phone_number="0789999999"))

        assert result.is_err()
        assert result.error.code == "ACCOUNT_NOT_FOUND"
        assert await read_balance("0789999999") is None

    async def test_unknown_catalog_triple(self, db_session, seeded_catalog, create_account, read_balance):
        await create_account(PHONE, "500")

        result = await build_use_case(db_session).execute(purchase_command(1, period="year"))

        assert result.is_err()
        assert result.error.code == "CATALOG_NOT_FOUND"
        assert await read_balance(PHONE) == Decimal("500")

    async def test_store_failure_after_debit_rolls_back(
        self, db_session, seeded_catalog, create_account, read_balance, list_purchases
    ):
        """
        Given: The purchase record insert fails after the balance was debited
        When: Purchase is executed
        Then: STORE_UNAVAILABLE and the debit is rolled back
        """
        await create_account(PHONE, "500")
        use_case = build_use_case(db_session, ledger_repo=FailingAppendLedgerRepository(db_session))

        result = await use_case.execute(purchase_command(2))

        assert result.is_err()
        assert result.error.code == "STORE_UNAVAILABLE"
        assert await read_balance(PHONE) == Decimal("500")
        assert await list_purchases(PHONE) == []

    async def test_timeout_after_debit_rolls_back(
        self, db_session, seeded_catalog, create_account, read_balance, list_purchases
    ):
        await create_account(PHONE, "500")
        use_case = build_use_case(
            db_session,
            ledger_repo=SlowAppendLedgerRepository(db_session),
            timeout_seconds=0.2,
        )

        result = await use_case.execute(purchase_command(2))

        assert result.is_err()
        assert result.error.code == "STORE_UNAVAILABLE"
        assert await read_balance(PHONE) == Decimal("500")
        assert await list_purchases(PHONE) == []

    async def test_commit_waiting_on_a_reader_is_not_reported_as_failure(
        self, engine, db_session, seeded_catalog, create_account, read_balance, list_purchases
    ):
        """
        Given: Another connection holds a read lock for longer than the purchase timeout
        When: Purchase is executed and its commit has to wait for that lock
        Then: The commit completes and the purchase succeeds, charged exactly once
        """
        await create_account(PHONE, "500")
        reader = sqlite3.connect(engine.url.database, isolation_level=None)
        reader.execute("BEGIN")
        reader.execute("SELECT * FROM accounts").fetchall()
        asyncio.get_running_loop().call_later(1.0, reader.execute, "ROLLBACK")

        try:
            result = await build_use_case(db_session, timeout_seconds=0.5).execute(purchase_command(2))
        finally:
            reader.close()

        assert result.is_ok()
        assert await read_balance(PHONE) == Decimal("320")
        assert len(await list_purchases(PHONE)) == 1

    async def test_retry_after_store_failure_charges_once(
        self, db_session, seeded_catalog, create_account, read_balance, list_purchases
    ):
        await create_account(PHONE, "500")
        failing = build_use_case(db_session, ledger_repo=FailingAppendLedgerRepository(db_session))
        assert (await failing.execute(purchase_command(2))).error.code == "STORE_UNAVAILABLE"

        result = await build_use_case(db_session).execute(purchase_command(2))

        assert result.is_ok()
        assert await read_balance(PHONE) == Decimal("320")
        assert len(await list_purchases(PHONE)) == 1


@pytest.mark.asyncio
class TestPurchaseBundleConcurrency:
    """Concurrent purchases against the same account, one session per caller"""

    async def test_concurrent_purchases_cannot_double_spend(
        self, session_factory, seeded_catalog, create_account, read_balance, list_purchases
    ):
        """
        Given: Balance 400 and five concurrent purchases of the 400 offer
        When: They run at the same time on separate connections
        Then: Exactly one succeeds, four fail with INSUFFICIENT_BALANCE,
              final balance is 0 and one bundle was granted
        """
        # Arrange
        await create_account(PHONE, "400")
        attempts = 5

        async def purchase():
            async with session_factory() as session:
                return await build_use_case(session).execute(purchase_command(3))

        # Act
        results = await asyncio.gather(*[purchase() for _ in range(attempts)])

        # Assert
        successes = [r for r in results if r.is_ok()]
        failures = [r for r in results if r.is_err()]
        assert len(successes) == 1
        assert len(failures) == attempts - 1
        assert all(r.error.code == "INSUFFICIENT_BALANCE" for r in failures)

        assert await read_balance(PHONE) == Decimal("0")
        purchases = await list_purchases(PHONE)
        assert len(purchases) == 1
        assert purchases[0].remaining == Decimal("500")

    async def test_concurrent_purchases_and_top_up_keep_balance_consistent(
        self, session_factory, seeded_catalog, create_account, read_balance, list_purchases
    ):
        """Debits and a top-up interleave without lost updates"""
        from src.app.use_cases.accounts.top_up_balance import TopUpBalance
        from src.app.use_cases.accounts.dtos import TopUpCommandDTO

        await create_account(PHONE, "1000")

        async def purchase():
            async with session_factory() as session:
                return await build_use_case(session).execute(purchase_command(1))

        async def top_up():
            async with session_factory() as session:
                use_case = TopUpBalance(SqlAlchemyUnitOfWork(session), SqlAlchemyLedgerRepository(session))
                return await use_case.execute(TopUpCommandDTO(phone_number=PHONE, amount=Decimal("250")))

        results = await asyncio.gather(purchase(), top_up(), purchase(), purchase())

        assert all(r.is_ok() for r in results)
        assert await read_balance(PHONE) == Decimal("1000") - Decimal("300") + Decimal("250")
        assert len(await list_purchases(PHONE)) == 3
