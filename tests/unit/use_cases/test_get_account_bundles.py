"""Unit tests for GetAccountBundles use case"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.use_cases.bundles.get_account_bundles import GetAccountBundles
from src.domain.purchase_record import AccountBundleEntry


def bundle_entry(purchase_id, period, remaining):
    return AccountBundleEntry(
        purchase_id=purchase_id,
        main_category="voice_sms",
        sub_category="tubitayeho",
        period=period,
        quantity=Decimal("200"),
        price=Decimal("180"),
        remaining=Decimal(remaining),
        purchased_at=datetime(2024, 1, purchase_id),
    )


@pytest.mark.asyncio
class TestGetAccountBundles:

    async def test_lists_bundles_in_ledger_order(self, mock_account_repo, mock_ledger_repo):
        mock_account_repo.exists = AsyncMock(return_value=True)
        mock_ledger_repo.list_purchases = AsyncMock(
            return_value=[bundle_entry(1, "day", "200"), bundle_entry(2, "week", "150")]
        )

        result = await GetAccountBundles(mock_account_repo, mock_ledger_repo).execute("0781234567")

        assert result.is_ok()
        assert result.value.phone_number == "0781234567"
        assert [b.purchase_id for b in result.value.bundles] == [1, 2]
        assert result.value.bundles[1].remaining == Decimal("150")

    async def test_account_without_purchases(self, mock_account_repo, mock_ledger_repo):
        mock_account_repo.exists = AsyncMock(return_value=True)
        mock_ledger_repo.list_purchases = AsyncMock(return_value=[])

        result = await GetAccountBundles(mock_account_repo, mock_ledger_repo).execute("0781234567")

        assert result.is_ok()
        assert result.value.bundles == []

    async def test_unknown_account(self, mock_account_repo, mock_ledger_repo):
        mock_account_repo.exists = AsyncMock(return_value=False)
        mock_ledger_repo.list_purchases = AsyncMock()

        result = await GetAccountBundles(mock_account_repo, mock_ledger_repo).execute("0700000000")

        assert result.error.code == "ACCOUNT_NOT_FOUND"
        mock_ledger_repo.list_purchases.assert_not_called()
