"""Ledger Repository Interface

Per-account balance and the append-only log of purchased bundles.
Consumed by the purchase and top-up use cases.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from libs.result import Result
from src.domain.purchase_record import AccountBundleEntry, PurchaseRecord


class LedgerRepository(ABC):
    """
    Repository interface for balances and purchase records

    adjust_balance is the atomic primitive under every balance change:
    a single conditional update, never a read followed by a write.
    """

    @abstractmethod
    async def read_balance(self, phone_number: str) -> Optional[Decimal]:
        """
        Read the current balance

        Returns:
            Balance if the account exists, None otherwise
        """
        pass

    @abstractmethod
    async def adjust_balance(
        self,
        phone_number: str,
        delta: Decimal,
        expected_minimum: Optional[Decimal] = None,
    ) -> Result[Decimal]:
        """
        Atomically add delta to the balance

        The update applies only if the pre-adjustment balance is at least
        expected_minimum (when given).

        Args:
            phone_number: Account phone number
            delta: Signed amount to add (negative for a debit)
            expected_minimum: Required pre-adjustment balance, or None

        Returns:
            Result[Decimal]: New balance, or error
            BALANCE_CONFLICT (balance below expected_minimum) /
            ACCOUNT_NOT_FOUND
        """
        pass

    @abstractmethod
    async def append_purchase(
        self, phone_number: str, offer_id: int, remaining: Decimal
    ) -> PurchaseRecord:
        """
        Append a purchase record

        Returns:
            Created PurchaseRecord with generated ID
        """
        pass

    @abstractmethod
    async def list_purchases(self, phone_number: str) -> List[AccountBundleEntry]:
        """
        List an account's purchases joined with their offer descriptors,
        oldest first
        """
        pass
