"""PurchaseBundle Use Case

Spends airtime balance on a catalog offer. The debit and the bundle grant
commit together or not at all.
"""

import asyncio
import logging
from decimal import Decimal
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.catalog_repository import CatalogRepository
from src.app.repositories.ledger_repository import LedgerRepository
from src.domain.purchase_record import PurchaseRecord
from .dtos import PurchaseCommandDTO, PurchaseResponseDTO, ResolvedOfferDTO
from .resolve_offer import ResolveOffer

logger = logging.getLogger(__name__)

DEFAULT_MINIMUM_PRICE = Decimal("100")
DEFAULT_TIMEOUT_SECONDS = 10.0


class PurchaseBundle:
    """
    Use Case: Purchase a bundle with airtime balance

    Business Rules:
    1. Every check runs before any mutation
    2. Offers priced below the minimum bundle price are rejected
    3. Debit is a conditional update (balance >= price), so concurrent
       purchases on one account cannot both spend the same balance
    4. Debit and purchase record share one unit of work
    5. Any failure, including a timeout, leaves no trace
    6. The timeout bounds debit and grant only; commit always runs to completion

    Flow:
    1. Resolve option number to offer
    2. Enforce minimum price
    3. Check account exists and balance covers the price
    4. Conditional debit (re-validates against the latest balance)
    5. Append purchase record with remaining = offer quantity
    6. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        catalog_repo: CatalogRepository,
        ledger_repo: LedgerRepository,
        minimum_price: Decimal = DEFAULT_MINIMUM_PRICE,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        currency: str = "RWF",
    ):
        self.uow = uow
        self.ledger_repo = ledger_repo
        self.resolve_offer = ResolveOffer(catalog_repo)
        self.minimum_price = Decimal(str(minimum_price))
        self.timeout_seconds = timeout_seconds
        self.currency = currency

    async def execute(self, command: PurchaseCommandDTO) -> Result[PurchaseResponseDTO]:
        """
        Execute bundle purchase

        Args:
            command: PurchaseCommandDTO with phone_number, main_category,
                sub_category, period, option_number

        Returns:
            Result[PurchaseResponseDTO]: Purchased offer details or error

        Errors:
            CATALOG_NOT_FOUND, INVALID_OPTION, BELOW_MINIMUM_PRICE,
            ACCOUNT_NOT_FOUND, INSUFFICIENT_BALANCE, STORE_UNAVAILABLE
        """
        try:
            # Step 1: Resolve the selection
            resolved = await self.resolve_offer.execute(
                command.main_category,
                command.sub_category,
                command.period,
                command.option_number,
            )
            if resolved.is_err():
                return resolved
            offer = resolved.value

            # Step 2: Minimum price policy
            if offer.price < self.minimum_price:
                return Return.err(
                    Error(
                        code="BELOW_MINIMUM_PRICE",
                        message=f"Minimum bundle price is {self.minimum_price} {self.currency}",
                        reason=f"price={offer.price}, minimum={self.minimum_price}",
                    )
                )

            # Step 3: Account and balance pre-check
            balance = await self.ledger_repo.read_balance(command.phone_number)
            if balance is None:
                return self._account_not_found(command.phone_number)

            if balance < offer.price:
                return self._insufficient_balance(balance, offer.price)

            # Steps 4-5: Debit and grant, bounded by the purchase timeout
            outcome = await asyncio.wait_for(
                self._debit_and_grant(command.phone_number, offer),
                timeout=self.timeout_seconds,
            )
            if outcome.is_err():
                return outcome

            # Step 6: Commit outside the timeout
            await self.uow.commit()

            logger.info(
                f"Bundle purchased: phone={command.phone_number}, offer_id={offer.offer_id}, "
                f"price={offer.price}, purchase_id={outcome.value.id}"
            )

            return Return.ok(
                PurchaseResponseDTO(
                    main_category=offer.main_category,
                    sub_category=offer.sub_category,
                    period=offer.period,
                    quantity=offer.quantity,
                    price=offer.price,
                    option_number=offer.option_number,
                )
            )

        except asyncio.TimeoutError:
            await self.uow.rollback()
            logger.warning(
                f"Purchase timed out after {self.timeout_seconds}s: phone={command.phone_number}"
            )
            return self._store_unavailable(f"timed out after {self.timeout_seconds}s")

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.warning(f"Purchase aborted by store error: phone={command.phone_number}: {e}")
            return self._store_unavailable(str(e))

        except Exception:
            await self.uow.rollback()
            raise

    async def _debit_and_grant(
        self, phone_number: str, offer: ResolvedOfferDTO
    ) -> Result[PurchaseRecord]:
        debit = await self.ledger_repo.adjust_balance(
            phone_number, -offer.price, expected_minimum=offer.price
        )

        if debit.is_err():
            await self.uow.rollback()
            if debit.error.code == "ACCOUNT_NOT_FOUND":
                return self._account_not_found(phone_number)
            logger.warning(
                f"Concurrent debit won the race: phone={phone_number}, "
                f"offer_id={offer.offer_id}, {debit.error.reason}"
            )
            return Return.err(
                Error(
                    code="INSUFFICIENT_BALANCE",
                    message="Insufficient balance",
                    reason=debit.error.reason,
                )
            )

        record = await self.ledger_repo.append_purchase(
            phone_number, offer.offer_id, remaining=offer.quantity
        )
        return Return.ok(record)

    def _account_not_found(self, phone_number: str) -> Result:
        return Return.err(
            Error(
                code="ACCOUNT_NOT_FOUND",
                message=f"Account {phone_number} not found",
                reason="Register the phone number before purchasing",
            )
        )

    def _insufficient_balance(self, balance: Decimal, price: Decimal) -> Result:
        return Return.err(
            Error(
                code="INSUFFICIENT_BALANCE",
                message=f"Insufficient balance. Required: {price}, Available: {balance}",
                reason=f"balance={balance}, required={price}",
            )
        )

    def _store_unavailable(self, reason: str) -> Result:
        return Return.err(
            Error(
                code="STORE_UNAVAILABLE",
                message="Purchase could not be completed, no changes were made",
                reason=reason,
            )
        )
