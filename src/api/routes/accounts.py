"""Account API Routes

FastAPI routes for registration, balance, top-up and purchased bundles.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.account_request import RegisterAccountRequestSchema, TopUpRequestSchema
from src.app.use_cases.accounts.dtos import (
    AccountResponseDTO,
    BalanceResponseDTO,
    RegisterAccountCommandDTO,
    TopUpCommandDTO,
)
from src.app.use_cases.accounts.register_account import RegisterAccount
from src.app.use_cases.accounts.get_balance import GetBalance
from src.app.use_cases.accounts.top_up_balance import TopUpBalance
from src.app.use_cases.bundles.dtos import AccountBundlesResponseDTO
from src.app.use_cases.bundles.get_account_bundles import GetAccountBundles
from src.adapter.repositories.account_repository import SqlAlchemyAccountRepository
from src.adapter.repositories.ledger_repository import SqlAlchemyLedgerRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/users", tags=["Users"])


def _raise_for(error):
    if error.code == "ACCOUNT_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code == "ACCOUNT_ALREADY_EXISTS":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    if error.code == "STORE_UNAVAILABLE":
        raise ClientError(error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    raise ClientError(error)


@router.post(
    "",
    response_model=AccountResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Phone number already registered"}},
)
async def register_account(
    request: RegisterAccountRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Register a new subscriber with a zero balance.

    **Example request:**
    ```json
    {"name": "John Doe", "phone_number": "0781234567"}
    ```
    """
    use_case = RegisterAccount(SqlAlchemyUnitOfWork(session), SqlAlchemyAccountRepository(session))
    result = await use_case.execute(
        RegisterAccountCommandDTO(phone_number=request.phone_number, name=request.name)
    )

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "/{phone_number}/balance",
    response_model=BalanceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Account not found"}},
)
async def get_balance(
    phone_number: str = Path(..., min_length=1, max_length=20),
    session: AsyncSession = Depends(get_session),
):
    """Get the airtime balance of an account."""
    result = await GetBalance(SqlAlchemyLedgerRepository(session)).execute(phone_number)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.post(
    "/{phone_number}/topup",
    response_model=BalanceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Account not found"}},
)
async def top_up(
    request: TopUpRequestSchema,
    phone_number: str = Path(..., min_length=1, max_length=20),
    session: AsyncSession = Depends(get_session),
):
    """
    Top up an account's airtime.

    **Example request:**
    ```json
    {"amount": "500"}
    ```
    """
    use_case = TopUpBalance(SqlAlchemyUnitOfWork(session), SqlAlchemyLedgerRepository(session))
    result = await use_case.execute(
        TopUpCommandDTO(phone_number=phone_number, amount=request.amount)
    )

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "/{phone_number}/bundles",
    response_model=AccountBundlesResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Account not found"}},
)
async def get_account_bundles(
    phone_number: str = Path(..., min_length=1, max_length=20),
    session: AsyncSession = Depends(get_session),
):
    """Get purchased bundles and their remaining quantities, oldest first."""
    use_case = GetAccountBundles(
        SqlAlchemyAccountRepository(session), SqlAlchemyLedgerRepository(session)
    )
    result = await use_case.execute(phone_number)

    if result.is_err():
        _raise_for(result.error)

    return result.value
