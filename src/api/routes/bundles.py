"""Bundle API Routes

FastAPI routes for the bundle catalog and bundle purchase.
"""

from decimal import Decimal
from typing import Dict, List
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.bundle_request import PurchaseRequestSchema
from src.app.use_cases.bundles.dtos import (
    CatalogOptionDTO,
    PurchaseCommandDTO,
    PurchaseResponseDTO,
)
from src.app.use_cases.bundles.list_catalog import ListCatalog
from src.app.use_cases.bundles.purchase_bundle import PurchaseBundle
from src.adapter.repositories.catalog_repository import SqlAlchemyCatalogRepository
from src.adapter.repositories.ledger_repository import SqlAlchemyLedgerRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_config, get_session
from src.api.error import ClientError

router = APIRouter(prefix="/bundles", tags=["Bundles"])

PURCHASE_ERROR_STATUS = {
    "CATALOG_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_OPTION": status.HTTP_400_BAD_REQUEST,
    "BELOW_MINIMUM_PRICE": status.HTTP_400_BAD_REQUEST,
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INSUFFICIENT_BALANCE": status.HTTP_402_PAYMENT_REQUIRED,
    "STORE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


@router.get(
    "",
    response_model=Dict[str, List[CatalogOptionDTO]],
    status_code=status.HTTP_200_OK,
)
async def list_bundles(session: AsyncSession = Depends(get_session)):
    """
    List all bundles with numbered options.

    Offers are grouped by "main > sub > period" and numbered from 1 in
    creation order. The numbering is stable while the catalog is unchanged,
    so clients purchase by `option_number`.

    **Example response:**
    ```json
    {
      "voice_sms > tubitayeho > day": [
        {"option_number": 1, "offer_id": 1, "quantity": "100.00", "price": "100.00"},
        {"option_number": 2, "offer_id": 2, "quantity": "200.00", "price": "180.00"}
      ]
    }
    ```
    """
    use_case = ListCatalog(SqlAlchemyCatalogRepository(session))
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value.to_mapping()


@router.post(
    "/purchase",
    response_model=PurchaseResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        402: {
            "description": "Insufficient balance",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_BALANCE",
                            "message": "Insufficient balance. Required: 400.00, Available: 320.00"
                        }
                    }
                }
            }
        },
        404: {
            "description": "Unknown category triple or account",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CATALOG_NOT_FOUND",
                            "message": "No bundles found for voice_sms > tubitayeho > year"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Invalid request, invalid option or price below minimum",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_OPTION",
                            "message": "Invalid option number 4"
                        }
                    }
                }
            }
        },
        503: {
            "description": "Store unavailable, nothing was charged; safe to retry",
        },
    }
)
async def purchase_bundle(
    request: PurchaseRequestSchema,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
):
    """
    Purchase a bundle using airtime balance.

    The balance debit and the bundle grant happen in one transaction; a
    failed purchase leaves balance and bundles unchanged.

    **Example request:**
    ```json
    {
      "phone_number": "0781234567",
      "main_category": "voice_sms",
      "sub_category": "tubitayeho",
      "period": "day",
      "option_number": 2
    }
    ```
    """
    uow = SqlAlchemyUnitOfWork(session)

    command = PurchaseCommandDTO(
        phone_number=request.phone_number,
        main_category=request.main_category,
        sub_category=request.sub_category,
        period=request.period,
        option_number=request.option_number,
    )

    use_case = PurchaseBundle(
        uow,
        SqlAlchemyCatalogRepository(session),
        SqlAlchemyLedgerRepository(session),
        minimum_price=Decimal(str(config.MINIMUM_BUNDLE_PRICE)),
        timeout_seconds=float(config.PURCHASE_TIMEOUT_SECONDS),
        currency=config.CURRENCY,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(
            result.error,
            status_code=PURCHASE_ERROR_STATUS.get(result.error.code, status.HTTP_400_BAD_REQUEST),
        )

    return result.value
