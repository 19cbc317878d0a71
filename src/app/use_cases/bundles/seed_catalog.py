"""SeedCatalog Use Case

Loads reference catalog data (categories, periods, offers).
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.catalog_repository import CatalogRepository
from .dtos import CatalogSeedDTO, SeedCatalogResultDTO

logger = logging.getLogger(__name__)


class SeedCatalog:
    """
    Use Case: Seed the bundle catalog

    Business Rules:
    1. Categories and periods are reused when they already exist
    2. A period that already has offers is left untouched, so re-running
       never changes existing option numbers
    3. Everything commits in one transaction
    """

    def __init__(self, uow: UnitOfWork, catalog_repo: CatalogRepository):
        self.uow = uow
        self.catalog_repo = catalog_repo

    async def execute(self, command: CatalogSeedDTO) -> Result[SeedCatalogResultDTO]:
        periods_seeded = 0
        periods_skipped = 0
        offers_created = 0

        try:
            for main_name, sub_names in command.main_categories.items():
                main_category = await self.catalog_repo.get_or_create_main_category(main_name)

                for sub_name in sub_names:
                    sub_category = await self.catalog_repo.get_or_create_sub_category(
                        sub_name, main_category.id
                    )

                    for label in command.periods:
                        period = await self.catalog_repo.get_or_create_period(
                            label, sub_category.id
                        )

                        if await self.catalog_repo.count_offers(period.id) > 0:
                            periods_skipped += 1
                            continue

                        for offer in command.offers:
                            await self.catalog_repo.create_offer(
                                offer.quantity, offer.price, period.id
                            )
                            offers_created += 1
                        periods_seeded += 1

            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.error(f"Catalog seeding failed: {e}")
            return Return.err(
                Error(
                    code="STORE_UNAVAILABLE",
                    message="Failed to seed catalog",
                    reason=str(e),
                )
            )

        logger.info(
            f"Catalog seeded: {periods_seeded} periods filled, "
            f"{periods_skipped} already populated, {offers_created} offers created"
        )

        return Return.ok(
            SeedCatalogResultDTO(
                periods_seeded=periods_seeded,
                periods_skipped=periods_skipped,
                offers_created=offers_created,
            )
        )
