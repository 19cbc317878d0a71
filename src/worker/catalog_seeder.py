"""Catalog Seeder

Loads the reference bundle catalog into the database. Run once after
deployment (or whenever new categories are added); safe to re-run.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Optional
from sqlmodel import SQLModel

from config import ApplicationConfig
import src.domain  # noqa: F401  (registers tables on SQLModel.metadata)
from src.adapter.repositories.catalog_repository import SqlAlchemyCatalogRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.bundles import CatalogSeedDTO, OfferSeedDTO, SeedCatalog, SeedCatalogResultDTO
from src.depends import create_session_factory

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = CatalogSeedDTO(
    main_categories={
        "voice_sms": ["tubitayeho", "irekure", "gwamon", "izindi_pack"],
        "internet": ["foleva", "iwacu", "pake_zo_mumahanga"],
    },
    periods=["day", "week", "month"],
    offers=[
        OfferSeedDTO(quantity=Decimal("100"), price=Decimal("100")),
        OfferSeedDTO(quantity=Decimal("200"), price=Decimal("180")),
        OfferSeedDTO(quantity=Decimal("500"), price=Decimal("400")),
    ],
)


class CatalogSeederWorker:
    """
    Worker that seeds the bundle catalog

    Usage:
        worker = CatalogSeederWorker()
        result = await worker.run_once(create_schema=True)
        await worker.shutdown()
    """

    def __init__(self, db_uri: Optional[str] = None, catalog: CatalogSeedDTO = DEFAULT_CATALOG):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            catalog: Catalog definition to load
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.catalog = catalog
        self.engine, self.async_session_factory = create_session_factory(self.db_uri)

        logger.info("CatalogSeederWorker initialized")

    async def create_schema(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database schema ready")

    async def run_once(self, create_schema: bool = False) -> SeedCatalogResultDTO:
        """
        Seed the catalog once

        Returns:
            SeedCatalogResultDTO with seeding counts
        """
        if create_schema:
            await self.create_schema()

        async with self.async_session_factory() as session:
            use_case = SeedCatalog(
                uow=SqlAlchemyUnitOfWork(session),
                catalog_repo=SqlAlchemyCatalogRepository(session),
            )
            result = await use_case.execute(self.catalog)

            if result.is_err():
                logger.error(f"Catalog seeding failed: {result.error.message}")
                raise RuntimeError(f"Catalog seeding failed: {result.error.reason}")

            return result.value

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("CatalogSeederWorker shutdown complete")


async def main():
    """
    Entry point for running the seeder as a standalone script

    Usage:
        python -m src.worker.catalog_seeder
        python -m src.worker.catalog_seeder --create-schema
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Bundle Catalog Seeder")
    parser.add_argument(
        "--create-schema", action="store_true", help="Create missing tables before seeding"
    )
    parser.add_argument(
        "--db-uri", default=None, help="Database URI (default: DB_URI from config)"
    )
    args = parser.parse_args()

    worker = CatalogSeederWorker(db_uri=args.db_uri)

    try:
        result = await worker.run_once(create_schema=args.create_schema)
        print("Catalog seeding complete:")
        print(f"  Periods seeded: {result.periods_seeded}")
        print(f"  Periods already populated: {result.periods_skipped}")
        print(f"  Offers created: {result.offers_created}")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
