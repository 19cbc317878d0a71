"""SQLAlchemy implementation of CatalogRepository"""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.catalog_repository import CatalogRepository
from src.domain.catalog import CatalogEntry, MainCategory, Offer, Period, SubCategory


class SqlAlchemyCatalogRepository(CatalogRepository):
    """
    SQLAlchemy implementation of CatalogRepository

    list_entries is the one query both the listing and option resolution
    read from, so both see the same ordering.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_entries(
        self,
        main_category: Optional[str] = None,
        sub_category: Optional[str] = None,
        period: Optional[str] = None,
    ) -> List[CatalogEntry]:
        stmt = (
            select(
                MainCategory.id.label("main_category_id"),
                MainCategory.name.label("main_category"),
                SubCategory.id.label("sub_category_id"),
                SubCategory.name.label("sub_category"),
                Period.id.label("period_id"),
                Period.label.label("period"),
                Offer.id.label("offer_id"),
                Offer.quantity,
                Offer.price,
            )
            .select_from(Offer)
            .join(Period, Offer.period_id == Period.id)
            .join(SubCategory, Period.sub_category_id == SubCategory.id)
            .join(MainCategory, SubCategory.main_category_id == MainCategory.id)
        )

        if main_category is not None:
            stmt = stmt.where(MainCategory.name == main_category)
        if sub_category is not None:
            stmt = stmt.where(SubCategory.name == sub_category)
        if period is not None:
            stmt = stmt.where(Period.label == period)

        stmt = stmt.order_by(MainCategory.id, SubCategory.id, Period.id, Offer.id)

        result = await self.session.execute(stmt)
        return [CatalogEntry(**row._mapping) for row in result.all()]

    async def get_or_create_main_category(self, name: str) -> MainCategory:
        result = await self.session.execute(
            select(MainCategory).where(MainCategory.name == name)
        )
        main_category = result.scalar_one_or_none()
        if main_category:
            return main_category
        return await self._add(MainCategory(name=name))

    async def get_or_create_sub_category(self, name: str, main_category_id: int) -> SubCategory:
        result = await self.session.execute(
            select(SubCategory)
            .where(SubCategory.name == name)
            .where(SubCategory.main_category_id == main_category_id)
            .order_by(SubCategory.id)
        )
        sub_category = result.scalars().first()
        if sub_category:
            return sub_category
        return await self._add(SubCategory(name=name, main_category_id=main_category_id))

    async def get_or_create_period(self, label: str, sub_category_id: int) -> Period:
        result = await self.session.execute(
            select(Period)
            .where(Period.label == label)
            .where(Period.sub_category_id == sub_category_id)
            .order_by(Period.id)
        )
        period = result.scalars().first()
        if period:
            return period
        return await self._add(Period(label=label, sub_category_id=sub_category_id))

    async def create_offer(self, quantity: Decimal, price: Decimal, period_id: int) -> Offer:
        return await self._add(Offer(quantity=quantity, price=price, period_id=period_id))

    async def count_offers(self, period_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Offer.id)).where(Offer.period_id == period_id)
        )
        return result.scalar_one()

    async def _add(self, entity):
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity
