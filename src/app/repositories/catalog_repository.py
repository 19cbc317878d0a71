"""Catalog Repository Interface

Read side of the bundle catalog plus the administration helpers used by
the catalog seeder.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.catalog import CatalogEntry, MainCategory, Offer, Period, SubCategory


class CatalogRepository(ABC):
    """Repository interface for the catalog hierarchy"""

    @abstractmethod
    async def list_entries(
        self,
        main_category: Optional[str] = None,
        sub_category: Optional[str] = None,
        period: Optional[str] = None,
    ) -> List[CatalogEntry]:
        """
        Retrieve offers joined through Period, SubCategory and MainCategory

        Rows are ordered by main category id, sub category id, period id
        and offer id. Name filters are optional and combine with AND.

        Returns:
            List of CatalogEntry
        """
        pass

    @abstractmethod
    async def get_or_create_main_category(self, name: str) -> MainCategory:
        pass

    @abstractmethod
    async def get_or_create_sub_category(self, name: str, main_category_id: int) -> SubCategory:
        pass

    @abstractmethod
    async def get_or_create_period(self, label: str, sub_category_id: int) -> Period:
        pass

    @abstractmethod
    async def create_offer(self, quantity: Decimal, price: Decimal, period_id: int) -> Offer:
        pass

    @abstractmethod
    async def count_offers(self, period_id: int) -> int:
        pass
