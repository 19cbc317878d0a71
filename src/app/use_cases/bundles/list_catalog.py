"""List Catalog Use Case

Aggregates the catalog into numbered option groups.
"""

from itertools import groupby
from typing import List
from libs.result import Result, Return
from src.app.repositories.catalog_repository import CatalogRepository
from src.domain.catalog import CatalogEntry
from .dtos import CatalogGroupDTO, CatalogOptionDTO, CatalogResponseDTO


def build_catalog_groups(entries: List[CatalogEntry]) -> List[CatalogGroupDTO]:
    """
    Group joined catalog rows by their (main, sub, period) id triple

    Entries must arrive ordered by main, sub, period and offer id (the
    order CatalogRepository.list_entries guarantees). Option numbers are
    the 1-based position of each offer inside its group.
    """
    groups = []
    for _, rows in groupby(entries, key=lambda entry: entry.group_key):
        rows = list(rows)
        first = rows[0]
        groups.append(
            CatalogGroupDTO(
                main_category_id=first.main_category_id,
                sub_category_id=first.sub_category_id,
                period_id=first.period_id,
                main_category=first.main_category,
                sub_category=first.sub_category,
                period=first.period,
                label=first.label,
                options=[
                    CatalogOptionDTO(
                        option_number=position,
                        offer_id=row.offer_id,
                        quantity=row.quantity,
                        price=row.price,
                    )
                    for position, row in enumerate(rows, start=1)
                ],
            )
        )
    return groups


class ListCatalog:
    """
    Use Case: List the bundle catalog

    Read-only. Two calls without a catalog change return identical groups
    and option numbers, because clients purchase by option number.
    """

    def __init__(self, catalog_repo: CatalogRepository):
        self.catalog_repo = catalog_repo

    async def execute(self) -> Result[CatalogResponseDTO]:
        entries = await self.catalog_repo.list_entries()
        return Return.ok(CatalogResponseDTO(groups=build_catalog_groups(entries)))
