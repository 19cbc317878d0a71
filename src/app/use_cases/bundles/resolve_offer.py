"""Resolve Offer Use Case

Maps a client's (main, sub, period, option_number) selection to an offer.
"""

from libs.result import Result, Return, Error
from src.app.repositories.catalog_repository import CatalogRepository
from .dtos import ResolvedOfferDTO
from .list_catalog import build_catalog_groups


class ResolveOffer:
    """
    Use Case: Resolve an option number to an offer

    Uses the same store query and the same grouping as ListCatalog,
    restricted to the requested names, so option N here is option N in the
    listing.

    Errors:
        CATALOG_NOT_FOUND: No offers for the triple, or the names match more
            than one category chain
        INVALID_OPTION: option_number outside [1, group size]
    """

    def __init__(self, catalog_repo: CatalogRepository):
        self.catalog_repo = catalog_repo

    async def execute(
        self, main_category: str, sub_category: str, period: str, option_number: int
    ) -> Result[ResolvedOfferDTO]:
        entries = await self.catalog_repo.list_entries(
            main_category=main_category,
            sub_category=sub_category,
            period=period,
        )
        groups = build_catalog_groups(entries)

        if not groups:
            return Return.err(
                Error(
                    code="CATALOG_NOT_FOUND",
                    message=f"No bundles found for {main_category} > {sub_category} > {period}",
                )
            )

        if len(groups) > 1:
            return Return.err(
                Error(
                    code="CATALOG_NOT_FOUND",
                    message=f"No bundles found for {main_category} > {sub_category} > {period}",
                    reason=f"names match {len(groups)} catalog groups",
                )
            )

        group = groups[0]
        if option_number < 1 or option_number > len(group.options):
            return Return.err(
                Error(
                    code="INVALID_OPTION",
                    message=f"Invalid option number {option_number}",
                    reason=f"valid options: 1..{len(group.options)}",
                )
            )

        option = group.options[option_number - 1]
        return Return.ok(
            ResolvedOfferDTO(
                offer_id=option.offer_id,
                main_category=group.main_category,
                sub_category=group.sub_category,
                period=group.period,
                option_number=option.option_number,
                quantity=option.quantity,
                price=option.price,
            )
        )
