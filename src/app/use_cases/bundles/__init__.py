"""Bundle catalog and purchase use cases"""
from .list_catalog import ListCatalog, build_catalog_groups
from .resolve_offer import ResolveOffer
from .purchase_bundle import PurchaseBundle
from .get_account_bundles import GetAccountBundles
from .seed_catalog import SeedCatalog
from .dtos import (
    CatalogOptionDTO,
    CatalogGroupDTO,
    CatalogResponseDTO,
    ResolvedOfferDTO,
    PurchaseCommandDTO,
    PurchaseResponseDTO,
    AccountBundleDTO,
    AccountBundlesResponseDTO,
    OfferSeedDTO,
    CatalogSeedDTO,
    SeedCatalogResultDTO,
)

__all__ = [
    "ListCatalog",
    "build_catalog_groups",
    "ResolveOffer",
    "PurchaseBundle",
    "GetAccountBundles",
    "SeedCatalog",
    "CatalogOptionDTO",
    "CatalogGroupDTO",
    "CatalogResponseDTO",
    "ResolvedOfferDTO",
    "PurchaseCommandDTO",
    "PurchaseResponseDTO",
    "AccountBundleDTO",
    "AccountBundlesResponseDTO",
    "OfferSeedDTO",
    "CatalogSeedDTO",
    "SeedCatalogResultDTO",
]
