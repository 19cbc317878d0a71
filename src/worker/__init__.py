"""Background workers for the airtime service"""
from .catalog_seeder import CatalogSeederWorker, DEFAULT_CATALOG

__all__ = [
    "CatalogSeederWorker",
    "DEFAULT_CATALOG",
]
