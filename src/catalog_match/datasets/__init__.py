from catalog_match.datasets.profiles import (
    RETAIL_COLUMNS,
    RETAIL_PROFILE,
    RETAIL_SCHEMA,
    VENDING_COLUMNS,
    VENDING_PROFILE,
    VENDING_SCHEMA,
)
from catalog_match.datasets.reference import ReferenceCatalogGenerator

__all__ = [
    "RETAIL_COLUMNS",
    "RETAIL_PROFILE",
    "RETAIL_SCHEMA",
    "VENDING_COLUMNS",
    "VENDING_PROFILE",
    "VENDING_SCHEMA",
    "ReferenceCatalogGenerator",
]
