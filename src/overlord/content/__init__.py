"""Static content: planets, catalog visitors and engine-built encounters."""

from .catalog import (
    Catalog,
    CatalogError,
    DEFAULT_DATA_DIR,
    get_default_catalog,
    load_catalog,
)

__all__ = [
    "Catalog",
    "CatalogError",
    "DEFAULT_DATA_DIR",
    "get_default_catalog",
    "load_catalog",
]
