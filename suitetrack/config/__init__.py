from .defaults import default_catalog
from .loader import load_catalog
from .types import (
    CatalogConfig,
    ConfigError,
    SubjectConfig,
    UnsupportedConfigFormatError,
)

__all__ = [
    "load_catalog",
    "default_catalog",
    "CatalogConfig",
    "SubjectConfig",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
