from .loader import (
    CatalogLoadError,
    load_compat_tree,
    load_features,
    load_specs,
)

__all__ = [
    "CatalogLoadError",
    "load_compat_tree",
    "load_features",
    "load_specs",
]
