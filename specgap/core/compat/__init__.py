from .index import CatalogIndex, DEFAULT_COMPAT_ROOTS, iter_compat_paths
from .models import CompatNode, CompatRecord, SupportStatement, build_compat_tree

__all__ = [
    "CatalogIndex",
    "DEFAULT_COMPAT_ROOTS",
    "iter_compat_paths",
    "CompatNode",
    "CompatRecord",
    "SupportStatement",
    "build_compat_tree",
]
