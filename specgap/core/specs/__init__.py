from .models import SpecRecord
from .resolver import SpecResolver, is_relevant, relevant_specs

__all__ = [
    "SpecRecord",
    "SpecResolver",
    "is_relevant",
    "relevant_specs",
]
