from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    MISSING_KEY = "MissingKey"
    NO_COMPAT_DATA = "NoCompatData"
    NO_SPEC_LINKED = "NoSpecLinked"


class CatalogError(Exception):
    """Inconsistency in the catalog snapshot. Fatal for the run."""

    kind: ErrorKind

    def __init__(self, message: str, *, subject: Optional[str] = None):
        super().__init__(message)
        self.subject = subject


class MissingKeyError(CatalogError):
    kind = ErrorKind.MISSING_KEY

    def __init__(self, path: str, segment: str):
        super().__init__(f"Compat key {path!r} not found (missing segment {segment!r})", subject=path)
        self.segment = segment


class NoCompatDataError(CatalogError):
    kind = ErrorKind.NO_COMPAT_DATA

    def __init__(self, path: str):
        super().__init__(f"Compat key {path!r} has no compat data", subject=path)


class NoSpecLinkedError(CatalogError):
    kind = ErrorKind.NO_SPEC_LINKED

    def __init__(self, feature_id: str, urls: list[str]):
        super().__init__(f"No spec found in spec catalog for {feature_id!r} ({', '.join(urls)})", subject=feature_id)
        self.urls = list(urls)
