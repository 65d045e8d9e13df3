from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set, Tuple

from specgap.core.compat.models import CompatRecord, SupportStatement
from specgap.core.features.models import Baseline

DEFAULT_BROWSER_ROSTER: Tuple[str, ...] = (
    "chrome",
    "chrome_android",
    "edge",
    "firefox",
    "firefox_android",
    "safari",
    "safari_ios",
)

# "more than six of seven". Coarse on purpose, review before changing.
DEFAULT_LOW_BASELINE_THRESHOLD = 6


def version_key(version: str) -> Tuple[int, ...]:
    """Sortable key for BCD version strings ("79", "15.4", "≤18")."""
    parts: List[int] = []
    for part in version.lstrip("≤").split("."):
        try:
            parts.append(int(part))
        except ValueError:
            break
    return tuple(parts)


def released_version(statement: Optional[SupportStatement]) -> Optional[str]:
    # True/False/None and "preview" are not released versions
    if statement is None or not isinstance(statement.version_added, str):
        return None
    if not version_key(statement.version_added):
        return None
    return statement.version_added


def evaluate_support(
    records: Sequence[CompatRecord],
    roster: Sequence[str] = DEFAULT_BROWSER_ROSTER,
    *,
    low_baseline_threshold: int = DEFAULT_LOW_BASELINE_THRESHOLD,
) -> Tuple[Dict[str, str], Baseline]:
    """Approximate (support, baseline) across all ``records``.

    Each browser keeps the highest version_added over the records, unless
    one record lacks an entry for it, lacks a released version or is
    partial/flag-gated, in which case the browser is dropped.
    """
    retained: Dict[str, str] = {}
    disqualified: Set[str] = set()

    for record in records:
        for browser in roster:
            if browser in disqualified:
                continue
            statement = record.current_support(browser)
            version = released_version(statement)
            if statement is None or version is None or statement.is_gated:
                disqualified.add(browser)
                retained.pop(browser, None)
                continue
            current = retained.get(browser)
            if current is None or version_key(version) > version_key(current):
                retained[browser] = version

    support = {b: retained[b] for b in roster if b in retained}
    baseline: Baseline = "low" if len(support) > low_baseline_threshold else False
    return support, baseline
