from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from specgap.core.features.models import Baseline

from .models import AnomalyCategory, AnomalyRecord

BASELINE_ORDER: Tuple[Baseline, ...] = ("high", "low", False)


def baseline_label(baseline: Baseline) -> str:
    return "false" if baseline is False else str(baseline)


class AnomalyReport:
    """Anomaly records grouped by category, then by baseline bucket."""

    def __init__(self, records: Iterable[AnomalyRecord] = ()):
        self._groups: Dict[AnomalyCategory, Dict[Baseline, List[AnomalyRecord]]] = {
            category: {b: [] for b in BASELINE_ORDER} for category in AnomalyCategory
        }
        self.meta: Dict[str, Any] = {}
        self.extend(records)

    def add(self, record: AnomalyRecord) -> None:
        self._groups[record.category][record.baseline].append(record)

    def extend(self, records: Iterable[AnomalyRecord]) -> None:
        for r in records:
            self.add(r)

    def records(
        self,
        category: Optional[AnomalyCategory] = None,
        baseline: Optional[Baseline] = None,
    ) -> List[AnomalyRecord]:
        # baseline=None means "any bucket"; False is a real bucket
        out: List[AnomalyRecord] = []
        for cat, buckets in self._groups.items():
            if category is not None and cat != category:
                continue
            for b in BASELINE_ORDER:
                if baseline is not None and b != baseline:
                    continue
                out.extend(buckets[b])
        return out

    def grouped(self) -> Dict[AnomalyCategory, Dict[Baseline, List[AnomalyRecord]]]:
        return {cat: {b: list(rs) for b, rs in buckets.items()} for cat, buckets in self._groups.items()}

    def count(self, category: Optional[AnomalyCategory] = None, baseline: Optional[Baseline] = None) -> int:
        return len(self.records(category, baseline))

    def for_feature(self, feature_id: str) -> List[AnomalyRecord]:
        return [r for r in self if r.feature == feature_id]

    def __iter__(self) -> Iterator[AnomalyRecord]:
        return iter(self.records())

    def __len__(self) -> int:
        return self.count()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": dict(self.meta),
            "categories": {
                cat.value: {
                    baseline_label(b): [r.model_dump(mode="json") for r in rs]
                    for b, rs in buckets.items()
                }
                for cat, buckets in self._groups.items()
            },
        }
