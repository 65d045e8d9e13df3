from __future__ import annotations

from typing import Iterable, List, Optional

from specgap.core.features.models import Baseline, FeatureDescriptor, SpecLink
from specgap.core.specs.maturity import INTEROPERABLE_STATUSES, STABLE_STATUSES
from specgap.core.support.codebases import count_codebases

from .models import AnomalyCategory, AnomalyRecord, SpecRef


def _record(
    category: AnomalyCategory,
    baseline: Baseline,
    feature_id: str,
    link: SpecLink,
    pseudo: bool,
) -> AnomalyRecord:
    return AnomalyRecord(
        category=category,
        baseline=baseline,
        feature=feature_id,
        spec=SpecRef(shortname=link.spec.shortname, url=link.spec.url),
        compat_keys=list(link.compat_keys),
        pseudo=pseudo,
    )


def classify(
    feature_id: str,
    baseline: Baseline,
    support_browsers: Iterable[str],
    links: List[SpecLink],
    *,
    pseudo: bool = False,
) -> List[AnomalyRecord]:
    out: List[AnomalyRecord] = []

    if baseline is False and count_codebases(support_browsers) <= 1:
        # single engine: only specs already at the end of the track are worth reporting
        for link in links:
            if link.spec.release_status in INTEROPERABLE_STATUSES:
                out.append(_record(AnomalyCategory.NOT_YET_INTEROPERABLE, False, feature_id, link, pseudo))
        return out

    for link in links:
        if link.spec.release is None:
            out.append(_record(AnomalyCategory.LATE_INCUBATION, baseline, feature_id, link, pseudo))

    for link in links:
        if link.spec.release is not None and link.spec.release_status not in STABLE_STATUSES:
            out.append(_record(AnomalyCategory.LATE_WORKING_DRAFT, baseline, feature_id, link, pseudo))

    return out


def classify_feature(
    feature: FeatureDescriptor,
    links: List[SpecLink],
    *,
    pseudo: bool = False,
) -> List[AnomalyRecord]:
    baseline: Optional[Baseline] = feature.baseline
    if not feature.has_baseline or not links:
        return []
    assert baseline is not None
    return classify(feature.id, baseline, feature.support.keys(), links, pseudo=pseudo)
