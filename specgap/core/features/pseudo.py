from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterator, List, Optional, Sequence

from specgap.core.compat.index import CatalogIndex
from specgap.core.specs.resolver import SpecResolver
from specgap.core.support.evaluator import (
    DEFAULT_BROWSER_ROSTER,
    DEFAULT_LOW_BASELINE_THRESHOLD,
    evaluate_support,
)

from .linker import belongs_to
from .models import FeatureDescriptor, FeatureStatus, SpecLink

log = logging.getLogger("specgap.linker")


@dataclass
class PseudoFeature:
    feature: FeatureDescriptor
    link: SpecLink


def compat_keys_by_spec(
    resolver: SpecResolver,
    index: CatalogIndex,
    *,
    organization: Optional[str],
) -> Dict[str, List[str]]:
    """shortname -> compat keys whose spec_url points into that spec."""
    out: Dict[str, List[str]] = {}
    for path in index.paths():
        urls = index.compat_record(path).spec_urls()
        if not urls:
            continue
        for spec in resolver.relevant(urls):
            if belongs_to(spec, organization):
                out.setdefault(spec.shortname, []).append(path)
    return out


def build_pseudo_features(
    resolver: SpecResolver,
    index: CatalogIndex,
    *,
    organization: Optional[str] = "W3C",
    exclude: AbstractSet[str] = frozenset(),
    roster: Sequence[str] = DEFAULT_BROWSER_ROSTER,
    low_baseline_threshold: int = DEFAULT_LOW_BASELINE_THRESHOLD,
) -> Iterator[PseudoFeature]:
    """Treat each spec of ``organization`` as a feature made of its compat keys.

    Specs named in ``exclude`` (typically the ones curated features already
    cover) and specs whose derived support is empty are skipped.
    """
    keys_by_spec = compat_keys_by_spec(resolver, index, organization=organization)
    for spec in resolver.specs:
        if spec.shortname in exclude or spec.shortname not in keys_by_spec:
            continue
        keys = keys_by_spec[spec.shortname]
        support, baseline = evaluate_support(
            [index.compat_record(k) for k in keys],
            roster,
            low_baseline_threshold=low_baseline_threshold,
        )
        if not support:
            log.debug("pseudo feature %s skipped, no browser supports all %s keys", spec.shortname, len(keys))
            continue
        feature = FeatureDescriptor(
            id=spec.shortname,
            name=spec.title,
            status=FeatureStatus(baseline=baseline, support=support),
            spec=spec.url,
            compat_features=list(keys),
        )
        yield PseudoFeature(feature=feature, link=SpecLink(spec=spec, compat_keys=list(keys)))
