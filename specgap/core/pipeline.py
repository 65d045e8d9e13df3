from __future__ import annotations

import logging
import time
from typing import Mapping, Optional, Sequence, Set

from specgap.config import AnalysisConfig
from specgap.core.anomalies.classifier import classify_feature
from specgap.core.anomalies.report import AnomalyReport
from specgap.core.compat.index import CatalogIndex
from specgap.core.compat.models import CompatTree
from specgap.core.features.linker import link_specs
from specgap.core.features.models import FeatureDescriptor
from specgap.core.features.pseudo import build_pseudo_features
from specgap.core.specs.models import SpecRecord
from specgap.core.specs.resolver import SpecResolver

log = logging.getLogger("specgap.pipeline")


def _ms(t0: float, t1: float) -> int:
    return int(round((t1 - t0) * 1000))


def analyze(
    features: Mapping[str, FeatureDescriptor],
    compat_tree: CompatTree,
    specs: Sequence[SpecRecord],
    config: Optional[AnalysisConfig] = None,
) -> AnomalyReport:
    """Run one analysis over a consistent snapshot of the three catalogs.

    Catalog inconsistencies (MissingKey, NoCompatData, NoSpecLinked) are
    raised as ``CatalogError`` and abort the run.
    """
    cfg = config or AnalysisConfig()
    t0_total = time.perf_counter()

    t0_index = time.perf_counter()
    index = CatalogIndex(compat_tree, cfg.compat_roots)
    path_count = index.prime()
    resolver = SpecResolver(specs)
    t1_index = time.perf_counter()

    report = AnomalyReport()
    covered: Set[str] = set()
    analysed = 0
    excluded = 0
    unclassified = 0

    t0_link = time.perf_counter()
    for feature_id, feature in features.items():
        if feature.status is None:
            unclassified += 1
            continue
        links = link_specs(feature, resolver, index, organization=cfg.organization)
        if not feature.has_baseline:
            unclassified += 1
            continue
        if not links:
            excluded += 1
            continue
        analysed += 1
        covered.update(link.spec.shortname for link in links)
        report.extend(classify_feature(feature, links))
    t1_link = time.perf_counter()

    pseudo_count = 0
    t0_pseudo = time.perf_counter()
    if cfg.include_pseudo_features:
        for pseudo in build_pseudo_features(
            resolver,
            index,
            organization=cfg.organization,
            exclude=covered,
            roster=cfg.browser_roster,
            low_baseline_threshold=cfg.low_baseline_threshold,
        ):
            pseudo_count += 1
            report.extend(classify_feature(pseudo.feature, [pseudo.link], pseudo=True))
    t1_pseudo = time.perf_counter()

    report.meta = {
        "organization": cfg.organization,
        "compat_paths": path_count,
        "spec_count": len(resolver),
        "features_analysed": analysed,
        "features_excluded": excluded,
        "features_unclassified": unclassified,
        "pseudo_features": pseudo_count,
        "record_count": len(report),
        "index_ms": _ms(t0_index, t1_index),
        "link_ms": _ms(t0_link, t1_link),
        "pseudo_ms": _ms(t0_pseudo, t1_pseudo),
        "total_ms": _ms(t0_total, time.perf_counter()),
    }

    log.debug(
        "analyze org=%s paths=%s analysed=%s excluded=%s pseudo=%s records=%s index_ms=%s link_ms=%s pseudo_ms=%s total_ms=%s",
        cfg.organization,
        path_count,
        analysed,
        excluded,
        pseudo_count,
        report.meta["record_count"],
        report.meta["index_ms"],
        report.meta["link_ms"],
        report.meta["pseudo_ms"],
        report.meta["total_ms"],
    )
    return report
