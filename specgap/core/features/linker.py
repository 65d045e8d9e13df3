from __future__ import annotations

import logging
from typing import Dict, List, Optional

from specgap.core.compat.index import CatalogIndex
from specgap.core.errors import NoSpecLinkedError
from specgap.core.specs.models import SpecRecord
from specgap.core.specs.resolver import SpecResolver

from .models import FeatureDescriptor, SpecLink

log = logging.getLogger("specgap.linker")


def _link_through_compat_keys(
    feature: FeatureDescriptor,
    resolver: SpecResolver,
    index: CatalogIndex,
) -> List[SpecLink]:
    # a key may link several specs and a spec may be linked by several keys
    order = {id(s): pos for pos, s in enumerate(resolver.specs)}
    links: Dict[int, SpecLink] = {}
    seen_keys = set()
    for key in feature.compat_features or []:
        if key in seen_keys:
            continue
        seen_keys.add(key)
        urls = index.compat_record(key).spec_urls()
        for spec in resolver.relevant(urls):
            link = links.setdefault(id(spec), SpecLink(spec=spec))
            link.compat_keys.append(key)
    return sorted(links.values(), key=lambda link: order.get(id(link.spec), len(order)))


def _check_spec_urls(feature: FeatureDescriptor, resolver: SpecResolver) -> List[SpecRecord]:
    # any declared spec reference must exist in the catalog, whatever links it
    urls = feature.spec_urls()
    specs = resolver.relevant(urls)
    if urls and not specs:
        raise NoSpecLinkedError(feature.id, urls)
    return specs


def belongs_to(spec: SpecRecord, organization: Optional[str]) -> bool:
    return organization is None or spec.organization == organization


def link_specs(
    feature: FeatureDescriptor,
    resolver: SpecResolver,
    index: CatalogIndex,
    *,
    organization: Optional[str] = "W3C",
) -> List[SpecLink]:
    """Specs that define ``feature``, restricted to ``organization``.

    Compat keys take precedence over the feature's own spec URLs and are kept
    as provenance on each link. A declared spec reference that matches no
    spec in the catalog raises ``NoSpecLinkedError`` either way. An empty
    result means the feature is out of scope for the organization.
    """
    specs = _check_spec_urls(feature, resolver)
    if feature.compat_features:
        links = _link_through_compat_keys(feature, resolver, index)
    else:
        links = [SpecLink(spec=s) for s in specs]

    kept = [link for link in links if belongs_to(link.spec, organization)]
    if links and not kept:
        log.debug("feature %s only links to specs outside %s", feature.id, organization)
    return kept
