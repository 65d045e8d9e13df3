"""
Catalog loaders.

Reads the three catalogs the analysis runs on:
    - web-features data.json ({"features": {...}}) or a bare id -> feature mapping
    - browser-compat-data data.json (tree of compat keys, "__meta" ignored)
    - web-specs index.json (list of spec entries)

Files ending in .yaml/.yml are parsed as YAML, everything else as JSON.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from specgap.core.compat.models import CompatTree, build_compat_tree
from specgap.core.features.models import FeatureDescriptor
from specgap.core.specs.models import SpecRecord

_log = logging.getLogger("specgap.catalogs")


class CatalogLoadError(Exception):
    pass


def _read(path: Path) -> Any:
    path = Path(path)
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogLoadError(f"Cannot read catalog file {path}: {exc}") from exc
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(raw_text)
        return json.loads(raw_text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CatalogLoadError(f"Cannot parse catalog file {path}: {exc}") from exc


def parse_features(raw: Any) -> Dict[str, FeatureDescriptor]:
    if not isinstance(raw, dict):
        raise CatalogLoadError(f"Feature catalog must be a mapping, got {type(raw).__name__}")
    # web-features >= 2 packs features next to browsers/groups/snapshots
    if isinstance(raw.get("features"), dict) and "browsers" in raw:
        raw = raw["features"]
    out: Dict[str, FeatureDescriptor] = {}
    for feature_id, desc in raw.items():
        if not isinstance(desc, dict):
            raise CatalogLoadError(f"Feature {feature_id!r} must be a mapping")
        out[feature_id] = FeatureDescriptor.model_validate({**desc, "id": feature_id})
    return out


def parse_compat_tree(raw: Any) -> CompatTree:
    if not isinstance(raw, dict):
        raise CatalogLoadError(f"Compat catalog must be a mapping, got {type(raw).__name__}")
    return build_compat_tree(raw)


def parse_specs(raw: Any) -> List[SpecRecord]:
    if not isinstance(raw, list):
        raise CatalogLoadError(f"Spec catalog must be a list, got {type(raw).__name__}")
    return [SpecRecord.model_validate(entry) for entry in raw]


def load_features(path: Path) -> Dict[str, FeatureDescriptor]:
    features = parse_features(_read(path))
    _log.info("Loaded %d features from %s", len(features), path)
    return features


def load_compat_tree(path: Path) -> CompatTree:
    tree = parse_compat_tree(_read(path))
    _log.info("Loaded compat tree with roots %s from %s", ",".join(sorted(tree)), path)
    return tree


def load_specs(path: Path) -> List[SpecRecord]:
    specs = parse_specs(_read(path))
    _log.info("Loaded %d specs from %s", len(specs), path)
    return specs
