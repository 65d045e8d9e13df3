"""
Run configuration for the spec-gap analysis.

Optional YAML/JSON file, e.g.:
    organization: W3C
    low_baseline_threshold: 6
    include_pseudo_features: true
    browser_roster: [chrome, chrome_android, edge, firefox, firefox_android, safari, safari_ios]

Environment variables:
    SPECGAP_CONFIG_FILE — path to the config file (optional).
        Default search path: <project_root>/specgap.yaml
    SPECGAP_ORGANIZATION — overrides ``organization``.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from specgap.core.compat.index import DEFAULT_COMPAT_ROOTS
from specgap.core.support.evaluator import DEFAULT_BROWSER_ROSTER, DEFAULT_LOW_BASELINE_THRESHOLD

_log = logging.getLogger("specgap.config")


class AnalysisConfig(BaseModel):
    organization: Optional[str] = "W3C"
    compat_roots: List[str] = Field(default_factory=lambda: list(DEFAULT_COMPAT_ROOTS))
    browser_roster: List[str] = Field(default_factory=lambda: list(DEFAULT_BROWSER_ROSTER))
    # flagged for review: derived baseline is "low" above this many browsers
    low_baseline_threshold: int = DEFAULT_LOW_BASELINE_THRESHOLD
    include_pseudo_features: bool = True


def load_analysis_config(path: Optional[Path] = None) -> AnalysisConfig:
    """
    Load the run configuration.

    Returns defaults if the file is absent, unreadable or malformed.
    """
    resolved = _resolve_path(path)
    data: dict = {}
    if resolved is not None and resolved.exists():
        data = _read_mapping(resolved)

    org = os.getenv("SPECGAP_ORGANIZATION", "").strip()
    if org:
        data["organization"] = org

    try:
        return AnalysisConfig.model_validate(data)
    except ValidationError as exc:
        _log.warning("Invalid analysis config %s, using defaults: %s", resolved, exc)
        cfg = AnalysisConfig()
        if org:
            cfg.organization = org
        return cfg


def _read_mapping(resolved: Path) -> dict:
    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read config file %s: %s", resolved, exc)
        return {}

    try:
        if resolved.suffix.lower() == ".json":
            data = json.loads(raw_text)
        else:
            data = yaml.safe_load(raw_text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        _log.warning("Failed to parse config file %s: %s", resolved, exc)
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        _log.warning("Config file %s must be a mapping, got %s", resolved, type(data).__name__)
        return {}
    _log.info("Loaded analysis config from %s", resolved)
    return data


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_path = os.getenv("SPECGAP_CONFIG_FILE", "").strip()
    if env_path:
        return Path(env_path)
    project_root = Path(__file__).resolve().parents[1]
    return project_root / "specgap.yaml"
