from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from specgap.catalogs.loader import CatalogLoadError, load_compat_tree, load_features, load_specs
from specgap.config import load_analysis_config
from specgap.core.errors import CatalogError
from specgap.core.pipeline import analyze
from specgap.report.markdown import render_markdown


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Report web features whose spec maturity lags their browser support")
    ap.add_argument("--features", required=True, help="web-features data.json")
    ap.add_argument("--compat", required=True, help="browser-compat-data data.json")
    ap.add_argument("--specs", required=True, help="web-specs index.json")
    ap.add_argument("--config", default=None, help="Analysis config file (YAML or JSON)")
    ap.add_argument("--organization", default=None, help="Override the organization under analysis")
    ap.add_argument("--format", choices=["markdown", "json"], default="markdown")
    ap.add_argument("--out", default=None, help="Write the report here instead of stdout")
    ap.add_argument("--no-pseudo-features", action="store_true", help="Only analyse curated features")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = load_analysis_config(Path(args.config) if args.config else None)
    if args.organization:
        cfg.organization = args.organization
    if args.no_pseudo_features:
        cfg.include_pseudo_features = False

    try:
        features = load_features(Path(args.features))
        tree = load_compat_tree(Path(args.compat))
        specs = load_specs(Path(args.specs))
        report = analyze(features, tree, specs, cfg)
    except (CatalogError, CatalogLoadError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.format == "json":
        text = json.dumps(report.to_dict(), indent=2, sort_keys=True) + "\n"
    else:
        text = render_markdown(report, organization=cfg.organization or "all")

    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0
