import json

import pytest
from pydantic import ValidationError

from conftest import compat_catalog, feature_catalog, spec_catalog
from specgap.catalogs.loader import (
    CatalogLoadError,
    load_compat_tree,
    load_features,
    load_specs,
    parse_features,
    parse_specs,
)


def _write(tmp_path, name, obj):
    p = tmp_path / name
    p.write_text(json.dumps(obj), encoding="utf-8")
    return p


def test_load_bare_feature_mapping(tmp_path):
    features = load_features(_write(tmp_path, "features.json", feature_catalog()))
    assert features["F1"].id == "F1"
    assert features["F1"].baseline == "high"
    assert features["F2"].baseline is False
    assert features["F2"].has_baseline
    assert not features["moved-stub"].has_baseline


def test_load_packaged_feature_data(tmp_path):
    data = {"browsers": {}, "groups": {}, "snapshots": {}, "features": feature_catalog()}
    features = load_features(_write(tmp_path, "data.json", data))
    assert set(features) == set(feature_catalog())


def test_feature_yaml_file(tmp_path):
    p = tmp_path / "features.yaml"
    p.write_text("f:\n  status:\n    baseline: low\n  spec: https://example.org/\n", encoding="utf-8")
    assert load_features(p)["f"].baseline == "low"


def test_bad_baseline_value_is_rejected():
    with pytest.raises(ValidationError):
        parse_features({"f": {"status": {"baseline": "medium"}}})


def test_compat_tree_ignores_meta(tmp_path):
    tree = load_compat_tree(_write(tmp_path, "bcd.json", compat_catalog()))
    assert set(tree) == {"api", "css", "html"}
    assert tree["css"].children["properties"].children["display"].children["grid"].compat is not None


def test_load_specs_keeps_order_and_aliases(tmp_path):
    specs = load_specs(_write(tmp_path, "index.json", spec_catalog()))
    assert [s.shortname for s in specs] == ["css-foo", "css-display-3", "css-display-4", "widget", "html"]
    assert specs[2].series.current_specification == "css-display-4"
    assert specs[2].is_current_in_series
    assert not specs[1].is_current_in_series
    assert specs[0].release is None


def test_wrong_shapes_raise():
    with pytest.raises(CatalogLoadError):
        parse_specs({"not": "a list"})
    with pytest.raises(CatalogLoadError):
        parse_features(["nope"])


def test_unreadable_or_malformed_file(tmp_path):
    with pytest.raises(CatalogLoadError):
        load_specs(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")
    with pytest.raises(CatalogLoadError):
        load_specs(bad)
