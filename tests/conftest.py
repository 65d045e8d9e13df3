from typing import Dict, List

import pytest

from specgap.core.compat.index import CatalogIndex
from specgap.core.compat.models import CompatTree, build_compat_tree
from specgap.core.features.models import FeatureDescriptor
from specgap.core.specs.models import SpecRecord
from specgap.core.specs.resolver import SpecResolver


ALL_BROWSERS = ["chrome", "chrome_android", "edge", "firefox", "firefox_android", "safari", "safari_ios"]


def support_for(version: str, browsers: List[str] = ALL_BROWSERS, **overrides) -> Dict[str, dict]:
    """BCD support block with the same version_added everywhere, plus overrides."""
    block = {b: {"version_added": version} for b in browsers}
    block.update(overrides)
    return block


def compat_catalog() -> dict:
    return {
        "__meta": {"version": "0.0.0-test"},
        "api": {
            "Widget": {
                "__compat": {
                    "spec_url": [
                        "https://w3c.github.io/widget/#widget-interface",
                        "https://html.spec.whatwg.org/multipage/widgets.html#widget",
                    ],
                    "support": {
                        "chrome": {"version_added": "100"},
                        "edge": {"version_added": "100"},
                        "firefox": {"version_added": False},
                        "firefox_android": {"version_added": False},
                        "safari": {"version_added": False},
                        "safari_ios": {"version_added": False},
                    },
                },
                "open": {
                    "__compat": {
                        "spec_url": "https://w3c.github.io/widget/#dom-widget-open",
                        "support": {
                            "chrome": {"version_added": "101"},
                            "edge": {"version_added": "101"},
                            "firefox": {
                                "version_added": "110",
                                "flags": [{"type": "preference", "name": "dom.widget.enabled"}],
                            },
                        },
                    },
                },
            },
        },
        "css": {
            "properties": {
                "foo": {
                    "__compat": {
                        "spec_url": "https://drafts.csswg.org/css-foo/#propdef-foo",
                        "mdn_url": "https://developer.mozilla.org/docs/Web/CSS/foo",
                        "support": support_for("100"),
                    },
                },
                "display": {
                    "__compat": {
                        "spec_url": "https://drafts.csswg.org/css-display/#the-display-properties",
                        "support": support_for("1"),
                    },
                    "grid": {
                        "__compat": {
                            "spec_url": "https://drafts.csswg.org/css-display-3/#valdef-display-grid",
                            "support": support_for(
                                "57",
                                safari_ios={"version_added": "10.3", "partial_implementation": True},
                            ),
                        },
                    },
                },
            },
        },
        "html": {
            "elements": {
                "blink": {"__compat": {"support": {}}},
            },
        },
    }


def spec_catalog() -> List[dict]:
    display_series = {
        "shortname": "css-display",
        "currentSpecification": "css-display-4",
        "nightlyUrl": "https://drafts.csswg.org/css-display/",
        "releaseUrl": "https://www.w3.org/TR/css-display/",
    }
    return [
        {
            "shortname": "css-foo",
            "url": "https://drafts.csswg.org/css-foo/",
            "organization": "W3C",
            "title": "CSS Foo",
            "nightly": {"url": "https://drafts.csswg.org/css-foo/"},
        },
        {
            "shortname": "css-display-3",
            "url": "https://www.w3.org/TR/css-display-3/",
            "organization": "W3C",
            "nightly": {"url": "https://drafts.csswg.org/css-display-3/"},
            "release": {"url": "https://www.w3.org/TR/css-display-3/", "status": "Candidate Recommendation Snapshot"},
            "series": display_series,
        },
        {
            "shortname": "css-display-4",
            "url": "https://www.w3.org/TR/css-display-4/",
            "organization": "W3C",
            "nightly": {"url": "https://drafts.csswg.org/css-display-4/"},
            "release": {"url": "https://www.w3.org/TR/css-display-4/", "status": "Working Draft"},
            "series": display_series,
        },
        {
            "shortname": "widget",
            "url": "https://www.w3.org/TR/widget/",
            "organization": "W3C",
            "nightly": {"url": "https://w3c.github.io/widget/"},
            "release": {"url": "https://www.w3.org/TR/widget/", "status": "Recommendation"},
        },
        {
            "shortname": "html",
            "url": "https://html.spec.whatwg.org/multipage/",
            "organization": "WHATWG",
            "nightly": {"url": "https://html.spec.whatwg.org/multipage/"},
        },
    ]


def feature_catalog() -> Dict[str, dict]:
    return {
        "F1": {
            "name": "Foo",
            "status": {"baseline": "high", "support": {b: "100" for b in ALL_BROWSERS}},
            "spec": "https://drafts.csswg.org/css-foo/",
            "compat_features": ["css.properties.foo"],
        },
        "F2": {
            "name": "Widget",
            "status": {"baseline": False, "support": {"chrome": "100", "edge": "100"}},
            "spec": "https://w3c.github.io/widget/",
        },
        "display-grid": {
            "status": {"baseline": "low", "support": {b: "57" for b in ALL_BROWSERS}},
            "spec": ["https://drafts.csswg.org/css-display-3/"],
            "compat_features": ["css.properties.display", "css.properties.display.grid"],
        },
        "whatwg-only": {
            "status": {"baseline": "high", "support": {}},
            "spec": "https://html.spec.whatwg.org/multipage/widgets.html",
        },
        "moved-stub": {
            "kind": "moved",
            "redirect_target": "F1",
        },
    }


@pytest.fixture()
def compat_tree() -> CompatTree:
    return build_compat_tree(compat_catalog())


@pytest.fixture()
def index(compat_tree) -> CatalogIndex:
    return CatalogIndex(compat_tree)


@pytest.fixture()
def specs() -> List[SpecRecord]:
    return [SpecRecord.model_validate(s) for s in spec_catalog()]


@pytest.fixture()
def spec_by_name(specs) -> Dict[str, SpecRecord]:
    return {s.shortname: s for s in specs}


@pytest.fixture()
def resolver(specs) -> SpecResolver:
    return SpecResolver(specs)


@pytest.fixture()
def features() -> Dict[str, FeatureDescriptor]:
    return {fid: FeatureDescriptor.model_validate({**d, "id": fid}) for fid, d in feature_catalog().items()}
