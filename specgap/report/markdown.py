"""
Markdown rendering of an AnomalyReport.

One section per category, one collapsible <details> block per baseline bucket.
"""
from __future__ import annotations

from typing import Dict, List

from specgap.core.anomalies.models import AnomalyCategory, AnomalyRecord
from specgap.core.anomalies.report import BASELINE_ORDER, AnomalyReport
from specgap.core.features.models import Baseline


SECTION_TITLES: Dict[AnomalyCategory, str] = {
    AnomalyCategory.LATE_INCUBATION: "Late incubations?",
    AnomalyCategory.LATE_WORKING_DRAFT: "Worth publishing as Candidate Recommendation?",
    AnomalyCategory.NOT_YET_INTEROPERABLE: "Recommendations without interoperable implementations?",
}

SECTION_INTROS: Dict[AnomalyCategory, str] = {
    AnomalyCategory.LATE_INCUBATION: (
        "This is a list of well-supported features defined in {org} specs that are still\n"
        "at the incubation phase. Beware, feature data tends to reference the latest\n"
        "level of a spec, but the feature may have appeared in a previous level, and\n"
        "that previous level may be on the Recommendation track."
    ),
    AnomalyCategory.LATE_WORKING_DRAFT: (
        "This is a list of well-supported features defined in {org} specs that are still\n"
        "at the Working Draft phase. Same comment as above for levels!"
    ),
    AnomalyCategory.NOT_YET_INTEROPERABLE: (
        "This is a list of features supported by at most one browser engine that are\n"
        "defined in {org} specs already published as (Proposed) Recommendation."
    ),
}

BUCKET_SUMMARIES: Dict[str, str] = {
    "high": "Baseline high features",
    "low": "Baseline low features",
    "false": "Non-Baseline features",
}


def _bucket_key(baseline: Baseline) -> str:
    return "false" if baseline is False else str(baseline)


def format_record(record: AnomalyRecord) -> str:
    line = f"- `{record.feature}` in spec [{record.spec.shortname}]({record.spec.url})"
    if record.compat_keys:
        line += " via " + ", ".join(f"`{k}`" for k in record.compat_keys)
    return line


def format_list(records: List[AnomalyRecord]) -> str:
    return "\n".join(format_record(r) for r in records)


def render_section(report: AnomalyReport, category: AnomalyCategory, *, organization: str = "W3C") -> str:
    parts = [f"## {SECTION_TITLES[category]}", "", SECTION_INTROS[category].format(org=organization), ""]
    for baseline in BASELINE_ORDER:
        # single-engine records are always bucket false
        if category is AnomalyCategory.NOT_YET_INTEROPERABLE and baseline is not False:
            continue
        records = report.records(category, baseline)
        summary = BUCKET_SUMMARIES[_bucket_key(baseline)]
        parts.append("<details>")
        parts.append(f"  <summary>{summary} ({len(records)})</summary>")
        parts.append("")
        parts.append(format_list(records))
        parts.append("</details>")
        parts.append("")
    return "\n".join(parts).rstrip()


def render_markdown(report: AnomalyReport, *, organization: str = "W3C") -> str:
    sections = [render_section(report, category, organization=organization) for category in AnomalyCategory]
    return "\n\n".join(sections) + "\n"
