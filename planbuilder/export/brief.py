"""
Plan brief: the completed wizard answers laid out as titled sections.

Both exporters and the summary preview render from `brief_sections`, so the
txt and docx files always carry the same content in the same order.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import (
    PRIORITY_NICE_TO_HAVE,
    STEP_BUSINESS_CONTEXT,
    STEP_FEATURES,
    STEP_PROJECT_TYPE,
    STEP_TIMELINE_BUDGET,
)
from ..pricing.cost import Feature, selected_features, total_cost
from ..steps.catalog import feature_option, project_type_name
from .formatters import format_currency, format_priority, priority_rank

Section = Tuple[str, List[str]]

# Section title -> (form key, field labels in display order)
SECTION_FIELDS: Dict[str, Tuple[str, List[Tuple[str, str]]]] = {
    "Business Context": (
        STEP_BUSINESS_CONTEXT,
        [
            ("companyName", "Company"),
            ("industry", "Industry"),
            ("targetAudience", "Target Audience"),
            ("teamSize", "Team Size"),
            ("website", "Website"),
        ],
    ),
    "Timeline & Budget": (
        STEP_TIMELINE_BUDGET,
        [
            ("timeline", "Timeline"),
            ("budget", "Budget"),
            ("goals", "Main Goal"),
        ],
    ),
}


def _s(v: Any) -> str:
    return str(v or "").strip()


def _project_lines(section: Mapping[str, Any]) -> List[str]:
    kind = _s(section.get("type"))
    if not kind:
        return []
    lines = [f"Type: {project_type_name(kind)}"]
    if _s(section.get("scale")):
        lines.append(f"Scale: {section['scale']}")
    return lines


def _field_lines(section: Mapping[str, Any], labels: List[Tuple[str, str]]) -> List[str]:
    lines = [f"{label}: {_s(section.get(key))}" for key, label in labels if _s(section.get(key))]
    socials = section.get("socialLinks") or {}
    if isinstance(socials, Mapping):
        for platform, url in socials.items():
            if _s(url):
                lines.append(f"{platform.capitalize()}: {url}")
    return lines


def feature_lines(features: Any) -> List[str]:
    """Selected features, must-haves first, catalog names where known."""
    if not isinstance(features, Mapping):
        return []
    chosen = []
    for feature_id, value in features.items():
        if isinstance(value, Mapping) and value.get("selected"):
            priority = value.get("priority") or PRIORITY_NICE_TO_HAVE
            option = feature_option(feature_id)
            chosen.append((priority_rank(priority), option.name if option else feature_id, priority))
    # sorted() is stable, so equal priorities keep form order
    chosen = sorted(chosen, key=lambda t: t[0])
    return [f"{name} ({format_priority(priority)})" for _, name, priority in chosen]


def estimate_lines(estimate: Optional[Sequence[Feature]], currency: str = "USD") -> List[str]:
    if not estimate:
        return []
    lines = [f"{f.name}: {format_currency(f.base_cost, currency)}" for f in selected_features(estimate)]
    lines.append(f"Total: {format_currency(total_cost(estimate), currency)}")
    return lines


def brief_sections(
    form_data: Mapping[str, Any],
    estimate: Optional[Sequence[Feature]] = None,
) -> List[Section]:
    """
    Returns [(title, lines)] in wizard order. Empty sections keep their
    title with no lines; renderers print a placeholder.
    """
    project = form_data.get(STEP_PROJECT_TYPE) or {}
    sections: List[Section] = [
        ("Project Type", _project_lines(project if isinstance(project, Mapping) else {})),
    ]

    for title, (key, labels) in SECTION_FIELDS.items():
        section = form_data.get(key) or {}
        sections.append((title, _field_lines(section, labels) if isinstance(section, Mapping) else []))

    sections.append(("Features", feature_lines(form_data.get(STEP_FEATURES))))

    if estimate is not None:
        sections.append(("Cost Estimate", estimate_lines(estimate)))

    return sections


def brief_title(form_data: Mapping[str, Any]) -> str:
    business = form_data.get(STEP_BUSINESS_CONTEXT) or {}
    company = _s(business.get("companyName")) if isinstance(business, Mapping) else ""
    return f"{company} Project Plan" if company else "Project Plan"
