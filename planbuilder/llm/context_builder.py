from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ..core.constants import SECTION_KEYS


SECTION_LABELS: Dict[str, str] = {
    "projectType": "Project Type",
    "businessContext": "Business Context",
    "timelineBudget": "Timeline & Budget",
    "features": "Features",
}

PLAN_REQUEST = (
    "Based on this information, could you please create a project plan that includes:\n"
    "1. Project scope and objectives\n"
    "2. Technical requirements\n"
    "3. Timeline with key milestones\n"
    "4. Budget breakdown\n"
    "5. Suggested team structure\n"
    "6. Recommended approach\n\n"
    "Please help me refine this plan and provide any additional advice."
)


def _as_text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, list):
        return ", ".join([str(x) for x in v if x is not None]).strip()
    return str(v).strip()


def _clip(s: str, n: int) -> str:
    s = (s or "").strip()
    if len(s) <= n:
        return s
    return s[:n].rstrip() + "…"


def selected_feature_labels(features: Any) -> List[str]:
    """features section: {feature_id: {"selected": bool, "priority": str}}"""
    if not isinstance(features, Mapping):
        return []
    out = []
    for feature_id, value in features.items():
        if isinstance(value, Mapping) and value.get("selected"):
            priority = value.get("priority") or "nice-to-have"
            out.append(f"{feature_id} ({priority})")
    return out


def _section_lines(key: str, value: Any) -> List[str]:
    if key == "features":
        labels = selected_feature_labels(value)
        return [", ".join(labels)] if labels else []
    if isinstance(value, Mapping):
        lines = []
        for k, v in value.items():
            if isinstance(v, Mapping):
                v = ", ".join(f"{sk}: {sv}" for sk, sv in v.items() if _as_text(sv))
            v_str = _as_text(v)
            if v_str:
                lines.append(f"{k}: {v_str}")
        return lines
    v_str = _as_text(value)
    return [v_str] if v_str else []


def build_form_context(
    form_data: Mapping[str, Any],
    max_chars: int = 1600,
    *,
    max_chars_per_field: int = 400,
) -> str:
    """
    Token-safe: limits BOTH per-field and total characters.
    Known sections first (wizard order), then anything else the host stored.
    """
    if not form_data:
        return ""

    keys = [k for k in SECTION_KEYS if k in form_data]
    keys += [k for k in form_data if k not in keys]

    lines: List[str] = []
    used = 0

    for key in keys:
        for item in _section_lines(key, form_data.get(key)):
            line = f"- {SECTION_LABELS.get(key, key)}: {_clip(item, max_chars_per_field)}"

            # +1 for newline
            if used + len(line) + 1 > max_chars:
                return "\n".join(lines).strip()

            lines.append(line)
            used += len(line) + 1

    return "\n".join(lines).strip()


def build_plan_prompt(form_data: Mapping[str, Any]) -> str:
    """
    Hand-off message sent to the assistant once onboarding is complete.
    """
    business = form_data.get("businessContext") or {}
    project = form_data.get("projectType") or {}
    timeline = form_data.get("timelineBudget") or {}

    def _or_default(v: Any) -> str:
        return _as_text(v) or "Not specified"

    lines = [
        "I've completed the onboarding process and provided the following information:",
        "",
        f"Company Name: {_or_default(business.get('companyName'))}",
    ]

    if business.get("website"):
        lines.append(f"Website: {business['website']}")

    socials = business.get("socialLinks") or {}
    social_lines = [f"{platform}: {url}" for platform, url in socials.items() if _as_text(url)]
    if social_lines:
        lines.append("Social Media:")
        lines.extend(social_lines)

    lines.append(f"Industry: {_or_default(business.get('industry'))}")
    lines.append(f"Target Audience: {_or_default(business.get('targetAudience'))}")
    lines.append(f"Main Goal: {_or_default(timeline.get('goals'))}")

    if project.get("type"):
        scale = project.get("scale")
        lines.append(f"Project Type: {project['type']}" + (f" ({scale})" if scale else ""))
    if timeline.get("timeline"):
        lines.append(f"Timeline: {timeline['timeline']}")
    if timeline.get("budget"):
        lines.append(f"Budget: {timeline['budget']}")

    features = selected_feature_labels(form_data.get("features"))
    if features:
        lines.append(f"Selected Features: {', '.join(features)}")

    lines.append("")
    lines.append(PLAN_REQUEST)
    return "\n".join(lines)
