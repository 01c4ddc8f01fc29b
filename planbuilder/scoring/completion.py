"""
PROJECT DATA COMPLETENESS (chat-driven plan overview)

- Input: project data accumulated from assistant replies (json blocks or
  free-text heuristics), not the wizard form data
- Six tracked fields, each either present or missing
- completion_percentage = round(present / 6 * 100)
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

# -------------------------------------------------
# 1) Tracked fields
# -------------------------------------------------

TRACKED_FIELDS = ["title", "description", "businessContext", "goals", "features", "budget"]


def _s(val: Any) -> str:
    return str(val or "").strip()


def _has_title(data: Mapping[str, Any]) -> bool:
    return bool(_s(data.get("title")))


def _has_description(data: Mapping[str, Any]) -> bool:
    return bool(_s(data.get("description")))


def _has_business_context(data: Mapping[str, Any]) -> bool:
    bc = data.get("businessContext") or {}
    if not isinstance(bc, Mapping):
        return False
    return bool(_s(bc.get("industry")) or _s(bc.get("companyName")) or bc.get("target_audience"))


def _has_goals(data: Mapping[str, Any]) -> bool:
    return bool(_s(data.get("goals")))


def _has_core_features(data: Mapping[str, Any]) -> bool:
    features = data.get("features") or {}
    return isinstance(features, Mapping) and bool(features.get("core"))


def _has_budget(data: Mapping[str, Any]) -> bool:
    budget = data.get("budget") or {}
    return isinstance(budget, Mapping) and bool(budget.get("estimated_total"))


FIELD_CHECKS: Dict[str, Callable[[Mapping[str, Any]], bool]] = {
    "title": _has_title,
    "description": _has_description,
    "businessContext": _has_business_context,
    "goals": _has_goals,
    "features": _has_core_features,
    "budget": _has_budget,
}

# -------------------------------------------------
# 2) Data models
# -------------------------------------------------

@dataclass
class CompletionResult:
    percentage: int
    present: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


# -------------------------------------------------
# 3) Computation
# -------------------------------------------------

def compute_completion(data: Mapping[str, Any]) -> CompletionResult:
    present: List[str] = []
    missing: List[str] = []
    for name in TRACKED_FIELDS:
        (present if FIELD_CHECKS[name](data) else missing).append(name)
    percentage = round(len(present) / len(TRACKED_FIELDS) * 100)
    return CompletionResult(percentage=percentage, present=present, missing=missing)


def merge_project_data(
    current: Mapping[str, Any],
    update: Mapping[str, Any],
    highlight_field: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Top-level merge: keys in `update` replace those in `current`.
    Returns a new dict carrying lastUpdatedField and completionPercentage.
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(current))
    merged.update(copy.deepcopy(dict(update)))

    if highlight_field is None and update:
        highlight_field = next(iter(update))
    if highlight_field:
        merged["lastUpdatedField"] = highlight_field

    merged["completionPercentage"] = compute_completion(merged).percentage
    return merged
