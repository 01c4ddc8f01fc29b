from __future__ import annotations

from typing import List, Optional, Sequence

from .constants import (
    STEP_BUSINESS_CONTEXT,
    STEP_FEATURES,
    STEP_PROJECT_TYPE,
    STEP_SUMMARY,
    STEP_TIMELINE_BUDGET,
    STEP_WELCOME,
)
from .types import StepDescriptor, StepKind


# Default plan wizard: (key, label, kind). Order matters.
DEFAULT_STEPS: List[StepDescriptor] = [
    StepDescriptor(STEP_WELCOME, "Welcome", StepKind.WELCOME),
    StepDescriptor(STEP_PROJECT_TYPE, "Project Type", StepKind.PROJECT_TYPE),
    StepDescriptor(STEP_BUSINESS_CONTEXT, "Business Context", StepKind.BUSINESS_CONTEXT),
    StepDescriptor(STEP_TIMELINE_BUDGET, "Timeline & Budget", StepKind.TIMELINE_BUDGET),
    StepDescriptor(STEP_FEATURES, "Features", StepKind.FEATURES),
    StepDescriptor(STEP_SUMMARY, "Summary", StepKind.SUMMARY),
]


def step_index_for_section(steps: Sequence[StepDescriptor], section_key: str) -> Optional[int]:
    """
    Summary "edit this section" links name a section; the step that owns it
    shares its key.
    """
    for i, step in enumerate(steps):
        if step.key == section_key:
            return i
    return None
