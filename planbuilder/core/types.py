from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


StepKey = str
SectionKey = str


class WizardError(ValueError):
    pass


class StepKind(str, Enum):
    WELCOME = "welcome"
    PROJECT_TYPE = "project_type"
    BUSINESS_CONTEXT = "business_context"
    TIMELINE_BUDGET = "timeline_budget"
    FEATURES = "features"
    SUMMARY = "summary"


@dataclass(frozen=True)
class StepDescriptor:
    key: StepKey
    label: str
    kind: StepKind


@dataclass(frozen=True)
class WizardState:
    steps: Tuple[StepDescriptor, ...]
    current_step_index: int = 0

    # StepKey -> done
    completion: Mapping[StepKey, bool] = field(default_factory=dict)

    # SectionKey -> section-specific data (dict, list or scalar)
    form_data: Mapping[SectionKey, Any] = field(default_factory=dict)

    @property
    def current_step(self) -> StepDescriptor:
        return self.steps[self.current_step_index]

    @property
    def last_index(self) -> int:
        return len(self.steps) - 1

    def step_index(self, step_key: StepKey) -> Optional[int]:
        for i, step in enumerate(self.steps):
            if step.key == step_key:
                return i
        return None


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ChatTurn:
    role: str                     # "user" | "assistant" | "system"
    content: str
    timestamp: datetime = field(default_factory=_now)
    loading: bool = False
    structured_data: Optional[Dict[str, Any]] = None

    def to_message(self) -> Dict[str, str]:
        """Wire shape sent to the assistant function (no local-only flags)."""
        return {"role": self.role, "content": self.content}
