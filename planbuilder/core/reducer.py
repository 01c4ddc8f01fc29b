"""
Immutable wizard reducer: reduce(state, action) -> new state.

The input state is never mutated. Actions that do not apply (advancing past
the last step, an unreachable jump, ...) return the same state object, so
callers can compare with `is` to detect no-ops.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Sequence, Union

from .types import StepDescriptor, WizardError, WizardState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateSection:
    section_key: str
    partial: Any


@dataclass(frozen=True)
class MarkStepComplete:
    step_key: str
    is_complete: bool = True


@dataclass(frozen=True)
class Advance:
    pass


@dataclass(frozen=True)
class Retreat:
    pass


@dataclass(frozen=True)
class JumpTo:
    index: int


Action = Union[UpdateSection, MarkStepComplete, Advance, Retreat, JumpTo]


def fresh_state(steps: Sequence[StepDescriptor]) -> WizardState:
    if not steps:
        raise WizardError("A wizard needs at least one step")
    steps = tuple(steps)
    completion = {step.key: i == 0 for i, step in enumerate(steps)}
    return WizardState(steps=steps, current_step_index=0, completion=completion, form_data={})


def merge_section(current: Any, partial: Any) -> Any:
    """
    Dict over dict -> shallow merge.
    Anything else (scalar, list, dict over non-dict) -> replace outright.
    """
    if isinstance(partial, dict) and isinstance(current, dict):
        merged = dict(current)
        merged.update(copy.deepcopy(partial))
        return merged
    return copy.deepcopy(partial)


def is_step_complete(state: WizardState, index: int) -> bool:
    return bool(state.completion.get(state.steps[index].key, False))


def reachable_frontier(state: WizardState) -> int:
    """
    Highest index whose predecessor is complete, or 0 when no step is.
    Steps up to one past this index can be jumped to.
    """
    for i in range(state.last_index, 0, -1):
        if is_step_complete(state, i - 1):
            return i
    return 0


def is_reachable(state: WizardState, index: int) -> bool:
    if index < 0 or index > state.last_index:
        return False
    if index <= state.current_step_index:
        return True
    frontier = reachable_frontier(state)
    if frontier == 0:
        return False
    return index <= min(frontier + 1, state.last_index)


def can_advance(state: WizardState) -> bool:
    return state.current_step_index < state.last_index and is_step_complete(
        state, state.current_step_index
    )


def reduce(state: WizardState, action: Action) -> WizardState:
    if isinstance(action, UpdateSection):
        form_data: Dict[str, Any] = dict(state.form_data)
        merged = merge_section(form_data.get(action.section_key), action.partial)
        if action.section_key in form_data and form_data[action.section_key] == merged:
            return state
        form_data[action.section_key] = merged
        return replace(state, form_data=form_data)

    if isinstance(action, MarkStepComplete):
        if state.step_index(action.step_key) is None:
            logger.warning("[Wizard] ignoring completion for unknown step %s", action.step_key)
            return state
        if state.completion.get(action.step_key) is bool(action.is_complete):
            return state
        completion = dict(state.completion)
        completion[action.step_key] = bool(action.is_complete)
        return replace(state, completion=completion)

    if isinstance(action, Advance):
        if not can_advance(state):
            return state
        return replace(state, current_step_index=state.current_step_index + 1)

    if isinstance(action, Retreat):
        if state.current_step_index <= 0:
            return state
        return replace(state, current_step_index=state.current_step_index - 1)

    if isinstance(action, JumpTo):
        if action.index == state.current_step_index or not is_reachable(state, action.index):
            return state
        return replace(state, current_step_index=action.index)

    raise WizardError(f"Unsupported action: {action!r}")
