"""
Wizard controller: step sequencing, completion tracking and resume state.

Every change is dispatched through the reducer and written through to a
single storage slot. Restoration happens once, in initialize().
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Callable, Dict, Optional, Sequence

from .constants import STORAGE_KEY
from .mapping import step_index_for_section
from .reducer import (
    Action,
    Advance,
    JumpTo,
    MarkStepComplete,
    Retreat,
    UpdateSection,
    can_advance,
    fresh_state,
    reduce,
)
from .state import dump_snapshot, load_snapshot
from .storage import LocalStorage
from .types import StepDescriptor, WizardState

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[Dict[str, Any]], None]


class WizardController:
    def __init__(
        self,
        steps: Sequence[StepDescriptor],
        storage: LocalStorage,
        on_complete: CompletionCallback,
        storage_key: str = STORAGE_KEY,
    ):
        self.steps = tuple(steps)
        self.storage = storage
        self.on_complete = on_complete
        self.storage_key = storage_key
        self._state = fresh_state(self.steps)

    # -----------------------------
    # Lifecycle
    # -----------------------------
    def initialize(self) -> WizardState:
        """Restore the saved snapshot, or start fresh. Never raises."""
        self._state = fresh_state(self.steps)
        try:
            raw = self.storage.get_item(self.storage_key)
        except (OSError, UnicodeDecodeError):
            logger.exception("[Wizard] could not read slot %s, starting fresh", self.storage_key)
            return self._state

        if raw is None:
            return self._state

        try:
            self._state = load_snapshot(json.loads(raw), self.steps)
            logger.info(
                "[Wizard] resumed at step %d (%s)",
                self._state.current_step_index,
                self._state.current_step.key,
            )
        except (ValueError, RecursionError) as e:
            # SnapshotError and json.JSONDecodeError are both ValueErrors;
            # deeply nested payloads overflow the decoder
            logger.warning("[Wizard] discarding unreadable snapshot in %s: %s", self.storage_key, e)
            self._state = fresh_state(self.steps)

        return self._state

    def reset(self) -> WizardState:
        try:
            self.storage.remove_item(self.storage_key)
        except OSError:
            logger.exception("[Wizard] could not clear slot %s", self.storage_key)
        self._state = fresh_state(self.steps)
        return self._state

    def complete(self) -> Optional[Dict[str, Any]]:
        """
        Hand the accumulated form data to the host. Storage is left as is.
        Off the last step this is a no-op and returns None.
        """
        if self._state.current_step_index != self._state.last_index:
            logger.warning(
                "[Wizard] complete() ignored on step %d of %d",
                self._state.current_step_index,
                self._state.last_index,
            )
            return None
        form_data = copy.deepcopy(dict(self._state.form_data))
        self.on_complete(form_data)
        return form_data

    # -----------------------------
    # Mutations
    # -----------------------------
    def dispatch(self, action: Action) -> WizardState:
        new_state = reduce(self._state, action)
        if new_state is not self._state:
            self._state = new_state
            self._persist()
        return self._state

    def update_section(self, section_key: str, partial: Any) -> WizardState:
        return self.dispatch(UpdateSection(section_key, partial))

    def mark_step_complete(self, step_key: str, is_complete: bool = True) -> WizardState:
        return self.dispatch(MarkStepComplete(step_key, is_complete))

    def advance(self) -> WizardState:
        return self.dispatch(Advance())

    def retreat(self) -> WizardState:
        return self.dispatch(Retreat())

    def jump_to(self, index: int) -> bool:
        before = self._state
        self.dispatch(JumpTo(index))
        return self._state is not before

    def edit_section(self, section_key: str) -> bool:
        index = step_index_for_section(self.steps, section_key)
        if index is None:
            return False
        return self.jump_to(index)

    def _persist(self) -> None:
        try:
            payload = json.dumps(dump_snapshot(self._state), ensure_ascii=False, default=str)
            self.storage.set_item(self.storage_key, payload)
        except (OSError, TypeError, ValueError):
            logger.exception("[Wizard] could not persist snapshot to %s", self.storage_key)

    # -----------------------------
    # Read-only helpers
    # -----------------------------
    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def form_data(self) -> Dict[str, Any]:
        return dict(self._state.form_data)

    @property
    def current_step(self) -> StepDescriptor:
        return self._state.current_step

    @property
    def is_first_step(self) -> bool:
        return self._state.current_step_index == 0

    @property
    def is_last_step(self) -> bool:
        return self._state.current_step_index == self._state.last_index

    @property
    def can_advance(self) -> bool:
        return can_advance(self._state)

    def is_complete(self, step_key: str) -> bool:
        return bool(self._state.completion.get(step_key, False))

    def section(self, section_key: str, default: Optional[Any] = None) -> Any:
        return copy.deepcopy(self._state.form_data.get(section_key, default))

    @property
    def progress_percentage(self) -> float:
        if self._state.last_index == 0:
            return 100.0
        return self._state.current_step_index / self._state.last_index * 100
