from __future__ import annotations

import copy
from dataclasses import replace
from typing import Any, Callable, Dict, Sequence

from .constants import SCHEMA_VERSION
from .reducer import fresh_state
from .types import StepDescriptor, WizardState


class SnapshotError(ValueError):
    pass


# -----------------------------
# Public API expected by wizard.py
# -----------------------------
def dump_snapshot(state: WizardState) -> Dict[str, Any]:
    """
    Serializable snapshot of the resumable part of the wizard.
    Step descriptors are not stored: they are rebuilt by the host.
    """
    return {
        "schemaVersion": SCHEMA_VERSION,
        "formData": copy.deepcopy(dict(state.form_data)),
        "currentStepIndex": state.current_step_index,
        "completion": dict(state.completion),
    }


def _migrate_v1(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    v1 = unversioned payloads.
    Backward-compat: accept the older naming if present.
    """
    out = dict(data)
    if "currentStepIndex" not in out and "step" in out:
        out["currentStepIndex"] = out.pop("step")
    if "completion" not in out and "stepsCompleted" in out:
        out["completion"] = out.pop("stepsCompleted")
    if "formData" not in out and "projectData" in out:
        out["formData"] = out.pop("projectData")
    out.setdefault("formData", {})
    out.setdefault("completion", {})
    out["schemaVersion"] = 2
    return out


# from_version -> migration producing from_version + 1
MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    1: _migrate_v1,
}


def migrate(data: Dict[str, Any]) -> Dict[str, Any]:
    version = data.get("schemaVersion", 1)
    if not isinstance(version, int) or isinstance(version, bool) or version < 1:
        raise SnapshotError(f"Invalid schemaVersion: {version!r}")
    if version > SCHEMA_VERSION:
        raise SnapshotError(f"Snapshot schemaVersion {version} is newer than {SCHEMA_VERSION}")

    while version < SCHEMA_VERSION:
        step = MIGRATIONS.get(version)
        if step is None:
            raise SnapshotError(f"No migration from schemaVersion {version}")
        data = step(data)
        version = data["schemaVersion"]
    return data


def load_snapshot(raw: Any, steps: Sequence[StepDescriptor]) -> WizardState:
    """
    Rehydrate a WizardState from a decoded snapshot.
    Raises SnapshotError for anything that would break the state invariants.
    """
    if not isinstance(raw, dict):
        raise SnapshotError("Snapshot must be a JSON object")

    data = migrate(raw)

    index = data.get("currentStepIndex", 0)
    if not isinstance(index, int) or isinstance(index, bool):
        raise SnapshotError(f"currentStepIndex must be an integer, got {index!r}")
    if index < 0 or index >= len(steps):
        raise SnapshotError(f"currentStepIndex {index} out of range for {len(steps)} steps")

    form_data = data.get("formData")
    if not isinstance(form_data, dict):
        raise SnapshotError("formData must be an object")

    completion_raw = data.get("completion")
    if not isinstance(completion_raw, dict):
        raise SnapshotError("completion must be an object")

    base = fresh_state(steps)

    # Unknown step keys are dropped; missing keys default to incomplete
    completion = {step.key: bool(completion_raw.get(step.key, False)) for step in base.steps}

    return replace(
        base,
        current_step_index=index,
        completion=completion,
        form_data=copy.deepcopy(form_data),
    )
