from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any, Dict, Optional, Sequence

from . import config
from .bootstrap import ensure_data_dirs
from .mapping import DEFAULT_STEPS
from .storage import LocalStorage
from .wizard import CompletionCallback, WizardController
from ..export.exporter_docx import export_docx_file
from ..export.exporter_txt import export_txt_file
from ..llm.assistant import AssistantBridge, Notifier
from ..llm.client import FunctionsClient
from ..pricing.cost import Feature

logger = logging.getLogger(__name__)

# NOTE:
# This module is the main integration point for the UI host.
# Behavior is controlled via environment variables:
# - USE_ASSISTANT=0 -> stub replies (demo-safe, no network)
# - USE_ASSISTANT=1 -> calls the hosted assistant function
# - DATA_DIR        -> root for the resume slot and exported briefs


# -----------------------------
# Wizard
# -----------------------------
def build_wizard(
    on_complete: CompletionCallback,
    storage_dir: Optional[str] = None,
    steps: Sequence = DEFAULT_STEPS,
) -> WizardController:
    """Default six-step plan wizard, restored from its resume slot."""
    ensure_data_dirs()
    storage = LocalStorage(storage_dir or config.storage_dir())
    wizard = WizardController(steps, storage, on_complete)
    wizard.initialize()
    return wizard


# -----------------------------
# Assistant
# -----------------------------
def build_assistant(
    project_id: Optional[str] = None,
    notify: Optional[Notifier] = None,
    *,
    client: Optional[FunctionsClient] = None,
    user_id: Optional[str] = None,
) -> AssistantBridge:
    return AssistantBridge(
        client or FunctionsClient(),
        config.assistant_function(),
        project_id=project_id,
        user_id=user_id,
        notify=notify,
    )


# -----------------------------
# Export
# -----------------------------
def complete_and_export(
    form_data: Dict[str, Any],
    fmt: str = "docx",
    out_dir: Optional[str] = None,
    *,
    plan_id: Optional[str] = None,
    estimate: Optional[Sequence[Feature]] = None,
) -> Dict[str, Any]:
    """
    Writes the completed wizard answers as a plan brief.
    Returns {"plan_id", "format", "path"}.
    """
    out_dir = out_dir or config.exports_dir()
    plan_id = plan_id or uuid.uuid4().hex[:12]

    if fmt.lower() == "txt":
        path = export_txt_file(out_dir, plan_id, form_data, estimate=estimate)
        fmt = "txt"
    else:
        path = export_docx_file(
            out_dir, plan_id, form_data, estimate=estimate, generated_on=date.today().isoformat()
        )
        fmt = "docx"

    logger.info("[Service] exported plan %s as %s: %s", plan_id, fmt, path)
    return {"plan_id": plan_id, "format": fmt, "path": path}
