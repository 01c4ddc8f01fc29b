from __future__ import annotations

import os
from typing import Any, Mapping, Optional, Sequence

from ..pricing.cost import Feature
from .brief import brief_sections, brief_title


def render_txt(form_data: Mapping[str, Any], estimate: Optional[Sequence[Feature]] = None) -> str:
    title = brief_title(form_data).upper()
    lines = [title, "=" * len(title), ""]

    for section_title, items in brief_sections(form_data, estimate=estimate):
        lines.append(f"{section_title}:")
        if items:
            for item in items:
                lines.append(f" - {item}")
        else:
            lines.append(" (not provided)")
        lines.append("")

    return "\n".join(lines)


def export_txt_file(
    out_dir: str,
    plan_id: str,
    form_data: Mapping[str, Any],
    estimate: Optional[Sequence[Feature]] = None,
    filename: Optional[str] = None,
) -> str:
    os.makedirs(out_dir, exist_ok=True)
    if not filename:
        filename = f"plan_{plan_id}.txt"
    path = os.path.join(out_dir, filename)

    with open(path, "w", encoding="utf-8") as f:
        f.write(render_txt(form_data, estimate=estimate))

    return path
