from __future__ import annotations

import os
from typing import Any, List, Mapping, Optional, Sequence

from docx import Document
from docx.shared import Pt

from ..pricing.cost import Feature
from .brief import brief_sections, brief_title
from .formatters import format_date


def _add_section(doc: Document, title: str, items: List[str]) -> None:
    doc.add_heading(title, level=2)

    if not items:
        doc.add_paragraph("(not provided)")
        return

    for item in items:
        doc.add_paragraph(item, style="List Bullet")


def export_docx_file(
    out_dir: str,
    plan_id: str,
    form_data: Mapping[str, Any],
    estimate: Optional[Sequence[Feature]] = None,
    filename: Optional[str] = None,
    generated_on: Optional[str] = None,
) -> str:
    os.makedirs(out_dir, exist_ok=True)
    if not filename:
        filename = f"plan_{plan_id}.docx"
    path = os.path.join(out_dir, filename)

    doc = Document()
    doc.add_heading(brief_title(form_data), level=1)
    if generated_on:
        doc.add_paragraph(f"Generated {format_date(generated_on)}")
    doc.add_paragraph("")

    for title, items in brief_sections(form_data, estimate=estimate):
        _add_section(doc, title, items)

    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    doc.save(path)
    return path
