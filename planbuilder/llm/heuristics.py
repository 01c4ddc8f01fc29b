"""
Free-text fallback for assistant replies that carry no json block.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

from .json_parser import extract_structured_data

_TITLE = re.compile(r"Project(?:\s+name|\s+title)?:\s*([^\n.,]+)", re.IGNORECASE)
_INDUSTRY = re.compile(r"Industry:\s*([^\n.,]+)", re.IGNORECASE)
_COMPANY = re.compile(r"Company(?:\s+name)?:\s*([^\n.,]+)", re.IGNORECASE)
_GOALS = re.compile(
    r"(?:Project\s+)?Goals?(?:\s+and\s+objectives)?:\s*([^\n]+(?:\n(?!\n)[^\n]+)*)",
    re.IGNORECASE,
)
_FEATURES = re.compile(r"(?:Core\s+)?Features?:\s*\n((?:\s*[-*•]\s+[^\n]+\n?)+)", re.IGNORECASE)
_TIMELINE = re.compile(r"Timeline:\s*(\d+)\s*(weeks?|months?)", re.IGNORECASE)
_BUDGET = re.compile(r"Budget:\s*(?:[$€£])?\s*([0-9][0-9,]*)(?:\s*(?:USD|EUR|GBP))?", re.IGNORECASE)
_CURRENCY = re.compile(r"Budget:.*?(USD|EUR|GBP|[$€£])", re.IGNORECASE)

CURRENCY_SYMBOLS = {"$": "USD", "€": "EUR", "£": "GBP"}


def _bullets(block: str) -> List[str]:
    out = []
    for line in block.split("\n"):
        line = line.strip()
        if not line or line[0] not in "-*•":
            continue
        item = line[1:].strip()
        if item:
            out.append(item)
    return out


def extract_project_fields(text: str) -> Dict[str, Any]:
    """
    Returns only what was found; an empty dict means nothing matched.
    """
    found: Dict[str, Any] = {}
    if not text:
        return found

    m = _TITLE.search(text)
    if m and len(m.group(1).strip()) > 3:
        found["title"] = m.group(1).strip()

    business: Dict[str, Any] = {}
    m = _INDUSTRY.search(text)
    if m:
        business["industry"] = m.group(1).strip()
    m = _COMPANY.search(text)
    if m:
        business["companyName"] = m.group(1).strip()
    if business:
        found["businessContext"] = business

    m = _GOALS.search(text)
    if m:
        found["goals"] = m.group(1).strip()

    m = _FEATURES.search(text)
    if m:
        core = _bullets(m.group(1))
        if core:
            found["features"] = {"core": core}

    m = _TIMELINE.search(text)
    if m:
        amount = int(m.group(1))
        # months are converted so estimated_weeks is always in weeks
        weeks = amount * 4 if m.group(2).lower().startswith("month") else amount
        found["timeline"] = {"estimated_weeks": weeks}

    m = _BUDGET.search(text)
    if m:
        total = int(m.group(1).replace(",", ""))
        currency = "USD"
        c = _CURRENCY.search(text)
        if c:
            currency = CURRENCY_SYMBOLS.get(c.group(1), c.group(1).upper())
        found["budget"] = {"estimated_total": total, "currency": currency}

    return found


def project_data_from_reply(text: str) -> Dict[str, Any]:
    """
    A json block wins; otherwise fall back to the free-text heuristics.
    """
    result = extract_structured_data(text)
    if result.ok and result.data:
        return result.data
    return extract_project_fields(text)
