from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from ..core.constants import PRIORITY_MUST_HAVE, PRIORITY_NICE_TO_HAVE

DateLike = Union[str, date, datetime]

PRIORITY_LABELS = {
    PRIORITY_MUST_HAVE: "Must have",
    PRIORITY_NICE_TO_HAVE: "Nice to have",
    "high": "High",
    "medium": "Medium",
    "low": "Low",
}

# lower sorts first
PRIORITY_RANK = {
    PRIORITY_MUST_HAVE: 0,
    "high": 0,
    "medium": 1,
    PRIORITY_NICE_TO_HAVE: 2,
    "low": 2,
}
UNRANKED = 3

PHASE_ORDER = {"setup": 1, "review": 2, "initiation": 3, "development": 4, "completion": 5}

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # ISO strings from the backend may end in Z
    return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def format_date(value: DateLike) -> str:
    """Jan 5, 2026"""
    d = _to_date(value)
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_currency(amount: Union[int, float], currency: str = "USD") -> str:
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), "")
    sign = "-" if amount < 0 else ""
    value = abs(amount)
    body = f"{value:,.0f}" if float(value).is_integer() else f"{value:,.2f}"
    if symbol:
        return f"{sign}{symbol}{body}"
    return f"{sign}{body} {currency.upper()}"


@dataclass(frozen=True)
class Deadline:
    text: str
    is_overdue: bool


def format_project_deadline(value: DateLike, today: Optional[date] = None) -> Deadline:
    due = _to_date(value)
    today = today or date.today()
    diff_days = (due - today).days

    if diff_days < 0:
        return Deadline(f"Overdue by {abs(diff_days)} days", True)
    if diff_days == 0:
        return Deadline("Due today", False)
    if diff_days == 1:
        return Deadline("Due tomorrow", False)
    if diff_days <= 7:
        return Deadline(f"Due in {diff_days} days", False)
    return Deadline(f"Due on {format_date(due)}", False)


def format_priority(priority: Optional[str]) -> str:
    if not priority:
        return "Unspecified"
    key = priority.strip().lower()
    return PRIORITY_LABELS.get(key, priority.strip().replace("-", " ").capitalize())


def priority_rank(priority: Optional[str]) -> int:
    if not priority:
        return UNRANKED
    return PRIORITY_RANK.get(priority.strip().lower(), UNRANKED)


def sort_tasks_by_phase(tasks: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Phase order first, then phaseOrder within a phase.
    Tasks without a known phase keep their relative order at the end.
    """
    def key(task: Dict[str, Any]):
        phase = PHASE_ORDER.get(str(task.get("phase") or "").lower(), math.inf)
        within = task.get("phaseOrder")
        return (phase, within if isinstance(within, (int, float)) else math.inf)

    return sorted(tasks, key=key)
