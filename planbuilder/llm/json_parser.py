from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional


class JSONParseError(ValueError):
    pass


# Assistant replies embed auto-fill data as:  ```json\n{...}\n```
_FENCED_JSON = re.compile(r"```json[ \t]*\r?\n(.*?)\r?\n[ \t]*```", flags=re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class ExtractionResult:
    """Tagged result: ok=True carries data, ok=False carries the reason."""

    ok: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: Dict[str, Any]) -> "ExtractionResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "ExtractionResult":
        return cls(ok=False, error=error)


NO_BLOCK = "no fenced json block"


def _sanitize_json(text: str) -> str:
    """
    Fix common LLM JSON mistakes so json.loads can parse it.
    """
    t = text.strip()

    # Python None / True / False -> JSON
    t = re.sub(r"\bNone\b", "null", t)
    t = re.sub(r"\bTrue\b", "true", t)
    t = re.sub(r"\bFalse\b", "false", t)

    # .7 -> 0.7
    t = re.sub(r":\s*\.(\d+)", r": 0.\1", t)

    # trailing commas before } or ]
    t = re.sub(r",\s*([}\]])", r"\1", t)

    return t


def parse_json_block(block: str) -> Dict[str, Any]:
    """
    Parse one JSON object, repairing common model slips on a second try.
    Raises JSONParseError.
    """
    if not block or not block.strip():
        raise JSONParseError("Empty json block")

    try:
        data = json.loads(block)
    except ValueError:
        try:
            data = json.loads(_sanitize_json(block))
        except ValueError as e:
            raise JSONParseError(f"Failed to parse JSON: {e}") from e

    if not isinstance(data, dict):
        raise JSONParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def find_json_block(text: str) -> Optional[str]:
    if not text:
        return None
    m = _FENCED_JSON.search(text)
    return m.group(1) if m else None


def extract_structured_data(text: str) -> ExtractionResult:
    """
    Best-effort: pull the first fenced json block out of an assistant reply.
    Never raises; callers decide what to do with a failure.
    """
    block = find_json_block(text)
    if block is None:
        return ExtractionResult.failure(NO_BLOCK)

    try:
        return ExtractionResult.success(parse_json_block(block))
    except JSONParseError as e:
        return ExtractionResult.failure(str(e))
