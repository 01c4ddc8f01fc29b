from __future__ import annotations

import logging
import os
import re
import tempfile
from typing import Optional

logger = logging.getLogger(__name__)


def _ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


class LocalStorage:
    """
    Key/value slots persisted as one file per key (browser localStorage analog).

    Writes go through a temp file and a rename, so a crash never leaves a
    half-written slot. Last write wins; there is no cross-process locking.
    """

    def __init__(self, base_dir: str):
        self.base_dir = base_dir

    def slot_path(self, key: str) -> str:
        safe = re.sub(r"[^a-zA-Z0-9._-]+", "_", key).strip("_")
        if not safe:
            raise ValueError(f"Invalid storage key: {key!r}")
        return os.path.join(self.base_dir, f"{safe}.json")

    def get_item(self, key: str) -> Optional[str]:
        path = self.slot_path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set_item(self, key: str, value: str) -> None:
        _ensure_dir(self.base_dir)
        path = self.slot_path(key)
        fd, tmp = tempfile.mkstemp(dir=self.base_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def remove_item(self, key: str) -> None:
        path = self.slot_path(key)
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        logger.debug("[Storage] cleared slot %s", key)
