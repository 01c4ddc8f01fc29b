from __future__ import annotations

import logging
import os


def env_bool(key: str, default: str = "0") -> bool:
    """
    Env bool parser.
    Accepts: 1/0, true/false, yes/no (case-insensitive)
    """
    v = os.getenv(key, default)
    if v is None:
        v = default
    return str(v).strip().lower() in ("1", "true", "yes", "y")


def env_str(key: str, default: str = "") -> str:
    v = os.getenv(key, default)
    if v is None:
        v = default
    return str(v).strip()


def env_float(key: str, default: str = "30") -> float:
    try:
        return float(env_str(key, default) or default)
    except ValueError:
        return float(default)


# -------------------------------------------------
# Runtime getters (read on every call, so Streamlit
# reruns pick up env changes)
# -------------------------------------------------
def use_assistant() -> bool:
    return env_bool("USE_ASSISTANT", "0")


def show_debug() -> bool:
    return env_bool("SHOW_DEBUG", "0")


def data_dir() -> str:
    return env_str("DATA_DIR", "data")


def storage_dir() -> str:
    return os.path.join(data_dir(), "storage")


def exports_dir() -> str:
    return os.path.join(data_dir(), "exports")


def backend_url() -> str:
    return env_str("BACKEND_URL", "").rstrip("/")


def backend_anon_key() -> str:
    return env_str("BACKEND_ANON_KEY", "")


def assistant_function() -> str:
    return env_str("ASSISTANT_FUNCTION", "chat-with-plan-assistant")


def assistant_timeout_sec() -> float:
    return env_float("ASSISTANT_TIMEOUT_SEC", "60")


def assistant_verify_ssl() -> bool:
    return env_bool("ASSISTANT_VERIFY_SSL", "1")


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; LOG_LEVEL wins when no level is given."""
    name = (level or env_str("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
