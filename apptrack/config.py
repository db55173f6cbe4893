"""Load env configuration and resolve data paths."""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from apptrack.log import get_logger

log = get_logger(__name__)

load_dotenv()

_ROOT: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = _ROOT / "config"
DATA_DIR: Path = Path(os.environ["APPTRACK_DATA_DIR"]) if os.environ.get("APPTRACK_DATA_DIR") else _ROOT / "data"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"

DEFAULT_LLM_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_LLM_MODEL = "llama-3.3-70b-versatile"
DEFAULT_READER_BASE_URL = "https://r.jina.ai/"
DEFAULT_FETCH_TIMEOUT = 30.0


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def get_float_env(key: str, default: float) -> float:
    raw = get_env(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


def ensure_dirs() -> None:
    for d in (CONFIG_DIR, DATA_DIR):
        d.mkdir(parents=True, exist_ok=True)


def llm_settings(api_key_override: str = "") -> dict[str, str]:
    """Resolve generation-service connection settings.

    An explicit override (from the user's saved settings) wins over
    GROQ_API_KEY from the environment.
    """
    return {
        "api_key": api_key_override.strip() or get_env("GROQ_API_KEY"),
        "model": get_env("GROQ_LLM_MODEL", DEFAULT_LLM_MODEL) or DEFAULT_LLM_MODEL,
        "base_url": get_env("LLM_BASE_URL", DEFAULT_LLM_BASE_URL) or DEFAULT_LLM_BASE_URL,
    }


def reader_base_url() -> str:
    return get_env("READER_BASE_URL", DEFAULT_READER_BASE_URL) or DEFAULT_READER_BASE_URL


def fetch_timeout() -> float:
    return get_float_env("FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT)
