"""User settings persisted as YAML: profile context, resume text, API-key override."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from apptrack.config import SETTINGS_PATH
from apptrack.log import get_logger

log = get_logger(__name__)


@dataclass
class Settings:
    profile_summary: str = ""
    tech_stack: str = ""
    target_roles: str = ""
    resume_text: str = ""
    api_key_override: str = ""


class SettingsStore:
    """Explicit load/save lifecycle; a missing file or key is not an error."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or SETTINGS_PATH

    def load(self) -> Settings:
        if not self.path.exists():
            return Settings()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            log.warning("Ignoring unreadable settings %s: %s", self.path, exc)
            return Settings()
        if not isinstance(data, dict):
            log.warning("Ignoring settings %s: expected a mapping", self.path)
            return Settings()
        known = {f.name for f in fields(Settings)}
        return Settings(**{k: str(v) for k, v in data.items() if k in known and v is not None})

    def save(self, settings: Settings) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(asdict(settings), f, sort_keys=False, allow_unicode=True)
        log.info("Saved settings → %s", self.path)
        return self.path
