"""
Persisted on/off switch for console logging.

The flag lives in a small JSON file so it survives restarts and can be
flipped from the settings page. An environment variable, typically set in
``.env``, overrides whatever the file says.
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

ENABLED_ENV = "CONSOLE_LOGGER_ENABLED"
SETTINGS_PATH_ENV = "CONSOLE_LOGGER_SETTINGS"
QUERY_PARAM_ENV = "CONSOLE_LOGGER_QUERY_PARAM"

DEFAULT_SETTINGS_PATH = "settings/console_logger.json"
DEFAULT_QUERY_PARAM = "console_logger"

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off", "")


def parse_flag(value) -> bool:
    """Interpret "1"/"0" style setting values."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean flag: {value!r}")


class SettingsStore:
    """JSON-file backed settings with an environment override."""

    def __init__(self, path: Optional[str] = None, environ=None):
        """
        Args:
            path: Settings file (defaults to $CONSOLE_LOGGER_SETTINGS or
                settings/console_logger.json)
            environ: Mapping to read overrides from (defaults to os.environ)
        """
        self.environ = os.environ if environ is None else environ
        self.path = Path(path or self.environ.get(SETTINGS_PATH_ENV) or DEFAULT_SETTINGS_PATH)

    def activate(self) -> bool:
        """
        Create the settings file with logging switched off.

        Does nothing if the file already exists.

        Returns:
            True if the file was created
        """
        if self.path.exists():
            return False
        self._write({"enabled": "0"})
        return True

    def load(self) -> dict:
        if not self.path.exists():
            return {"enabled": "0"}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt settings file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Corrupt settings file {self.path}: expected an object")
        return data

    def stored_enabled(self) -> bool:
        return parse_flag(self.load().get("enabled", "0"))

    def env_override(self) -> Optional[bool]:
        raw = self.environ.get(ENABLED_ENV)
        if raw is None:
            return None
        return parse_flag(raw)

    def is_enabled(self) -> bool:
        override = self.env_override()
        if override is not None:
            return override
        return self.stored_enabled()

    def set_enabled(self, enabled: bool):
        data = self.load()
        data["enabled"] = "1" if enabled else "0"
        self._write(data)

    def query_param(self) -> str:
        return self.environ.get(QUERY_PARAM_ENV) or DEFAULT_QUERY_PARAM

    def _write(self, data: dict):
        data["updated_at"] = datetime.now().isoformat()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
