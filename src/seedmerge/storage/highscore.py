from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Small JSON key-value store used for the persisted high score.

    The file is read lazily and rewritten on every ``set``. A missing or
    unreadable file is treated as empty. By default it lives in the user data
    directory; ``SEEDMERGE_HIGHSCORE_PATH`` overrides the location.
    """

    def __init__(self, save_path: Path | None = None) -> None:
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self._values: Dict[str, Any] | None = None

    @staticmethod
    def _default_save_path() -> Path:
        override = os.environ.get("SEEDMERGE_HIGHSCORE_PATH")
        if override:
            return Path(override)
        data_home = os.environ.get("XDG_DATA_HOME")
        base = Path(data_home) if data_home else Path.home() / ".local" / "share"
        return base / "seedmerge" / "highscore.json"

    @property
    def path(self) -> Path:
        return self._save_path

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Stored value for %r is not an integer: %r", key, value)
            return default

    def set(self, key: str, value: Any) -> None:
        values = self._load()
        values[key] = value
        self._save()

    def _load(self) -> Dict[str, Any]:
        if self._values is not None:
            return self._values
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            payload = {}
        except json.JSONDecodeError:
            logger.warning("Corrupt high score file %s; starting fresh", self._save_path)
            payload = {}
        if not isinstance(payload, dict):
            logger.warning("Unexpected high score payload in %s; starting fresh", self._save_path)
            payload = {}
        self._values = payload
        return self._values

    def _save(self) -> None:
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        with self._save_path.open("w", encoding="utf-8") as handle:
            json.dump(self._values or {}, handle, indent=2)
