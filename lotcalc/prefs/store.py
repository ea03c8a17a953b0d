"""Preference store — a tiny JSON-file key/value store.

Holds the two string slots remembered between sessions.  Missing or
unreadable files behave as an empty store.
"""

import json
import logging
import pathlib
from typing import Optional

logger = logging.getLogger("lotcalc")

ACCOUNT_BALANCE_KEY = "accountBalance"
RISK_PERCENTAGE_KEY = "riskPercentage"

PREFERENCE_KEYS = (ACCOUNT_BALANCE_KEY, RISK_PERCENTAGE_KEY)


class PreferenceStore:
    """Load / save / clear string preferences in a JSON file.

    Args:
        path: Location of the JSON file.  Parent directories are created
            on first save.
    """

    def __init__(self, path: str | pathlib.Path) -> None:
        self._path = pathlib.Path(path)

    @property
    def path(self) -> pathlib.Path:
        return self._path

    def _read(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Failed to read preferences %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(data, indent=2) + "\n", encoding="utf-8",
            )
        except OSError as exc:
            logger.error("Failed to persist preferences: %s", exc)

    def load(self) -> dict[str, Optional[str]]:
        """Return every known slot, ``None`` where nothing is stored."""
        data = self._read()
        prefs: dict[str, Optional[str]] = {}
        for key in PREFERENCE_KEYS:
            value = data.get(key)
            prefs[key] = str(value) if value not in (None, "") else None
        return prefs

    def save(self, key: str, value: str) -> None:
        if key not in PREFERENCE_KEYS:
            raise ValueError(f"Unknown preference key: {key}")
        data = self._read()
        data[key] = value
        self._write(data)

    def clear(self) -> None:
        """Remove every slot this store owns."""
        data = self._read()
        for key in PREFERENCE_KEYS:
            data.pop(key, None)
        if data:
            self._write(data)
        elif self._path.exists():
            try:
                self._path.unlink()
            except OSError as exc:
                logger.error("Failed to clear preferences: %s", exc)
