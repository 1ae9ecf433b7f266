# Persistence for small named values, used to remember the Google API key.

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()
DEFAULT_KEY_STORE_PATH = Path(os.getenv(
    "SHOWCASE_KEY_STORE", str(Path.home() / ".google_api_showcase.json")))

logger = logging.getLogger(__name__)


class KeyStore(ABC):
    """Blueprint for a named value store where every value expires after a number of days."""

    @abstractmethod
    def set(self, name: str, value: str, days: int) -> None:
        pass

    @abstractmethod
    def get(self, name: str) -> str | None:
        """Returns the value, or None when it was never set, cleared or expired."""
        pass

    @abstractmethod
    def clear(self, name: str) -> None:
        pass


class FileKeyStore(KeyStore):
    """Keeps the values in a small JSON file, together with their expiry time."""

    def __init__(self, path: Path = DEFAULT_KEY_STORE_PATH):
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _load_for_update(self) -> dict:
        """Like _load, but a damaged store is started over instead of failing the write."""
        try:
            data = self._load()
        except ValueError as e:
            logger.warning("Replacing damaged key store %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def set(self, name: str, value: str, days: int) -> None:
        if days <= 0:
            raise ValueError(f"Expiry must be at least one day, got {days}.")
        expires = datetime.now(timezone.utc) + timedelta(days=days)
        data = self._load_for_update()
        data[name] = {'value': value, 'expires': expires.isoformat()}
        self._save(data)
        logger.debug("Stored '%s' until %s", name, expires.isoformat())

    def get(self, name: str) -> str | None:
        # An unreadable or damaged store reads as empty.
        try:
            entry = self._load().get(name)
            if entry is None:
                return None
            expires = datetime.fromisoformat(entry['expires'])
            value = entry['value']
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Could not read '%s' from %s: %s", name, self.path, e)
            return None
        if expires <= datetime.now(timezone.utc):
            logger.debug("Stored '%s' has expired", name)
            return None
        return value

    def clear(self, name: str) -> None:
        data = self._load_for_update()
        if data.pop(name, None) is not None:
            self._save(data)
