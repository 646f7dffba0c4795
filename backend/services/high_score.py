"""
High score persistence.

The game only ever stores one number. Storage is injected as a small
key/value capability so the session can run against sqlite in the hosts
and against an in-memory store in tests. A failing store never ends a
game: the tracker logs the error and keeps the score in memory.
"""

import logging
import math
from typing import Dict, Optional

from domain.constants import HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Storage capability: get/set a single numeric value by key."""

    def get(self, key: str) -> Optional[float]:
        raise NotImplementedError

    def set(self, key: str, value: float) -> None:
        raise NotImplementedError


class InMemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, float]] = None):
        self.values: Dict[str, float] = dict(initial or {})

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.values[key] = value


class SqliteStore(KeyValueStore):
    """Key/value store backed by the settings table."""

    def __init__(self, repository=None):
        if repository is None:
            from data_access.repositories import SettingsRepository
            repository = SettingsRepository()
        self.repository = repository

    def get(self, key):
        return self.repository.get_value(key)

    def set(self, key, value):
        self.repository.set_value(key, value)


class HighScoreTracker:
    """
    Monotonic high score backed by a KeyValueStore.

    Several trackers may share one store (one per game on the HTTP
    server), so the stored value is re-read before every write and a
    lower score never replaces a higher one.

    Attributes:
        best: highest score seen, in memory or in the store
        degraded: True once the store failed and we fell back to memory
    """

    def __init__(self, store: Optional[KeyValueStore] = None, key: str = HIGH_SCORE_KEY):
        self.store = store or InMemoryStore()
        self.key = key
        self.degraded = False
        self.best = self._load()

    def _load(self) -> int:
        try:
            raw = self.store.get(self.key)
        except Exception as e:
            logger.warning(f"Could not read high score, keeping it in memory: {e}")
            self.degraded = True
            return 0

        if raw is None:
            return 0
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid stored high score {raw!r}")
            return 0
        if math.isnan(value) or value < 0:
            logger.warning(f"Ignoring invalid stored high score {raw!r}")
            return 0
        return int(value)

    def refresh(self) -> int:
        """Pick up a higher score written to the store by another game."""
        if not self.degraded:
            self.best = max(self.best, self._load())
        return self.best

    def submit(self, score: int) -> bool:
        """
        Record a final score.

        Returns:
            True if it beat the best score, including any score another
            game stored in the meantime
        """
        self.refresh()
        if score <= self.best:
            return False

        self.best = score
        if self.degraded:
            return True

        try:
            self.store.set(self.key, score)
        except Exception as e:
            logger.warning(f"Could not persist high score {score}, keeping it in memory: {e}")
            self.degraded = True
        return True
