"""Best-time and win-streak persistence.

Storage is best effort: unreadable or unwritable data never reaches the
game, it falls back to defaults and the in-memory record stays current.
"""

import json
import logging
import os
from dataclasses import dataclass, field

from settings import BEST_TIMES_KEY, STREAK_KEY

logger = logging.getLogger(__name__)


class LocalStorage:
    """String key/value store kept in a single JSON object file."""

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, encoding="utf-8") as fh:
            try:
                data = json.load(fh)
            except ValueError:
                logger.warning("Discarding unreadable storage file %s", self.path)
                return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str):
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str):
        data = self._read_all()
        data[key] = value
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)


@dataclass
class StatsRecord:
    best_times: dict = field(default_factory=dict)
    streak: int = 0


def _to_whole_number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    return int(value)


class StatsStore:
    def __init__(self, storage, difficulty_keys):
        self.storage = storage
        self.difficulty_keys = tuple(difficulty_keys)
        self.record = self.load()

    def _read_json(self, key):
        try:
            raw = self.storage.get_item(key)
        except OSError as exc:
            logger.warning("Could not read %s: %s", key, exc)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring corrupt value for %s", key)
            return None

    def _write_json(self, key, value) -> bool:
        try:
            self.storage.set_item(key, json.dumps(value))
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not persist %s, keeping in-memory value: %s", key, exc)
            return False
        return True

    def load(self) -> StatsRecord:
        best_times = {}
        payload = self._read_json(BEST_TIMES_KEY)
        if isinstance(payload, dict):
            for key in self.difficulty_keys:
                seconds = _to_whole_number(payload.get(key))
                if seconds is not None and seconds > 0:
                    best_times[key] = seconds
        elif payload is not None:
            logger.warning("Best times record is not an object, using defaults")

        streak = _to_whole_number(self._read_json(STREAK_KEY))
        if streak is None or streak < 0:
            streak = 0

        return StatsRecord(best_times=best_times, streak=streak)

    @property
    def streak(self) -> int:
        return self.record.streak

    def best_time(self, key: str):
        return self.record.best_times.get(key)

    def record_win(self, key: str, elapsed_seconds: int) -> StatsRecord:
        if key not in self.difficulty_keys:
            raise KeyError(key)
        seconds = max(1, int(elapsed_seconds))
        best = self.record.best_times.get(key)
        if best is None or seconds <= best:
            self.record.best_times[key] = seconds
        self._write_json(BEST_TIMES_KEY, self.record.best_times)
        return self.record

    def record_loss(self):
        self.record.streak = 0
        self._write_json(STREAK_KEY, 0)

    def record_win_streak(self, value: int):
        self.record.streak = value
        self._write_json(STREAK_KEY, value)
