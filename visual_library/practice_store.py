"""Practice history, ratings and settings persistence."""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from .builtin_lists import builtin_lists, get_builtin_list
from .config import get_settings
from .models import HistoryEntry, PracticeRecord, PracticeSettings, ProgressStats, TrainingList
from .progress_tracking import apply_rating, update_progress_stats, update_streak
from .training_algorithms import get_training_algorithm

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_username(value: str) -> str:
    normalized = value.strip().lower()
    if not normalized:
        raise ValueError("Username cannot be empty.")
    return normalized


class PracticeStore:
    """Per-practitioner history and ratings, kept in memory or in a JSON file."""

    def __init__(
        self,
        path: Optional[Path] = None,
        *,
        default_settings: Optional[PracticeSettings] = None,
        weekly_goal: int = 5,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._path = path
        self._default_settings = default_settings or PracticeSettings()
        self._weekly_goal = weekly_goal
        self._clock = clock or _now
        self._lock = threading.RLock()
        self._memory: Dict[str, PracticeRecord] = {}

    def _load_unlocked(self) -> Dict[str, PracticeRecord]:
        if self._path is None:
            return self._memory
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        records: Dict[str, PracticeRecord] = {}
        for key, payload in raw.items():
            try:
                records[key] = PracticeRecord.model_validate(payload)
            except ValidationError:
                logger.exception("Failed to parse practice record %s", key)
        return records

    def _write_unlocked(self, records: Dict[str, PracticeRecord]) -> None:
        if self._path is None:
            self._memory = records
            return
        payload = {username: record.model_dump(mode="json") for username, record in records.items()}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)

    def _new_record(self, username: str) -> PracticeRecord:
        return PracticeRecord(
            username=username,
            settings=self._default_settings.model_copy(),
            stats=ProgressStats(weekly_goal=self._weekly_goal),
            last_updated=self._clock(),
        )

    def _ensure_record(self, records: Dict[str, PracticeRecord], username: str) -> PracticeRecord:
        normalized = _normalize_username(username)
        record = records.get(normalized)
        if record is None:
            record = self._new_record(normalized)
            records[normalized] = record
        return record

    def get(self, username: str) -> Optional[PracticeRecord]:
        normalized = _normalize_username(username)
        with self._lock:
            record = self._load_unlocked().get(normalized)
            return record.model_copy(deep=True) if record else None

    def get_or_create(self, username: str) -> PracticeRecord:
        with self._lock:
            records = self._load_unlocked()
            normalized = _normalize_username(username)
            if normalized in records:
                return records[normalized].model_copy(deep=True)
            record = self._ensure_record(records, normalized)
            self._write_unlocked(records)
            return record.model_copy(deep=True)

    def record_session(self, username: str, entry: HistoryEntry) -> PracticeRecord:
        """Append a completed session and refresh ratings, streak and stats."""
        with self._lock:
            records = self._load_unlocked()
            record = self._ensure_record(records, username)
            now = self._clock()
            record.history.append(entry)
            record.item_ratings = apply_rating(record.item_ratings, entry)
            record.streak = update_streak(record.streak, now.astimezone(timezone.utc).date())
            record.stats = update_progress_stats(
                record.stats,
                entry.time,
                record.history,
                record.item_ratings,
                now,
            )
            record.last_updated = now
            self._write_unlocked(records)
            logger.debug(
                "Recorded %s session for %s (history=%d)",
                entry.rating,
                record.username,
                len(record.history),
            )
            return record.model_copy(deep=True)

    def update_settings(self, username: str, settings: PracticeSettings) -> PracticeRecord:
        with self._lock:
            records = self._load_unlocked()
            record = self._ensure_record(records, username)
            record.settings = settings.model_copy()
            record.last_updated = self._clock()
            self._write_unlocked(records)
            return record.model_copy(deep=True)

    def save_custom_list(self, username: str, training_list: TrainingList) -> TrainingList:
        with self._lock:
            records = self._load_unlocked()
            record = self._ensure_record(records, username)
            record.custom_lists = [
                existing for existing in record.custom_lists if existing.id != training_list.id
            ]
            record.custom_lists.append(training_list.model_copy(deep=True))
            record.last_updated = self._clock()
            self._write_unlocked(records)
            return training_list.model_copy(deep=True)

    def available_lists(self, username: Optional[str] = None) -> List[TrainingList]:
        lists = builtin_lists()
        if username:
            record = self.get(username)
            if record:
                lists.extend(record.custom_lists)
        return lists

    def find_list(self, list_id: str, username: Optional[str] = None) -> Optional[TrainingList]:
        builtin = get_builtin_list(list_id)
        if builtin is not None:
            return builtin
        if not username:
            return None
        record = self.get(username)
        if record is None:
            return None
        return next((item for item in record.custom_lists if item.id == list_id), None)

    def delete(self, username: str) -> bool:
        normalized = _normalize_username(username)
        with self._lock:
            records = self._load_unlocked()
            removed = records.pop(normalized, None) is not None
            if removed:
                self._write_unlocked(records)
            return removed

    def clear(self) -> None:
        with self._lock:
            self._write_unlocked({})


def _build_store() -> PracticeStore:
    settings = get_settings()
    defaults = PracticeSettings(
        algorithm_mode=settings.algorithm_mode,
        active_list_id=settings.default_list_id,
        default_timer_duration=settings.default_timer_duration,
        selected_algorithm=get_training_algorithm(settings.default_algorithm).id,
    )
    return PracticeStore(
        path=settings.store_path,
        default_settings=defaults,
        weekly_goal=settings.weekly_goal,
    )


practice_store = _build_store()

__all__ = ["PracticeStore", "practice_store"]
