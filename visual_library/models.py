"""Practice domain models shared by the selector, the store and the routes."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, Iterator, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

Rating = Literal["easy", "got-it", "struggled", "failed"]
ItemRatings = Dict[str, Rating]

RATINGS: Tuple[Rating, ...] = ("easy", "got-it", "struggled", "failed")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so day arithmetic never mixes kinds."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AlgorithmId(str, Enum):
    BALANCED = "balanced"
    STRUGGLING_FOCUS = "struggling-focus"
    FRESH_EXPLORATION = "fresh-exploration"
    SPACED_REPETITION = "spaced-repetition"
    RANDOM = "random"


class TrainingList(BaseModel):
    """A named collection of categories, each an ordered sequence of subjects."""

    id: str
    name: str
    creator: str
    categories: Dict[str, List[str]] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    is_custom: bool = False
    social_link: Optional[str] = None

    def iter_subjects(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(category, subject)`` pairs in category-then-list order."""
        for category, items in self.categories.items():
            for item in items:
                yield category, item

    def subject_count(self) -> int:
        return sum(len(items) for items in self.categories.values())

    def is_empty(self) -> bool:
        return not any(self.categories.values())


class HistoryEntry(BaseModel):
    """One completed practice session. Never mutated once recorded."""

    model_config = ConfigDict(frozen=True)

    item: str
    category: str
    time: int = Field(default=0, ge=0)
    rating: Rating
    date: datetime = Field(default_factory=_now)

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class AlgorithmProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: AlgorithmId
    name: str
    description: str
    icon: str
    struggling_weight: float = Field(ge=0.0, le=1.0)
    recent_weight: float = Field(ge=0.0, le=1.0)
    category_balance: bool
    spaced_repetition: bool


class Challenge(BaseModel):
    item: str
    category: str


class ScoredItem(BaseModel):
    item: str
    category: str
    score: float


class TimerPreset(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    duration: int = Field(ge=0)
    description: Optional[str] = None


class PracticeMode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    suggested_duration: int = Field(ge=0)


class StreakData(BaseModel):
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_practice_date: Optional[date] = None


class ProgressStats(BaseModel):
    total_sessions: int = Field(default=0, ge=0)
    total_practice_time: int = Field(default=0, ge=0)
    subjects_mastered: int = Field(default=0, ge=0)
    average_session_time: int = Field(default=0, ge=0)
    practice_sessions_this_week: int = Field(default=0, ge=0)
    practice_sessions_this_month: int = Field(default=0, ge=0)
    weekly_goal: int = Field(default=5, ge=1)


class PracticeSettings(BaseModel):
    algorithm_mode: bool = True
    active_list_id: str = "default"
    default_timer_duration: int = Field(default=60, ge=0)
    selected_algorithm: AlgorithmId = AlgorithmId.BALANCED
    sound_enabled: bool = True
    auto_advance: bool = False


class CustomListData(BaseModel):
    name: str
    creator: str
    social_link: Optional[str] = None
    raw_items: str


class PracticeRecord(BaseModel):
    """Everything persisted for a single practitioner."""

    username: str
    history: List[HistoryEntry] = Field(default_factory=list)
    item_ratings: Dict[str, Rating] = Field(default_factory=dict)
    streak: StreakData = Field(default_factory=StreakData)
    stats: ProgressStats = Field(default_factory=ProgressStats)
    settings: PracticeSettings = Field(default_factory=PracticeSettings)
    custom_lists: List[TrainingList] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=_now)


__all__ = [
    "AlgorithmId",
    "AlgorithmProfile",
    "Challenge",
    "CustomListData",
    "HistoryEntry",
    "ItemRatings",
    "PracticeMode",
    "PracticeRecord",
    "PracticeSettings",
    "ProgressStats",
    "RATINGS",
    "Rating",
    "ScoredItem",
    "StreakData",
    "TimerPreset",
    "TrainingList",
    "ensure_utc",
]
