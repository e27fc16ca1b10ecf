"""Streak and progress aggregates derived from practice history."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Dict, Mapping, Sequence

from .models import HistoryEntry, ProgressStats, Rating, StreakData, ensure_utc

WEEK = timedelta(days=7)
MONTH = timedelta(days=30)

_STREAK_EMOJI = (
    (3, "🔥"),
    (7, "💪"),
    (14, "🚀"),
    (30, "⭐"),
)


def update_streak(streak: StreakData, today: date) -> StreakData:
    """Advance the streak for a session practised on ``today``."""
    if streak.last_practice_date == today:
        return streak.model_copy()

    updated = streak.model_copy()
    yesterday = today - timedelta(days=1)
    last = streak.last_practice_date
    if last == yesterday:
        updated.current_streak += 1
    elif last is None or last < yesterday:
        updated.current_streak = 1

    updated.longest_streak = max(updated.longest_streak, updated.current_streak)
    updated.last_practice_date = today
    return updated


def update_progress_stats(
    stats: ProgressStats,
    session_time: int,
    history: Sequence[HistoryEntry],
    item_ratings: Mapping[str, Rating],
    now: datetime,
) -> ProgressStats:
    now = ensure_utc(now)
    updated = stats.model_copy()
    updated.total_sessions += 1
    updated.total_practice_time += max(session_time, 0)
    updated.average_session_time = int(math.floor(updated.total_practice_time / updated.total_sessions + 0.5))
    updated.subjects_mastered = sum(1 for rating in item_ratings.values() if rating == "easy")

    week_start = now - WEEK
    month_start = now - MONTH
    updated.practice_sessions_this_week = sum(1 for entry in history if entry.date >= week_start)
    updated.practice_sessions_this_month = sum(1 for entry in history if entry.date >= month_start)
    return updated


def apply_rating(item_ratings: Mapping[str, Rating], entry: HistoryEntry) -> Dict[str, Rating]:
    """Return ratings with ``entry`` applied; the latest rating per subject wins."""
    updated = dict(item_ratings)
    updated[entry.item] = entry.rating
    return updated


def format_time(seconds: int) -> str:
    hours, remainder = divmod(max(int(seconds), 0), 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def calculate_weekly_progress(stats: ProgressStats) -> float:
    return min(stats.practice_sessions_this_week / stats.weekly_goal * 100, 100.0)


def streak_emoji(streak: int) -> str:
    if streak == 0:
        return "🌱"
    for ceiling, emoji in _STREAK_EMOJI:
        if streak < ceiling:
            return emoji
    return "👑"


__all__ = [
    "apply_rating",
    "calculate_weekly_progress",
    "format_time",
    "streak_emoji",
    "update_progress_stats",
    "update_streak",
]
