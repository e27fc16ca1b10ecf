"""Adaptive challenge selection for memory drawing practice."""

from __future__ import annotations

import logging
import random
from collections import Counter
from datetime import datetime, timezone
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Set

from .models import (
    AlgorithmId,
    AlgorithmProfile,
    Challenge,
    HistoryEntry,
    Rating,
    ScoredItem,
    TrainingList,
    ensure_utc,
)

logger = logging.getLogger(__name__)


BASE_SCORE = 1.0
MIN_SCORE = 0.1
STRUGGLE_BOOST_FACTOR = 2.0
EASY_PENALTY_FACTOR = 0.5
SAME_DAY_PENALTY_FACTOR = 1.5
RECENT_PENALTY_FACTOR = 0.8
RECENT_WINDOW_DAYS = 3.0
NOVELTY_BONUS = 0.5
REVIEW_READY_BONUS = 1.0
REVIEW_NOT_DUE_PENALTY = 0.5
CATEGORY_BALANCE_WINDOW = 20
CATEGORY_BALANCE_THRESHOLD = 3
CATEGORY_BALANCE_DAMPING = 0.7
SECONDS_PER_DAY = 86400.0

REVIEW_INTERVAL_DAYS: Dict[Rating, float] = {
    "failed": 0.5,
    "struggled": 1.0,
    "got-it": 3.0,
    "easy": 7.0,
}


class EmptyTrainingListError(ValueError):
    """Raised when a training list offers nothing to select from."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ChallengeSelector:
    """Picks the next subject to practise from a training list."""

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._clock = clock or _utc_now

    def select(
        self,
        active_list: TrainingList,
        *,
        algorithm_enabled: bool,
        profile: AlgorithmProfile,
        item_ratings: Mapping[str, Rating],
        history: Sequence[HistoryEntry],
    ) -> Challenge:
        self._ensure_selectable(active_list)

        if not algorithm_enabled or profile.id == AlgorithmId.RANDOM:
            return self._uniform_choice(active_list)

        scored = self.score_items(
            active_list,
            profile=profile,
            item_ratings=item_ratings,
            history=history,
        )
        total_score = sum(entry.score for entry in scored)
        remaining = self._rng.random() * total_score
        for entry in scored:
            remaining -= entry.score
            if remaining <= 0:
                return Challenge(item=entry.item, category=entry.category)

        logger.warning(
            "Weighted draw exhausted for list %s (total_score=%.4f); using uniform selection",
            active_list.id,
            total_score,
        )
        return self._uniform_choice(active_list)

    def score_items(
        self,
        active_list: TrainingList,
        *,
        profile: AlgorithmProfile,
        item_ratings: Mapping[str, Rating],
        history: Sequence[HistoryEntry],
    ) -> List[ScoredItem]:
        """Score every subject in list order, applying category balancing last."""
        now = ensure_utc(self._clock())
        last_practiced = self._last_practiced(history)

        scored: List[ScoredItem] = []
        for category, item in active_list.iter_subjects():
            score = self._item_score(
                profile,
                rating=item_ratings.get(item),
                last_practice=last_practiced.get(item),
                now=now,
            )
            scored.append(ScoredItem(item=item, category=category, score=score))

        if profile.category_balance:
            crowded = self._crowded_categories(history)
            for entry in scored:
                if entry.category in crowded:
                    entry.score *= CATEGORY_BALANCE_DAMPING
        return scored

    def _item_score(
        self,
        profile: AlgorithmProfile,
        *,
        rating: Optional[Rating],
        last_practice: Optional[datetime],
        now: datetime,
    ) -> float:
        score = BASE_SCORE

        if rating in ("failed", "struggled"):
            score += profile.struggling_weight * STRUGGLE_BOOST_FACTOR
        elif rating == "easy":
            score -= profile.struggling_weight * EASY_PENALTY_FACTOR

        days_since: Optional[float] = None
        if last_practice is not None:
            days_since = (now - last_practice).total_seconds() / SECONDS_PER_DAY
            if days_since < 1:
                score -= profile.recent_weight * SAME_DAY_PENALTY_FACTOR
            elif days_since < RECENT_WINDOW_DAYS:
                score -= profile.recent_weight * RECENT_PENALTY_FACTOR
        else:
            score += NOVELTY_BONUS

        if profile.spaced_repetition and rating is not None and days_since is not None:
            if days_since >= REVIEW_INTERVAL_DAYS[rating]:
                score += REVIEW_READY_BONUS
            else:
                score -= REVIEW_NOT_DUE_PENALTY

        return max(MIN_SCORE, score)

    @staticmethod
    def _last_practiced(history: Sequence[HistoryEntry]) -> Dict[str, datetime]:
        latest: Dict[str, datetime] = {}
        for entry in history:
            practiced_at = ensure_utc(entry.date)
            current = latest.get(entry.item)
            if current is None or practiced_at > current:
                latest[entry.item] = practiced_at
        return latest

    @staticmethod
    def _crowded_categories(history: Sequence[HistoryEntry]) -> Set[str]:
        window = list(history)[-CATEGORY_BALANCE_WINDOW:]
        counts = Counter(entry.category for entry in window)
        return {category for category, count in counts.items() if count > CATEGORY_BALANCE_THRESHOLD}

    def _uniform_choice(self, active_list: TrainingList) -> Challenge:
        categories = [name for name, items in active_list.categories.items() if items]
        category = self._rng.choice(categories)
        item = self._rng.choice(active_list.categories[category])
        return Challenge(item=item, category=category)

    @staticmethod
    def _ensure_selectable(active_list: TrainingList) -> None:
        if not active_list.categories:
            raise EmptyTrainingListError(f"Training list '{active_list.id}' has no categories.")
        if active_list.is_empty():
            raise EmptyTrainingListError(f"Training list '{active_list.id}' has no subjects to practise.")


selector = ChallengeSelector()


def generate_next_challenge(
    active_list: TrainingList,
    *,
    algorithm_enabled: bool,
    profile: AlgorithmProfile,
    item_ratings: Mapping[str, Rating],
    history: Sequence[HistoryEntry],
) -> Challenge:
    """Select the next challenge with the shared process-wide selector."""
    return selector.select(
        active_list,
        algorithm_enabled=algorithm_enabled,
        profile=profile,
        item_ratings=item_ratings,
        history=history,
    )


__all__ = [
    "CATEGORY_BALANCE_DAMPING",
    "CATEGORY_BALANCE_THRESHOLD",
    "CATEGORY_BALANCE_WINDOW",
    "ChallengeSelector",
    "EmptyTrainingListError",
    "MIN_SCORE",
    "REVIEW_INTERVAL_DAYS",
    "generate_next_challenge",
    "selector",
]
