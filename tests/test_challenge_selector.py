"""Tests for adaptive challenge selection."""

from __future__ import annotations

import logging
import random
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, List

import pytest

from visual_library.challenge_selector import (
    CATEGORY_BALANCE_DAMPING,
    MIN_SCORE,
    ChallengeSelector,
    EmptyTrainingListError,
)
from visual_library.models import AlgorithmId, HistoryEntry, ScoredItem, TrainingList
from visual_library.training_algorithms import get_training_algorithm

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class _FixedRandom:
    """Random source whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        self._value = value
        self._choices = random.Random(7)

    def random(self) -> float:
        return self._value

    def choice(self, seq):
        return self._choices.choice(seq)


def _selector(seed: int = 1234) -> ChallengeSelector:
    return ChallengeSelector(rng=random.Random(seed), clock=lambda: NOW)


def _list(categories: Dict[str, List[str]]) -> TrainingList:
    return TrainingList(id="test-list", name="Test", creator="tests", categories=categories)


def _entry(item: str, category: str, *, days_ago: float, rating: str = "got-it") -> HistoryEntry:
    return HistoryEntry(item=item, category=category, time=60, rating=rating, date=NOW - timedelta(days=days_ago))


def _scores(scored: List[ScoredItem]) -> Dict[str, float]:
    return {entry.item: entry.score for entry in scored}


def test_selection_is_contained_in_list_for_every_profile() -> None:
    training_list = _list({"Animals": ["cat", "dog", "owl"], "Props": ["chair"], "Empty": []})
    history = [_entry("cat", "Animals", days_ago=0.2, rating="failed")]
    ratings = {"cat": "failed", "chair": "easy"}
    selector = _selector()

    for algorithm_id in AlgorithmId:
        profile = get_training_algorithm(algorithm_id)
        for enabled in (True, False):
            for _ in range(200):
                challenge = selector.select(
                    training_list,
                    algorithm_enabled=enabled,
                    profile=profile,
                    item_ratings=ratings,
                    history=history,
                )
                assert challenge.category in training_list.categories
                assert challenge.item in training_list.categories[challenge.category]


def test_uniform_mode_is_two_stage_not_pooled() -> None:
    training_list = _list({"Solo": ["moon"], "Trio": ["fork", "knife", "spoon"]})
    selector = _selector(seed=42)
    trials = 8000
    counts: Counter = Counter()
    for _ in range(trials):
        challenge = selector.select(
            training_list,
            algorithm_enabled=False,
            profile=get_training_algorithm("balanced"),
            item_ratings={},
            history=[],
        )
        counts[challenge.item] += 1

    assert counts["moon"] / trials == pytest.approx(0.5, abs=0.03)
    for item in ("fork", "knife", "spoon"):
        assert counts[item] / trials == pytest.approx(1 / 6, abs=0.03)


def test_random_profile_ignores_history_and_ratings() -> None:
    training_list = _list({"Solo": ["moon"], "Trio": ["fork", "knife", "spoon"]})
    history = [_entry("fork", "Trio", days_ago=10, rating="failed") for _ in range(25)]
    ratings = {"fork": "failed", "moon": "easy"}
    selector = _selector(seed=7)
    trials = 8000
    counts: Counter = Counter()
    for _ in range(trials):
        challenge = selector.select(
            training_list,
            algorithm_enabled=True,
            profile=get_training_algorithm(AlgorithmId.RANDOM),
            item_ratings=ratings,
            history=history,
        )
        counts[challenge.item] += 1

    assert counts["moon"] / trials == pytest.approx(0.5, abs=0.03)
    assert counts["fork"] / trials == pytest.approx(1 / 6, abs=0.03)


def test_fresh_list_scores_every_subject_with_novelty_bonus() -> None:
    training_list = _list({"Shapes": ["circle", "square"]})
    selector = _selector(seed=99)
    profile = get_training_algorithm("balanced")

    scores = _scores(selector.score_items(training_list, profile=profile, item_ratings={}, history=[]))
    assert scores == {"circle": pytest.approx(1.5), "square": pytest.approx(1.5)}

    trials = 6000
    counts: Counter = Counter()
    for _ in range(trials):
        challenge = selector.select(
            training_list,
            algorithm_enabled=True,
            profile=profile,
            item_ratings={},
            history=[],
        )
        assert challenge.category == "Shapes"
        counts[challenge.item] += 1
    assert counts["circle"] / trials == pytest.approx(0.5, abs=0.03)


def test_failed_rating_outscores_unrated_subject() -> None:
    training_list = _list({"Animals": ["cat", "dog"]})
    selector = _selector()
    for algorithm_id in (AlgorithmId.BALANCED, AlgorithmId.STRUGGLING_FOCUS, AlgorithmId.FRESH_EXPLORATION):
        profile = get_training_algorithm(algorithm_id)
        scores = _scores(
            selector.score_items(training_list, profile=profile, item_ratings={"cat": "failed"}, history=[])
        )
        assert scores["cat"] > scores["dog"]
        assert scores["cat"] == pytest.approx(1.5 + profile.struggling_weight * 2)


def test_easy_rating_lowers_score() -> None:
    training_list = _list({"Animals": ["cat", "dog"]})
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=get_training_algorithm("balanced"),
            item_ratings={"cat": "easy", "dog": "got-it"},
            history=[],
        )
    )
    assert scores["cat"] == pytest.approx(1.5 - 0.4 * 0.5)
    assert scores["dog"] == pytest.approx(1.5)


@pytest.mark.parametrize(
    ("days_ago", "expected"),
    [
        (20 / 24, 1.0 - 0.3 * 1.5),
        (2.0, 1.0 - 0.3 * 0.8),
        (3.0, 1.0),
        (12.0, 1.0),
    ],
)
def test_recency_tiers_use_fractional_days(days_ago: float, expected: float) -> None:
    training_list = _list({"Animals": ["cat"]})
    history = [_entry("cat", "Animals", days_ago=days_ago)]
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=get_training_algorithm("struggling-focus").model_copy(
                update={"recent_weight": 0.3, "spaced_repetition": False}
            ),
            item_ratings={},
            history=history,
        )
    )
    assert scores["cat"] == pytest.approx(expected)


def test_most_recent_practice_is_found_by_date_not_position() -> None:
    training_list = _list({"Animals": ["cat"]})
    history = [
        _entry("cat", "Animals", days_ago=0.1),
        _entry("cat", "Animals", days_ago=9),
    ]
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=get_training_algorithm("balanced"),
            item_ratings={},
            history=history,
        )
    )
    assert scores["cat"] == pytest.approx(1.0 - 0.3 * 1.5)


def test_spaced_repetition_threshold_is_inclusive() -> None:
    training_list = _list({"Animals": ["cat", "dog"]})
    profile = get_training_algorithm(AlgorithmId.SPACED_REPETITION)
    history = [
        _entry("cat", "Animals", days_ago=7.0, rating="easy"),
        _entry("dog", "Animals", days_ago=6.99, rating="easy"),
    ]
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=profile,
            item_ratings={"cat": "easy", "dog": "easy"},
            history=history,
        )
    )
    assert scores["cat"] == pytest.approx(1.0 - 0.5 * 0.5 + 1.0)
    assert scores["dog"] == pytest.approx(1.0 - 0.5 * 0.5 - 0.5)


@pytest.mark.parametrize(
    ("rating", "due_days", "early_days", "due_score", "early_score"),
    [
        ("failed", 0.5, 0.4, 2.4, 0.9),
        ("struggled", 1.0, 0.9, 2.68, 0.9),
        ("got-it", 3.0, 2.5, 2.0, 0.18),
    ],
)
def test_spaced_repetition_intervals_follow_rating(
    rating: str,
    due_days: float,
    early_days: float,
    due_score: float,
    early_score: float,
) -> None:
    training_list = _list({"Animals": ["due", "early"]})
    profile = get_training_algorithm(AlgorithmId.SPACED_REPETITION)
    history = [
        _entry("due", "Animals", days_ago=due_days, rating=rating),
        _entry("early", "Animals", days_ago=early_days, rating=rating),
    ]
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=profile,
            item_ratings={"due": rating, "early": rating},
            history=history,
        )
    )
    assert scores["due"] == pytest.approx(due_score)
    assert scores["early"] == pytest.approx(early_score)


def test_spaced_repetition_requires_rating_and_history() -> None:
    training_list = _list({"Animals": ["rated", "practised"]})
    profile = get_training_algorithm(AlgorithmId.SPACED_REPETITION)
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=profile,
            item_ratings={"rated": "failed"},
            history=[_entry("practised", "Animals", days_ago=10)],
        )
    )
    assert scores["rated"] == pytest.approx(1.0 + 0.5 * 2 + 0.5)
    assert scores["practised"] == pytest.approx(1.0)


def test_scores_never_drop_below_floor_before_balancing() -> None:
    training_list = _list({"Animals": ["cat"]})
    profile = get_training_algorithm(AlgorithmId.STRUGGLING_FOCUS)
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=profile,
            item_ratings={"cat": "easy"},
            history=[_entry("cat", "Animals", days_ago=0.05, rating="easy")],
        )
    )
    assert scores["cat"] == pytest.approx(MIN_SCORE)


def test_category_balance_dampens_crowded_categories() -> None:
    training_list = _list({"A": ["a1", "a2"], "B": ["b1", "b2"]})
    history = [_entry("a2", "A", days_ago=10) for _ in range(4)]
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=get_training_algorithm("balanced"),
            item_ratings={},
            history=history,
        )
    )
    assert scores["b1"] > scores["a1"]
    assert scores["a1"] == pytest.approx(1.5 * CATEGORY_BALANCE_DAMPING)
    assert scores["b1"] == pytest.approx(1.5)


def test_category_balance_needs_more_than_three_entries() -> None:
    training_list = _list({"A": ["a1"], "B": ["b1"]})
    history = [_entry("a1", "A", days_ago=10) for _ in range(3)]
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=get_training_algorithm("balanced"),
            item_ratings={},
            history=history,
        )
    )
    assert scores["a1"] == pytest.approx(1.0)


def test_category_balance_only_counts_last_twenty_entries() -> None:
    training_list = _list({"A": ["a1"], "B": ["b1"]})
    history = [_entry("a1", "A", days_ago=30) for _ in range(6)]
    history += [_entry("b1", "B", days_ago=10) for _ in range(20)]
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=get_training_algorithm("fresh-exploration"),
            item_ratings={},
            history=history,
        )
    )
    assert scores["a1"] == pytest.approx(1.0)
    assert scores["b1"] == pytest.approx(1.0 * CATEGORY_BALANCE_DAMPING)


def test_category_balance_can_push_floor_scores_lower() -> None:
    training_list = _list({"A": ["a1"]})
    profile = get_training_algorithm("balanced").model_copy(update={"struggling_weight": 1.0, "recent_weight": 1.0})
    history = [_entry("a1", "A", days_ago=0.01, rating="easy") for _ in range(5)]
    scores = _scores(
        _selector().score_items(training_list, profile=profile, item_ratings={"a1": "easy"}, history=history)
    )
    assert scores["a1"] == pytest.approx(MIN_SCORE * CATEGORY_BALANCE_DAMPING)


def test_profiles_without_balance_ignore_category_counts() -> None:
    training_list = _list({"A": ["a1"], "B": ["b1"]})
    history = [_entry("a1", "A", days_ago=10) for _ in range(8)]
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=get_training_algorithm(AlgorithmId.STRUGGLING_FOCUS),
            item_ratings={},
            history=history,
        )
    )
    assert scores["a1"] == pytest.approx(1.0)


def test_weighted_draw_walks_list_order() -> None:
    training_list = _list({"A": ["a1", "a2"], "B": ["b1"]})
    profile = get_training_algorithm("balanced")

    first = ChallengeSelector(rng=_FixedRandom(0.0), clock=lambda: NOW).select(
        training_list, algorithm_enabled=True, profile=profile, item_ratings={}, history=[]
    )
    assert (first.category, first.item) == ("A", "a1")

    middle = ChallengeSelector(rng=_FixedRandom(0.5), clock=lambda: NOW).select(
        training_list, algorithm_enabled=True, profile=profile, item_ratings={}, history=[]
    )
    assert (middle.category, middle.item) == ("A", "a2")

    last = ChallengeSelector(rng=_FixedRandom(0.999), clock=lambda: NOW).select(
        training_list, algorithm_enabled=True, profile=profile, item_ratings={}, history=[]
    )
    assert (last.category, last.item) == ("B", "b1")


def test_struggling_subject_wins_more_often() -> None:
    training_list = _list({"Animals": ["cat", "dog"]})
    selector = _selector(seed=5)
    counts: Counter = Counter()
    for _ in range(4000):
        challenge = selector.select(
            training_list,
            algorithm_enabled=True,
            profile=get_training_algorithm(AlgorithmId.STRUGGLING_FOCUS),
            item_ratings={"cat": "failed"},
            history=[],
        )
        counts[challenge.item] += 1
    assert counts["cat"] > counts["dog"]


def test_exhausted_draw_falls_back_to_uniform(caplog: pytest.LogCaptureFixture) -> None:
    training_list = _list({"A": ["a1", "a2"], "B": ["b1"]})
    selector = ChallengeSelector(rng=_FixedRandom(2.0), clock=lambda: NOW)
    with caplog.at_level(logging.WARNING, logger="visual_library.challenge_selector"):
        challenge = selector.select(
            training_list,
            algorithm_enabled=True,
            profile=get_training_algorithm("balanced"),
            item_ratings={},
            history=[],
        )
    assert challenge.item in training_list.categories[challenge.category]
    assert any("uniform selection" in record.getMessage() for record in caplog.records)


def test_empty_list_fails_fast() -> None:
    selector = _selector()
    with pytest.raises(EmptyTrainingListError):
        selector.select(
            _list({}),
            algorithm_enabled=False,
            profile=get_training_algorithm("balanced"),
            item_ratings={},
            history=[],
        )
    with pytest.raises(EmptyTrainingListError):
        selector.select(
            _list({"A": [], "B": []}),
            algorithm_enabled=True,
            profile=get_training_algorithm("balanced"),
            item_ratings={},
            history=[],
        )


def test_uniform_mode_skips_empty_categories() -> None:
    training_list = _list({"Empty": [], "Full": ["lamp"]})
    selector = _selector()
    for _ in range(50):
        challenge = selector.select(
            training_list,
            algorithm_enabled=False,
            profile=get_training_algorithm("balanced"),
            item_ratings={},
            history=[],
        )
        assert challenge.category == "Full"


def test_selection_does_not_mutate_inputs() -> None:
    training_list = _list({"A": ["a1", "a2"], "B": ["b1"]})
    history = [_entry("a1", "A", days_ago=1.5, rating="struggled") for _ in range(5)]
    ratings = {"a1": "struggled"}
    list_snapshot = training_list.model_copy(deep=True)
    history_snapshot = list(history)
    ratings_snapshot = dict(ratings)

    selector = _selector()
    for algorithm_id in AlgorithmId:
        selector.select(
            training_list,
            algorithm_enabled=True,
            profile=get_training_algorithm(algorithm_id),
            item_ratings=ratings,
            history=history,
        )

    assert training_list == list_snapshot
    assert history == history_snapshot
    assert ratings == ratings_snapshot


def test_naive_history_dates_are_treated_as_utc() -> None:
    training_list = _list({"Animals": ["cat"]})
    naive = (NOW - timedelta(hours=2)).replace(tzinfo=None)
    history = [HistoryEntry(item="cat", category="Animals", time=30, rating="got-it", date=naive)]
    scores = _scores(
        _selector().score_items(
            training_list,
            profile=get_training_algorithm("balanced"),
            item_ratings={},
            history=history,
        )
    )
    assert scores["cat"] == pytest.approx(1.0 - 0.3 * 1.5)
