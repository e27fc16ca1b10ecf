"""Built-in weighting profiles consumed by the challenge selector."""

from __future__ import annotations

from typing import Dict, List, Union

from .models import AlgorithmId, AlgorithmProfile

DEFAULT_ALGORITHM_ID = AlgorithmId.BALANCED


class UnknownAlgorithmError(LookupError):
    """Raised when a profile id does not name one of the built-in profiles."""

    def __init__(self, algorithm_id: str) -> None:
        super().__init__(f"Unknown training algorithm '{algorithm_id}'.")
        self.algorithm_id = algorithm_id


TRAINING_ALGORITHMS: List[AlgorithmProfile] = [
    AlgorithmProfile(
        id=AlgorithmId.BALANCED,
        name="Balanced",
        description="Smart mix with gentle focus on improvement areas",
        icon="⚖️",
        struggling_weight=0.4,
        recent_weight=0.3,
        category_balance=True,
        spaced_repetition=False,
    ),
    AlgorithmProfile(
        id=AlgorithmId.STRUGGLING_FOCUS,
        name="Focused Practice",
        description="Prioritizes subjects you want to get better at",
        icon="🎯",
        struggling_weight=0.7,
        recent_weight=0.2,
        category_balance=False,
        spaced_repetition=True,
    ),
    AlgorithmProfile(
        id=AlgorithmId.FRESH_EXPLORATION,
        name="Discovery Mode",
        description="Explores new subjects and fresh challenges",
        icon="🌟",
        struggling_weight=0.2,
        recent_weight=0.1,
        category_balance=True,
        spaced_repetition=False,
    ),
    AlgorithmProfile(
        id=AlgorithmId.SPACED_REPETITION,
        name="Memory Trainer",
        description="Optimized timing for long-term retention",
        icon="🧠",
        struggling_weight=0.5,
        recent_weight=0.4,
        category_balance=False,
        spaced_repetition=True,
    ),
    AlgorithmProfile(
        id=AlgorithmId.RANDOM,
        name="Surprise Me",
        description="Completely random for variety and fun",
        icon="🎲",
        struggling_weight=0.0,
        recent_weight=0.0,
        category_balance=False,
        spaced_repetition=False,
    ),
]

_BY_ID: Dict[AlgorithmId, AlgorithmProfile] = {profile.id: profile for profile in TRAINING_ALGORITHMS}


def get_training_algorithm(algorithm_id: Union[AlgorithmId, str]) -> AlgorithmProfile:
    try:
        key = AlgorithmId(algorithm_id)
    except ValueError as exc:
        raise UnknownAlgorithmError(str(algorithm_id)) from exc
    return _BY_ID[key]


def default_training_algorithm() -> AlgorithmProfile:
    return _BY_ID[DEFAULT_ALGORITHM_ID]


__all__ = [
    "DEFAULT_ALGORITHM_ID",
    "TRAINING_ALGORITHMS",
    "UnknownAlgorithmError",
    "default_training_algorithm",
    "get_training_algorithm",
]
