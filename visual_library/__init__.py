"""Adaptive subject selection for memory drawing practice."""

from .challenge_selector import ChallengeSelector, EmptyTrainingListError, generate_next_challenge
from .models import AlgorithmId, AlgorithmProfile, Challenge, HistoryEntry, TrainingList
from .training_algorithms import TRAINING_ALGORITHMS, UnknownAlgorithmError, get_training_algorithm

__all__ = [
    "AlgorithmId",
    "AlgorithmProfile",
    "Challenge",
    "ChallengeSelector",
    "EmptyTrainingListError",
    "HistoryEntry",
    "TRAINING_ALGORITHMS",
    "TrainingList",
    "UnknownAlgorithmError",
    "generate_next_challenge",
    "get_training_algorithm",
]
