"""Read-only catalog endpoints: weighting profiles and session presets."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from .models import AlgorithmProfile, PracticeMode, TimerPreset
from .presets import PRACTICE_MODES, TIMER_PRESETS
from .training_algorithms import DEFAULT_ALGORITHM_ID, TRAINING_ALGORITHMS

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


class AlgorithmCatalogPayload(BaseModel):
    default_algorithm: str
    algorithms: List[AlgorithmProfile] = Field(default_factory=list)


class PresetCatalogPayload(BaseModel):
    timer_presets: List[TimerPreset] = Field(default_factory=list)
    practice_modes: List[PracticeMode] = Field(default_factory=list)


@router.get("/algorithms", response_model=AlgorithmCatalogPayload, status_code=status.HTTP_200_OK)
def list_algorithms() -> AlgorithmCatalogPayload:
    return AlgorithmCatalogPayload(
        default_algorithm=DEFAULT_ALGORITHM_ID.value,
        algorithms=list(TRAINING_ALGORITHMS),
    )


@router.get("/presets", response_model=PresetCatalogPayload, status_code=status.HTTP_200_OK)
def list_presets() -> PresetCatalogPayload:
    return PresetCatalogPayload(
        timer_presets=list(TIMER_PRESETS),
        practice_modes=list(PRACTICE_MODES),
    )
