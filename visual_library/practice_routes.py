"""Practice loop endpoints: next challenge, session recording, progress."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from .challenge_selector import EmptyTrainingListError, generate_next_challenge
from .models import HistoryEntry, PracticeRecord, PracticeSettings, ProgressStats, Rating, StreakData
from .practice_store import practice_store
from .progress_tracking import calculate_weekly_progress, format_time, streak_emoji
from .telemetry import emit_event
from .training_algorithms import UnknownAlgorithmError, get_training_algorithm

router = APIRouter(prefix="/api/practice", tags=["practice"])
logger = logging.getLogger(__name__)


class NextChallengeRequest(BaseModel):
    list_id: Optional[str] = Field(default=None, description="Defaults to the practitioner's active list.")
    algorithm: Optional[str] = Field(default=None, description="Defaults to the practitioner's selected profile.")
    algorithm_mode: Optional[bool] = None


class ChallengePayload(BaseModel):
    item: str
    category: str
    list_id: str
    algorithm: str
    algorithm_mode: bool


class SessionRequest(BaseModel):
    item: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    time: int = Field(default=0, ge=0)
    rating: Rating
    date: Optional[datetime] = None


class ProgressPayload(BaseModel):
    username: str
    streak: StreakData
    stats: ProgressStats
    weekly_progress: float
    streak_emoji: str
    total_practice_time_display: str
    item_ratings: Dict[str, Rating] = Field(default_factory=dict)
    history_size: int = 0


def _load_record(username: str) -> PracticeRecord:
    try:
        return practice_store.get_or_create(username)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc


def _progress_payload(record: PracticeRecord) -> ProgressPayload:
    return ProgressPayload(
        username=record.username,
        streak=record.streak,
        stats=record.stats,
        weekly_progress=calculate_weekly_progress(record.stats),
        streak_emoji=streak_emoji(record.streak.current_streak),
        total_practice_time_display=format_time(record.stats.total_practice_time),
        item_ratings=dict(record.item_ratings),
        history_size=len(record.history),
    )


@router.get("/{username}", response_model=ProgressPayload, status_code=status.HTTP_200_OK)
def get_progress(username: str) -> ProgressPayload:
    return _progress_payload(_load_record(username))


@router.get("/{username}/settings", response_model=PracticeSettings, status_code=status.HTTP_200_OK)
def get_practice_settings(username: str) -> PracticeSettings:
    return _load_record(username).settings


@router.put("/{username}/settings", response_model=PracticeSettings, status_code=status.HTTP_200_OK)
def update_practice_settings(username: str, payload: PracticeSettings) -> PracticeSettings:
    _load_record(username)
    if practice_store.find_list(payload.active_list_id, username) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Training list '{payload.active_list_id}' was not found.",
        )
    return practice_store.update_settings(username, payload).settings


@router.post("/{username}/next", response_model=ChallengePayload, status_code=status.HTTP_200_OK)
def next_challenge(username: str, payload: NextChallengeRequest) -> ChallengePayload:
    record = _load_record(username)
    settings = record.settings
    list_id = payload.list_id or settings.active_list_id
    training_list = practice_store.find_list(list_id, username)
    if training_list is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Training list '{list_id}' was not found.",
        )
    try:
        profile = get_training_algorithm(payload.algorithm or settings.selected_algorithm)
    except UnknownAlgorithmError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    algorithm_mode = settings.algorithm_mode if payload.algorithm_mode is None else payload.algorithm_mode
    try:
        challenge = generate_next_challenge(
            training_list,
            algorithm_enabled=algorithm_mode,
            profile=profile,
            item_ratings=record.item_ratings,
            history=record.history,
        )
    except EmptyTrainingListError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    emit_event(
        "challenge_selected",
        username=record.username,
        list_id=training_list.id,
        algorithm=profile.id,
        algorithm_mode=algorithm_mode,
        item=challenge.item,
        category=challenge.category,
    )
    return ChallengePayload(
        item=challenge.item,
        category=challenge.category,
        list_id=training_list.id,
        algorithm=profile.id.value,
        algorithm_mode=algorithm_mode,
    )


@router.post("/{username}/sessions", response_model=ProgressPayload, status_code=status.HTTP_201_CREATED)
def record_session(username: str, payload: SessionRequest) -> ProgressPayload:
    _load_record(username)
    fields = payload.model_dump(exclude_none=True)
    entry = HistoryEntry(**fields)
    record = practice_store.record_session(username, entry)
    logger.info("Recorded session for %s: %s rated %s", record.username, entry.item, entry.rating)
    emit_event(
        "practice_session_recorded",
        username=record.username,
        item=entry.item,
        category=entry.category,
        rating=entry.rating,
        time=entry.time,
        current_streak=record.streak.current_streak,
    )
    return _progress_payload(record)
