"""Training list endpoints: built-in catalog plus user-authored lists."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from .list_management import create_custom_list, validate_custom_list_data
from .models import CustomListData, TrainingList
from .practice_store import practice_store
from .telemetry import emit_event

router = APIRouter(prefix="/api/lists", tags=["lists"])
logger = logging.getLogger(__name__)


class TrainingListSummary(BaseModel):
    id: str
    name: str
    creator: str
    is_custom: bool
    category_count: int
    subject_count: int


class CustomListRequest(BaseModel):
    name: str = Field(..., max_length=120)
    creator: str = Field(..., max_length=80)
    social_link: Optional[str] = Field(default=None, max_length=200)
    raw_items: str


def _summary(training_list: TrainingList) -> TrainingListSummary:
    return TrainingListSummary(
        id=training_list.id,
        name=training_list.name,
        creator=training_list.creator,
        is_custom=training_list.is_custom,
        category_count=len(training_list.categories),
        subject_count=training_list.subject_count(),
    )


@router.get("", response_model=List[TrainingListSummary], status_code=status.HTTP_200_OK)
def list_training_lists(
    username: Optional[str] = Query(
        default=None,
        description="Include the custom lists authored by this practitioner.",
    ),
) -> List[TrainingListSummary]:
    return [_summary(training_list) for training_list in practice_store.available_lists(username)]


@router.get("/{list_id}", response_model=TrainingList, status_code=status.HTTP_200_OK)
def get_training_list(list_id: str, username: Optional[str] = Query(default=None)) -> TrainingList:
    training_list = practice_store.find_list(list_id, username)
    if training_list is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Training list '{list_id}' was not found.",
        )
    return training_list


@router.post("/{username}", response_model=TrainingList, status_code=status.HTTP_201_CREATED)
def create_training_list(username: str, payload: CustomListRequest) -> TrainingList:
    data = CustomListData(
        name=payload.name,
        creator=payload.creator,
        social_link=payload.social_link,
        raw_items=payload.raw_items,
    )
    errors = validate_custom_list_data(data)
    if errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=errors)

    try:
        training_list = practice_store.save_custom_list(username, create_custom_list(data))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    logger.info("Created custom list %s for %s", training_list.id, username)
    emit_event(
        "custom_list_created",
        username=username,
        list_id=training_list.id,
        categories=len(training_list.categories),
        subjects=training_list.subject_count(),
    )
    return training_list
