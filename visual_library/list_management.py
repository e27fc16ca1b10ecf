"""Parsing and validation for user-authored training lists."""

from __future__ import annotations

import logging
import random
import re
import string
import time
from datetime import datetime, timezone
from typing import Dict, List

from .models import CustomListData, TrainingList

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Drawing Subjects"
UNCATEGORIZED = "Uncategorized"
_BULLET_PATTERN = re.compile(r"^[-*]\s*")
_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_list_id() -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"custom-{int(time.time() * 1000)}-{suffix}"


def _is_header(line: str) -> bool:
    return ":" in line and not line.startswith(" ")


def _strip_bullet(line: str) -> str:
    return _BULLET_PATTERN.sub("", line)


def parse_items_to_categories(raw_items: str) -> Dict[str, List[str]]:
    """Turn free text into categories.

    Lines holding a colon are treated as ``Category:`` headers when at least
    one unindented header exists; otherwise every line lands in a single
    default category. Leading ``-`` or ``*`` bullets are dropped.
    """
    lines = [line for line in raw_items.split("\n") if line.strip()]

    if not any(_is_header(line) for line in lines):
        items = [_strip_bullet(line.strip()) for line in lines]
        return {DEFAULT_CATEGORY: [item for item in items if item]}

    categories: Dict[str, List[str]] = {}
    current = UNCATEGORIZED
    for line in lines:
        trimmed = line.strip()
        if _is_header(trimmed):
            current = trimmed.replace(":", "", 1).strip()
            categories.setdefault(current, [])
            continue
        item = _strip_bullet(trimmed)
        if item:
            categories.setdefault(current, []).append(item)
    return categories


def validate_custom_list_data(data: CustomListData) -> List[str]:
    errors: List[str] = []

    if not data.name.strip():
        errors.append("List name is required")

    if not data.creator.strip():
        errors.append("Creator name is required")

    if not data.raw_items.strip():
        errors.append("At least one item is required")
    elif not any(parse_items_to_categories(data.raw_items).values()):
        errors.append("At least one drawing subject is required")

    return errors


def create_custom_list(data: CustomListData) -> TrainingList:
    categories = parse_items_to_categories(data.raw_items)
    training_list = TrainingList(
        id=generate_list_id(),
        name=data.name.strip(),
        creator=data.creator.strip(),
        categories=categories,
        created_at=datetime.now(timezone.utc),
        is_custom=True,
        social_link=data.social_link,
    )
    logger.debug(
        "Parsed custom list %s into %d categories (%d subjects)",
        training_list.id,
        len(categories),
        training_list.subject_count(),
    )
    return training_list


__all__ = [
    "DEFAULT_CATEGORY",
    "UNCATEGORIZED",
    "create_custom_list",
    "generate_list_id",
    "parse_items_to_categories",
    "validate_custom_list_data",
]
