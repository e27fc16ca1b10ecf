"""Print empirical selection frequencies for a training list and profile."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from collections import Counter
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from visual_library.builtin_lists import DEFAULT_LIST_ID, get_builtin_list
from visual_library.challenge_selector import ChallengeSelector, EmptyTrainingListError
from visual_library.models import PracticeRecord
from visual_library.training_algorithms import UnknownAlgorithmError, get_training_algorithm

logger = logging.getLogger("simulate_selection")


def _load_record(path: Optional[Path]) -> Optional[PracticeRecord]:
    if path is None:
        return None
    with path.open(encoding="utf-8") as handle:
        return PracticeRecord.model_validate(json.load(handle))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--list", dest="list_id", default=DEFAULT_LIST_ID)
    parser.add_argument("--algorithm", default="balanced")
    parser.add_argument("--uniform", action="store_true", help="Disable the weighted algorithm.")
    parser.add_argument("--trials", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--record", type=Path, default=None, help="JSON practice record to score against.")
    parser.add_argument("--top", type=int, default=15)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    training_list = get_builtin_list(args.list_id)
    if training_list is None:
        logger.error("Unknown built-in list %s", args.list_id)
        return 1
    try:
        profile = get_training_algorithm(args.algorithm)
        record = _load_record(args.record)
    except (UnknownAlgorithmError, OSError, json.JSONDecodeError, ValidationError) as exc:
        logger.error("%s", exc)
        return 1

    selector = ChallengeSelector(rng=random.Random(args.seed))
    history = record.history if record else []
    ratings = record.item_ratings if record else {}
    counts: Counter = Counter()
    try:
        for _ in range(max(args.trials, 1)):
            challenge = selector.select(
                training_list,
                algorithm_enabled=not args.uniform,
                profile=profile,
                item_ratings=ratings,
                history=history,
            )
            counts[(challenge.category, challenge.item)] += 1
    except EmptyTrainingListError as exc:
        logger.error("%s", exc)
        return 1

    total = sum(counts.values())
    for (category, item), count in counts.most_common(args.top):
        print(f"{count / total:7.2%}  {item}  [{category}]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
