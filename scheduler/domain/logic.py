import random
from dataclasses import replace
from datetime import datetime, timedelta
from operator import attrgetter
from typing import Callable, Mapping, Optional, Sequence

from ..config import (
    BASE_WEIGHT,
    FAILED_BONUS,
    NEW_ITEM_BONUS,
    NOISE_RANGE,
    OVERDUE_BONUS,
    REVIEW_INTERVAL,
)
from .records import FAR_FUTURE, Candidate, ProgressRecord


def review_interval(streak: int) -> timedelta:
    # 1, 2, 4, 8 ... days, no cap
    return REVIEW_INTERVAL * (2 ** max(0, streak - 1))


def next_review_at(now: datetime, streak: int) -> datetime:
    try:
        return now + review_interval(streak)
    except OverflowError:
        return FAR_FUTURE


def record_answer(
    item_id: str, record: Optional[ProgressRecord], is_correct: bool, now: datetime
) -> ProgressRecord:
    if record is None:
        record = ProgressRecord(item_id=item_id)

    if is_correct:
        streak = record.streak + 1
        return replace(
            record,
            correct_count=record.correct_count + 1,
            streak=streak,
            last_reviewed=now,
            next_review=next_review_at(now, streak),
        )

    # Wrong answer: due again right away
    return replace(
        record,
        incorrect_count=record.incorrect_count + 1,
        streak=0,
        last_reviewed=now,
        next_review=now,
    )


def item_weight(record: Optional[ProgressRecord], now: datetime) -> int:
    if record is None:
        return BASE_WEIGHT + NEW_ITEM_BONUS

    weight = BASE_WEIGHT
    if record.is_due(now):
        weight += OVERDUE_BONUS
    if record.recently_failed():
        weight += FAILED_BONUS
    return weight


def weigh_candidates(
    pool: Sequence,
    progress: Mapping[str, ProgressRecord],
    now: datetime,
    key: Callable = attrgetter("id"),
) -> list:
    return [Candidate(item, item_weight(progress.get(key(item)), now)) for item in pool]


def select_items(
    pool: Sequence,
    count: int,
    progress: Mapping[str, ProgressRecord],
    now: datetime,
    rng: Optional[random.Random] = None,
    key: Callable = attrgetter("id"),
) -> list:
    """
    Pick up to `count` items from `pool`, heaviest first. Overdue and recently
    failed items dominate; the noise keeps the order from being memorizable
    and lets well-known items surface now and then. The returned order is the
    question order of the session.
    """
    if count <= 0 or not pool:
        return []
    rng = rng or random.Random()

    noised = [
        (c.weight + rng.random() * NOISE_RANGE, c)
        for c in weigh_candidates(pool, progress, now, key)
    ]
    noised.sort(key=lambda pair: pair[0], reverse=True)
    return [c.item for _, c in noised[:count]]
