from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class ProgressRecord:
    """
    Mastery of one catalog item. A missing last_reviewed means the item was
    never answered; next_review falls back to the epoch so it is always due.
    """

    item_id: str
    correct_count: int = 0
    incorrect_count: int = 0
    streak: int = 0
    last_reviewed: Optional[datetime] = None
    next_review: datetime = EPOCH

    @property
    def answered(self) -> int:
        return self.correct_count + self.incorrect_count

    def is_due(self, now: datetime) -> bool:
        return self.next_review <= now

    def recently_failed(self) -> bool:
        return self.streak == 0 and self.incorrect_count > 0


@dataclass(frozen=True)
class Candidate:
    item: Any
    weight: float
