import structlog
from django.db import transaction
from django.utils import timezone

from ..data.repos import get_progress_for_update, save_progress
from ..domain.logic import record_answer
from ..utils.time import to_local_iso, to_utc_iso

logger = structlog.get_logger()


def record_review(item_id, is_correct: bool, now=None):
    now = now or timezone.now()
    logger.info("review_received",
        item_id=str(item_id),
        is_correct=is_correct,
    )

    # Serialize progress updates per item
    with transaction.atomic():
        row = get_progress_for_update(item_id)
        previous = row.to_record() if row else None

        record = record_answer(str(item_id), previous, is_correct, now)
        save_progress(record, row)

    logger.info("review_scheduled",
        item_id=record.item_id,
        streak=record.streak,
        correct_count=record.correct_count,
        incorrect_count=record.incorrect_count,
        next_review_utc=to_utc_iso(record.next_review),
        next_review_local=to_local_iso(record.next_review),
    )

    return record
