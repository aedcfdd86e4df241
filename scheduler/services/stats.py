from django.utils import timezone

from ..config import RECENT_RESULTS_LIMIT, REVIEW_PRIORITY_LIMIT
from ..data import repos


def overview(now=None):
    now = now or timezone.now()
    stats = repos.get_user_stats()
    accuracy = (
        round(stats.correct_answers / stats.total_answered * 100)
        if stats.total_answered > 0
        else 0
    )
    return {
        "total_answered": stats.total_answered,
        "correct_answers": stats.correct_answers,
        "current_streak": stats.current_streak,
        "best_streak": stats.best_streak,
        "accuracy": accuracy,
        "items_seen": repos.items_seen(),
        "items_due": repos.items_due(now),
        "review_priority": repos.progress_by_misses(REVIEW_PRIORITY_LIMIT),
        "recent_results": repos.recent_results(RECENT_RESULTS_LIMIT),
    }
