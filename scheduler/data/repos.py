from functools import wraps

from django.db import DatabaseError, transaction

from ..domain.enums import SessionStatus
from ..domain.questions import Question
from ..domain.session import (
    FeedbackState,
    IdleState,
    LoadingState,
    QuestionState,
    SummaryState,
)
from ..exceptions import DataUnavailable, SessionNotFound
from .models import ItemProgress, QuizResult, QuizSession, UserStats


def store_errors(fn):
    """Surface database failures as DataUnavailable."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except DatabaseError as exc:
            raise DataUnavailable() from exc

    return wrapper


###############################################################################
## Progress

@store_errors
def progress_snapshot():
    """Every progress record keyed by item id."""
    return {row.item_id: row.to_record() for row in ItemProgress.objects.all()}


@store_errors
def get_progress_for_update(item_id):
    """
    Lock the progress row for an item, or return None when the item was never
    answered. Must run inside a transaction.
    """
    return ItemProgress.objects.select_for_update().filter(item_id=item_id).first()


@store_errors
def save_progress(record, row=None):
    if row is None:
        row, _ = ItemProgress.objects.get_or_create(item_id=record.item_id)
    row.apply(record)
    row.save()
    return row


@store_errors
def due_item_ids(until):
    return list(
        ItemProgress.objects.filter(next_review__lte=until)
        .order_by("next_review")
        .values_list("item_id", flat=True)
    )


@store_errors
def progress_by_misses(limit):
    rows = ItemProgress.objects.order_by("-incorrect_count", "item_id")[:limit]
    return [row.to_record() for row in rows]


###############################################################################
## Stats & history

@store_errors
def get_user_stats():
    stats, _ = UserStats.objects.get_or_create(key=UserStats.MAIN)
    return stats


@store_errors
def apply_session_result(score, total, streak, now):
    """
    Fold a finished session into the lifetime stats and append it to the
    quiz history. Runs in its own savepoint so a failure leaves the caller's
    transaction usable.
    """
    with transaction.atomic():
        stats, _ = UserStats.objects.select_for_update().get_or_create(key=UserStats.MAIN)
        stats.total_answered += total
        stats.correct_answers += score
        stats.current_streak = streak
        stats.best_streak = max(stats.best_streak, streak)
        stats.save()
        result = QuizResult.objects.create(
            total_questions=total, correct_answers=score, created_at=now
        )
    return stats, result


@store_errors
def recent_results(limit):
    return list(QuizResult.objects.all()[:limit])


@store_errors
def items_seen():
    return ItemProgress.objects.filter(correct_count__gt=0).count()


@store_errors
def items_due(now):
    return ItemProgress.objects.filter(next_review__lte=now).count()


###############################################################################
## Quiz sessions

@store_errors
def create_session(state, questions):
    session = QuizSession(questions=[q.to_dict() for q in questions])
    write_state(session, state)
    session.save()
    return session


@store_errors
def get_session(session_id, for_update=False):
    qs = QuizSession.objects.all()
    if for_update:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=session_id)
    except QuizSession.DoesNotExist:
        raise SessionNotFound()


@store_errors
def save_session(session, state):
    write_state(session, state)
    session.save()
    return session


def session_questions(session):
    return [Question.from_dict(q) for q in session.questions]


def read_state(session):
    status = SessionStatus(session.status)
    if status == SessionStatus.IDLE:
        return IdleState()
    if status == SessionStatus.LOADING:
        return LoadingState()
    if status == SessionStatus.SUMMARY:
        return SummaryState(score=session.score, total=session.total, streak=session.streak)

    question = Question.from_dict(session.questions[session.question_index])
    if status == SessionStatus.QUESTION:
        return QuestionState(
            question_index=session.question_index,
            total=session.total,
            question=question,
            score=session.score,
            streak=session.streak,
        )
    return FeedbackState(
        question_index=session.question_index,
        total=session.total,
        question=question,
        selected_answer=session.selected_answer,
        is_correct=bool(session.is_correct),
        score=session.score,
        streak=session.streak,
    )


def write_state(session, state):
    session.status = state.status.value
    session.question_index = getattr(state, "question_index", 0)
    session.total = getattr(state, "total", 0)
    session.score = getattr(state, "score", 0)
    session.streak = getattr(state, "streak", 0)
    session.selected_answer = getattr(state, "selected_answer", "")
    session.is_correct = getattr(state, "is_correct", None)
