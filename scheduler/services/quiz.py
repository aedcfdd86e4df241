"""
Quiz sessions as the host runs them: pick the items, build the questions,
score each answer against the progress tracker, and fold the finished
session into the lifetime statistics.
"""
import structlog
from django.db import DatabaseError, transaction
from django.utils import timezone

from catalog.selectors import card_pool

from ..config import QUESTIONS_PER_QUIZ
from ..data import repos
from ..domain.logic import select_items
from ..domain.questions import build_questions
from ..domain.session import (
    IdleState,
    InvalidTransition,
    SummaryState,
    advance,
    begin_loading,
    questions_loaded,
    reset,
    submit_answer,
)
from ..exceptions import DataUnavailable, SessionConflict
from .reviews import record_review

logger = structlog.get_logger()


def _load_pool(set_ids):
    try:
        return card_pool(set_ids)
    except DatabaseError as exc:
        raise DataUnavailable() from exc


def start_quiz(set_ids=None, count=QUESTIONS_PER_QUIZ, now=None, rng=None):
    now = now or timezone.now()
    log = logger.bind(sets=sorted(set_ids) if set_ids else None, count=count)

    state = begin_loading(IdleState())
    try:
        pool = _load_pool(set_ids)
        progress = repos.progress_snapshot()
    except DataUnavailable:
        # No session is created; the caller stays idle
        log.error("quiz_data_unavailable")
        raise

    if not pool:
        log.warning("quiz_empty_pool")
        return repos.create_session(questions_loaded(state, []), [])

    items = select_items(pool, count, progress, now, rng=rng)
    questions = build_questions(items, pool, rng=rng)
    state = questions_loaded(state, questions)
    session = repos.create_session(state, questions)

    if not questions:
        log.warning("quiz_no_questions", session_id=str(session.id), pool_size=len(pool))
        return session

    log.info("quiz_started",
        session_id=str(session.id),
        pool_size=len(pool),
        item_ids=[q.item_id for q in questions],
    )
    return session


def _transition(session_id, action, apply):
    with transaction.atomic():
        session = repos.get_session(session_id, for_update=True)
        try:
            state = apply(session, repos.read_state(session))
        except InvalidTransition as exc:
            logger.warning("quiz_invalid_transition",
                session_id=str(session_id),
                action=action,
                status=session.status,
            )
            raise SessionConflict(str(exc)) from exc
        repos.save_session(session, state)
    return session, state


def answer(session_id, selected, now=None):
    now = now or timezone.now()

    def apply(session, state):
        feedback = submit_answer(state, selected)
        record_review(feedback.question.item_id, feedback.is_correct, now)
        return feedback

    session, state = _transition(session_id, "answer", apply)
    logger.info("quiz_answered",
        session_id=str(session_id),
        question_index=state.question_index,
        item_id=state.question.item_id,
        is_correct=state.is_correct,
        score=state.score,
        streak=state.streak,
    )
    return session


def next_question(session_id, now=None):
    now = now or timezone.now()

    def apply(session, state):
        state = advance(state, repos.session_questions(session))
        if isinstance(state, SummaryState):
            _finish(session_id, state, now)
        return state

    session, _ = _transition(session_id, "continue", apply)
    return session


def _finish(session_id, summary, now):
    try:
        repos.apply_session_result(summary.score, summary.total, summary.streak, now)
    except DataUnavailable:
        # The learner still gets the summary; only the lifetime stats miss it
        logger.exception("quiz_stats_not_saved", session_id=str(session_id))
        return
    logger.info("quiz_finished",
        session_id=str(session_id),
        score=summary.score,
        total=summary.total,
        accuracy=round(summary.accuracy, 1),
        streak=summary.streak,
    )


def reset_quiz(session_id):
    session, _ = _transition(session_id, "reset", lambda session, state: reset(state))
    logger.info("quiz_reset", session_id=str(session_id))
    return session
