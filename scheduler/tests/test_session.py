import pytest

from scheduler.domain.enums import QuizMode, SessionStatus
from scheduler.domain.questions import Question
from scheduler.domain.session import (
    FeedbackState,
    IdleState,
    InvalidTransition,
    LoadingState,
    QuestionState,
    SummaryState,
    advance,
    begin_loading,
    questions_loaded,
    reset,
    submit_answer,
)


@pytest.fixture
def questions():
    return [
        Question(f"n5-{i}", QuizMode.TERM_TO_MEANING, f"字{i}", (f"m{i}", "x", "y", "z"), f"m{i}")
        for i in range(3)
    ]


def test_full_session_walkthrough(questions):
    state = begin_loading(IdleState())
    assert state.status == SessionStatus.LOADING

    state = questions_loaded(state, questions)
    assert isinstance(state, QuestionState)
    assert (state.question_index, state.total, state.score) == (0, 3, 0)

    state = submit_answer(state, "m0")
    assert isinstance(state, FeedbackState)
    assert state.is_correct and state.score == 1 and state.streak == 1

    state = advance(state, questions)
    state = submit_answer(state, "x")
    assert not state.is_correct
    assert state.correct_answer == "m1"
    assert (state.score, state.streak) == (1, 0)

    state = advance(state, questions)
    assert state.question_index == 2
    state = submit_answer(state, "m2")

    state = advance(state, questions)
    assert state == SummaryState(score=2, total=3, streak=1)
    assert state.accuracy == pytest.approx(66.666, rel=1e-3)


def test_no_questions_returns_to_idle():
    assert questions_loaded(LoadingState(), []) == IdleState()


def test_summary_accuracy_with_no_questions():
    assert SummaryState(score=0, total=0).accuracy == 0.0


@pytest.mark.parametrize(
    "action",
    [
        lambda s, qs: submit_answer(s, "m0"),
        lambda s, qs: advance(s, qs),
        lambda s, qs: questions_loaded(s, qs),
    ],
)
def test_invalid_transitions_from_idle(questions, action):
    with pytest.raises(InvalidTransition):
        action(IdleState(), questions)


def test_cannot_answer_twice(questions):
    state = submit_answer(questions_loaded(LoadingState(), questions), "m0")
    with pytest.raises(InvalidTransition, match="cannot answer while feedback"):
        submit_answer(state, "m0")


def test_cannot_start_from_summary():
    with pytest.raises(InvalidTransition):
        begin_loading(SummaryState(score=1, total=1))


@pytest.mark.parametrize(
    "state",
    [IdleState(), LoadingState(), SummaryState(score=3, total=10)],
)
def test_reset_always_goes_idle(state):
    assert reset(state) == IdleState()
