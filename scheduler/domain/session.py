"""
Quiz session states and the transitions between them:

    idle -> loading -> question -> feedback -> question (next index)
                                            -> summary

Summary and idle are terminal; any state can be reset to idle.
"""
from dataclasses import dataclass
from typing import ClassVar, Sequence, Union

from .enums import SessionStatus
from .questions import Question


class InvalidTransition(ValueError):
    def __init__(self, state, action):
        super().__init__(f"cannot {action} while {state.status.value}")
        self.state = state
        self.action = action


@dataclass(frozen=True)
class IdleState:
    status: ClassVar[SessionStatus] = SessionStatus.IDLE


@dataclass(frozen=True)
class LoadingState:
    status: ClassVar[SessionStatus] = SessionStatus.LOADING


@dataclass(frozen=True)
class QuestionState:
    question_index: int
    total: int
    question: Question
    score: int = 0
    streak: int = 0
    status: ClassVar[SessionStatus] = SessionStatus.QUESTION


@dataclass(frozen=True)
class FeedbackState:
    question_index: int
    total: int
    question: Question
    selected_answer: str
    is_correct: bool
    score: int
    streak: int
    status: ClassVar[SessionStatus] = SessionStatus.FEEDBACK

    @property
    def correct_answer(self) -> str:
        return self.question.correct_answer


@dataclass(frozen=True)
class SummaryState:
    score: int
    total: int
    streak: int = 0
    status: ClassVar[SessionStatus] = SessionStatus.SUMMARY

    @property
    def accuracy(self) -> float:
        return (self.score / self.total) * 100 if self.total > 0 else 0.0


QuizState = Union[IdleState, LoadingState, QuestionState, FeedbackState, SummaryState]


def begin_loading(state: QuizState) -> LoadingState:
    if not isinstance(state, IdleState):
        raise InvalidTransition(state, "start")
    return LoadingState()


def questions_loaded(state: QuizState, questions: Sequence[Question]) -> QuizState:
    if not isinstance(state, LoadingState):
        raise InvalidTransition(state, "load questions")
    if not questions:
        return IdleState()
    return QuestionState(question_index=0, total=len(questions), question=questions[0])


def submit_answer(state: QuizState, answer: str) -> FeedbackState:
    if not isinstance(state, QuestionState):
        raise InvalidTransition(state, "answer")
    is_correct = answer == state.question.correct_answer
    return FeedbackState(
        question_index=state.question_index,
        total=state.total,
        question=state.question,
        selected_answer=answer,
        is_correct=is_correct,
        score=state.score + 1 if is_correct else state.score,
        streak=state.streak + 1 if is_correct else 0,
    )


def advance(state: QuizState, questions: Sequence[Question]) -> QuizState:
    if not isinstance(state, FeedbackState):
        raise InvalidTransition(state, "continue")
    next_index = state.question_index + 1
    if next_index >= len(questions) or next_index >= state.total:
        return SummaryState(score=state.score, total=state.total, streak=state.streak)
    return QuestionState(
        question_index=next_index,
        total=state.total,
        question=questions[next_index],
        score=state.score,
        streak=state.streak,
    )


def reset(state: QuizState) -> IdleState:
    return IdleState()
