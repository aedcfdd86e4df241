import random
from dataclasses import dataclass
from typing import Optional, Sequence

from ..config import OPTIONS_PER_QUESTION
from .enums import QuizMode


@dataclass(frozen=True)
class Question:
    item_id: str
    mode: QuizMode
    prompt: str
    options: tuple
    correct_answer: str

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "mode": self.mode.value,
            "prompt": self.prompt,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        return cls(
            item_id=data["item_id"],
            mode=QuizMode(data["mode"]),
            prompt=data["prompt"],
            options=tuple(data["options"]),
            correct_answer=data["correct_answer"],
        )


def primary_meaning(item) -> str:
    return item.meanings[0] if item.meanings else ""


def _value(item, mode: QuizMode) -> str:
    if mode == QuizMode.TERM_TO_MEANING:
        return primary_meaning(item)
    return item.term


def build_question(item, pool: Sequence, rng: Optional[random.Random] = None) -> Question:
    """
    Multiple choice for one item: the correct value plus up to three
    distractors taken from the rest of the pool, shuffled. Values equal to the
    answer are never offered as distractors, so the answer shows up exactly
    once even when two cards share a meaning.
    """
    rng = rng or random.Random()
    mode = rng.choice([QuizMode.TERM_TO_MEANING, QuizMode.MEANING_TO_TERM])

    if mode == QuizMode.TERM_TO_MEANING:
        prompt = item.term
    else:
        prompt = primary_meaning(item)
    answer = _value(item, mode)

    eligible, seen = [], {answer}
    for other in pool:
        if other.id == item.id:
            continue
        value = _value(other, mode)
        if value and value not in seen:
            seen.add(value)
            eligible.append(value)

    wanted = min(OPTIONS_PER_QUESTION - 1, len(eligible))
    options = rng.sample(eligible, wanted) + [answer]
    rng.shuffle(options)

    return Question(
        item_id=item.id,
        mode=mode,
        prompt=prompt,
        options=tuple(options),
        correct_answer=answer,
    )


def build_questions(items: Sequence, pool: Sequence, rng: Optional[random.Random] = None) -> list:
    rng = rng or random.Random()
    return [build_question(item, pool, rng) for item in items]
