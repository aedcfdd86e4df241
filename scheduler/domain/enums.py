from enum import Enum


class QuizMode(str, Enum):
    TERM_TO_MEANING = "term_to_meaning"
    MEANING_TO_TERM = "meaning_to_term"


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    QUESTION = "question"
    FEEDBACK = "feedback"
    SUMMARY = "summary"


MODE_LABELS = {
    QuizMode.TERM_TO_MEANING: "漢字 → significado",
    QuizMode.MEANING_TO_TERM: "significado → 漢字",
}
