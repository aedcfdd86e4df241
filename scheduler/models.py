from .data.models import ItemProgress, QuizResult, QuizSession, UserStats  # noqa: F401
