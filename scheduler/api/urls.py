from django.urls import path
from .views import (
    DueItemsView,
    QuizAnswerView,
    QuizNextView,
    QuizResetView,
    QuizSessionView,
    QuizStartView,
    ReviewView,
    StatsView,
)

urlpatterns = [
    path("reviews", ReviewView.as_view(), name="review"),
    path("due-items", DueItemsView.as_view(), name="due-items"),
    path("quiz", QuizStartView.as_view(), name="quiz-start"),
    path("quiz/<uuid:session_id>", QuizSessionView.as_view(), name="quiz-session"),
    path("quiz/<uuid:session_id>/answer", QuizAnswerView.as_view(), name="quiz-answer"),
    path("quiz/<uuid:session_id>/next", QuizNextView.as_view(), name="quiz-next"),
    path("quiz/<uuid:session_id>/reset", QuizResetView.as_view(), name="quiz-reset"),
    path("stats", StatsView.as_view(), name="stats"),
]
