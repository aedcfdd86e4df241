from rest_framework import serializers

from ..config import QUESTIONS_PER_QUIZ
from ..domain.enums import MODE_LABELS, QuizMode, SessionStatus
from ..domain.session import SummaryState
from ..utils.time import to_local_iso, to_utc_iso


class ReviewInSerializer(serializers.Serializer):
    item_id = serializers.CharField(max_length=64)
    is_correct = serializers.BooleanField()


class DueQuerySerializer(serializers.Serializer):
    until = serializers.DateTimeField()  # ISO-8601


class QuizStartSerializer(serializers.Serializer):
    sets = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    count = serializers.IntegerField(min_value=0, required=False, default=QUESTIONS_PER_QUIZ)


class AnswerInSerializer(serializers.Serializer):
    answer = serializers.CharField(max_length=200, allow_blank=True)


def progress_payload(record):
    return {
        "item_id": record.item_id,
        "correct_count": record.correct_count,
        "incorrect_count": record.incorrect_count,
        "streak": record.streak,
        "last_reviewed_utc": to_utc_iso(record.last_reviewed),
        "next_review_utc": to_utc_iso(record.next_review),
        "next_review_local": to_local_iso(record.next_review),
    }


def _question_payload(question):
    mode = QuizMode(question["mode"])
    return {
        "item_id": question["item_id"],
        "mode": mode.value,
        "mode_label": MODE_LABELS[mode],
        "prompt": question["prompt"],
        "options": question["options"],
    }


def session_payload(session):
    """
    Render a quiz session the way its status calls for. The correct answer
    is only revealed once the question has been answered.
    """
    data = {"id": str(session.id), "status": session.status}

    status = SessionStatus(session.status)
    if status in (SessionStatus.QUESTION, SessionStatus.FEEDBACK):
        question = session.questions[session.question_index]
        data.update(
            question_index=session.question_index,
            total=session.total,
            question=_question_payload(question),
            score=session.score,
            streak=session.streak,
        )
        if status == SessionStatus.FEEDBACK:
            data.update(
                selected_answer=session.selected_answer,
                is_correct=session.is_correct,
                correct_answer=question["correct_answer"],
            )
    elif status == SessionStatus.SUMMARY:
        summary = SummaryState(score=session.score, total=session.total, streak=session.streak)
        data.update(
            score=session.score,
            total=session.total,
            streak=session.streak,
            accuracy=round(summary.accuracy, 1),
        )
    return data


def stats_payload(stats):
    return {
        **{k: v for k, v in stats.items() if k not in ("review_priority", "recent_results")},
        "review_priority": [progress_payload(r) for r in stats["review_priority"]],
        "recent_results": [
            {
                "total_questions": r.total_questions,
                "correct_answers": r.correct_answers,
                "date_utc": to_utc_iso(r.created_at),
                "date_local": to_local_iso(r.created_at),
            }
            for r in stats["recent_results"]
        ],
    }
