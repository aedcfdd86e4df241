import uuid

import structlog
from rest_framework import status, views
from rest_framework.response import Response

from ..data.repos import due_item_ids, get_session
from ..services import quiz, stats
from ..services.reviews import record_review
from ..utils.time import to_local_iso, to_utc_iso
from .serializers import (
    AnswerInSerializer,
    DueQuerySerializer,
    QuizStartSerializer,
    ReviewInSerializer,
    progress_payload,
    session_payload,
    stats_payload,
)

base_logger = structlog.get_logger()


def _request_logger():
    # Create a unique request_id
    return base_logger.bind(request_id=str(uuid.uuid4()))


class ReviewView(views.APIView):
    def post(self, request):
        logger = _request_logger()

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        record = record_review(s.validated_data["item_id"], s.validated_data["is_correct"])

        logger.info(
            "review_api_response",
            item_id=record.item_id,
            is_correct=s.validated_data["is_correct"],
            streak=record.streak,
            next_review_utc=to_utc_iso(record.next_review),
            status=status.HTTP_201_CREATED,
        )
        return Response(progress_payload(record), status=status.HTTP_201_CREATED)


class DueItemsView(views.APIView):
    def get(self, request):
        logger = _request_logger()

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        until = qs.validated_data["until"]

        results = due_item_ids(until)

        logger.info(
            "due_items_api_response",
            until_utc=to_utc_iso(until),
            item_count=len(results),
        )
        return Response(
            {
                "until_utc": to_utc_iso(until),
                "until_local": to_local_iso(until),
                "item_ids": results,
            }
        )


class QuizStartView(views.APIView):
    def post(self, request):
        logger = _request_logger()

        s = QuizStartSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        session = quiz.start_quiz(s.validated_data["sets"] or None, s.validated_data["count"])

        logger.info("quiz_api_started", session_id=str(session.id), status=session.status)
        return Response(session_payload(session), status=status.HTTP_201_CREATED)


class QuizSessionView(views.APIView):
    def get(self, request, session_id):
        return Response(session_payload(get_session(session_id)))


class QuizAnswerView(views.APIView):
    def post(self, request, session_id):
        logger = _request_logger()

        s = AnswerInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        session = quiz.answer(session_id, s.validated_data["answer"])

        logger.info(
            "quiz_api_answered",
            session_id=str(session_id),
            is_correct=session.is_correct,
        )
        return Response(session_payload(session))


class QuizNextView(views.APIView):
    def post(self, request, session_id):
        session = quiz.next_question(session_id)
        _request_logger().info(
            "quiz_api_next", session_id=str(session_id), status=session.status
        )
        return Response(session_payload(session))


class QuizResetView(views.APIView):
    def post(self, request, session_id):
        return Response(session_payload(quiz.reset_quiz(session_id)))


class StatsView(views.APIView):
    def get(self, request):
        return Response(stats_payload(stats.overview()))
