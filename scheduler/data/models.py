import uuid

from django.db import models
from django.utils import timezone

from ..domain.enums import SessionStatus
from ..domain.records import EPOCH, ProgressRecord


class ItemProgress(models.Model):
    # catalog items are referenced by id only; deleting a card keeps its history
    item_id = models.CharField(max_length=64, unique=True)
    correct_count = models.PositiveIntegerField(default=0)
    incorrect_count = models.PositiveIntegerField(default=0)
    streak = models.PositiveIntegerField(default=0)
    last_reviewed = models.DateTimeField(null=True, blank=True)  # UTC
    next_review = models.DateTimeField(default=EPOCH)  # UTC

    class Meta:
        indexes = [
            models.Index(fields=["next_review"], name="progress_next_review_idx"),
        ]

    def to_record(self):
        return ProgressRecord(
            item_id=self.item_id,
            correct_count=self.correct_count,
            incorrect_count=self.incorrect_count,
            streak=self.streak,
            last_reviewed=self.last_reviewed,
            next_review=self.next_review,
        )

    def apply(self, record):
        self.correct_count = record.correct_count
        self.incorrect_count = record.incorrect_count
        self.streak = record.streak
        self.last_reviewed = record.last_reviewed
        self.next_review = record.next_review


class UserStats(models.Model):
    MAIN = "main"

    key = models.CharField(primary_key=True, max_length=16, default=MAIN)
    total_answered = models.PositiveIntegerField(default=0)
    correct_answers = models.PositiveIntegerField(default=0)
    current_streak = models.PositiveIntegerField(default=0)
    best_streak = models.PositiveIntegerField(default=0)


class QuizResult(models.Model):
    total_questions = models.PositiveIntegerField()
    correct_answers = models.PositiveIntegerField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["created_at"], name="quiz_result_created_idx"),
        ]


class QuizSession(models.Model):
    STATUS_CHOICES = [(s.value, s.value) for s in SessionStatus]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=SessionStatus.IDLE.value)
    questions = models.JSONField(default=list)
    question_index = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField(default=0)
    score = models.PositiveIntegerField(default=0)
    streak = models.PositiveIntegerField(default=0)
    selected_answer = models.CharField(max_length=200, blank=True, default="")
    is_correct = models.BooleanField(null=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
