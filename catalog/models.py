from django.db import models

STATIC_SETS = {
    "n5": "JLPT N5",
    "n4": "JLPT N4",
    "n3": "JLPT N3",
}
DEFAULT_CUSTOM_SET = "custom-default"


class CardSet(models.Model):
    """
    A group of cards. Static sets ship with the app; custom sets are authored
    by the learner and are the only ones that can be deleted.
    """

    id = models.CharField(primary_key=True, max_length=64)
    title = models.CharField(max_length=200)
    is_custom = models.BooleanField(default=False)

    class Meta:
        ordering = ["is_custom", "id"]

    def __str__(self):
        return self.title


class Card(models.Model):
    id = models.CharField(primary_key=True, max_length=64)
    card_set = models.ForeignKey(CardSet, related_name="cards", on_delete=models.CASCADE)
    term = models.CharField(max_length=32)
    readings = models.JSONField(default=list)   # kana only
    meanings = models.JSONField(default=list)   # first one is quizzed
    examples = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.term
