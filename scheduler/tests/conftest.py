import random
from collections import namedtuple
from datetime import datetime, timezone

import pytest

from catalog.models import Card, CardSet

Item = namedtuple("Item", ["id", "term", "meanings"])


@pytest.fixture
def now():
    return datetime(2024, 4, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_items():
    def _make(n, prefix="k"):
        return [Item(f"{prefix}-{i:03d}", f"字{i}", [f"meaning {i}"]) for i in range(n)]

    return _make


@pytest.fixture
def seeded_catalog(db):
    """Two small sets, six cards each, with distinct meanings."""
    sets = {}
    for set_id, title in (("n5", "JLPT N5"), ("n4", "JLPT N4")):
        card_set = CardSet.objects.create(id=set_id, title=title)
        Card.objects.bulk_create(
            [
                Card(
                    id=f"{set_id}-{i:03d}",
                    card_set=card_set,
                    term=f"{set_id}字{i}",
                    readings=[f"よみ{i}"],
                    meanings=[f"{set_id} meaning {i}"],
                )
                for i in range(6)
            ]
        )
        sets[set_id] = card_set
    return sets
