import json
from pathlib import Path

import structlog
from django.db import transaction

from .models import DEFAULT_CUSTOM_SET, STATIC_SETS, Card, CardSet

logger = structlog.get_logger()

DATA_DIR = Path(__file__).resolve().parent / "data"


class CatalogUnavailable(Exception):
    """Static catalog data could not be read."""


def read_entries(path):
    """
    Read a list of card entries from a JSON file. Entries may name the
    character either `kanji` or `term`.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            entries = json.load(fh)
    except (OSError, ValueError) as exc:
        raise CatalogUnavailable(f"cannot read catalog file {path}: {exc}") from exc

    if not isinstance(entries, list):
        raise CatalogUnavailable(f"catalog file {path} must hold a list of entries")

    cards = []
    for entry in entries:
        try:
            if not entry["meanings"]:
                raise CatalogUnavailable(f"entry {entry['id']!r} in {path} has no meanings")
            cards.append(
                {
                    "id": str(entry["id"]),
                    "term": entry.get("term") or entry["kanji"],
                    "readings": list(entry.get("readings", [])),
                    "meanings": list(entry["meanings"]),
                    "examples": list(entry.get("examples") or []),
                    "set_id": entry.get("setId") or entry.get("set_id"),
                }
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise CatalogUnavailable(f"malformed entry in {path}: {entry!r}") from exc
    return cards


@transaction.atomic
def load_entries(entries, set_id=None, title=None):
    """
    Upsert cards into `set_id`. Entries that carry no set of their own and
    arrive without one land in the default custom set.
    """
    created = 0
    for entry in entries:
        target = entry.get("set_id") or set_id or DEFAULT_CUSTOM_SET
        card_set, _ = CardSet.objects.get_or_create(
            id=target,
            defaults={
                "title": title or STATIC_SETS.get(target, target),
                "is_custom": target not in STATIC_SETS,
            },
        )
        _, was_created = Card.objects.update_or_create(
            id=entry["id"],
            defaults={
                "card_set": card_set,
                "term": entry["term"],
                "readings": entry["readings"],
                "meanings": entry["meanings"],
                "examples": entry["examples"],
            },
        )
        created += int(was_created)
    return created


def load_static_catalog(data_dir=DATA_DIR):
    loaded = {}
    for set_id in STATIC_SETS:
        entries = read_entries(Path(data_dir) / f"{set_id}.json")
        for entry in entries:
            entry["set_id"] = set_id
        load_entries(entries, set_id=set_id)
        loaded[set_id] = len(entries)
    logger.info("static_catalog_loaded", sets=loaded)
    return loaded
