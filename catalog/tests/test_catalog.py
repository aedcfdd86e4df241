import json

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from catalog.loader import CatalogUnavailable, load_static_catalog, read_entries
from catalog.models import Card, CardSet
from catalog.selectors import card_pool, search_cards
from scheduler.data.models import ItemProgress


@pytest.mark.django_db
class TestCatalogEndpoints:
    @pytest.fixture(autouse=True)
    def _static_catalog(self, db):
        self.client = APIClient()
        load_static_catalog()

    def test_static_sets_listed(self):
        """Static JLPT sets are loaded with their cards"""
        response = self.client.get(reverse("card-set-list"))

        assert response.status_code == status.HTTP_200_OK
        by_id = {s["id"]: s for s in response.data}
        assert set(by_id) == {"n5", "n4", "n3"}
        assert by_id["n5"]["title"] == "JLPT N5"
        assert by_id["n5"]["card_count"] == 10
        assert not by_id["n5"]["is_custom"]

    def test_filter_cards_by_set_and_search(self):
        response = self.client.get(reverse("card-list"), {"sets": "n5,n4"})
        assert {c["set_id"] for c in response.data} == {"n5", "n4"}

        response = self.client.get(reverse("card-list"), {"q": "AGUA"})
        assert [c["term"] for c in response.data] == ["水"]

        response = self.client.get(reverse("card-list"), {"q": "みず", "sets": "n5"})
        assert [c["id"] for c in response.data] == ["n5-004"]

    def test_create_custom_set_from_selection(self):
        """Selected cards are copied into the new set under fresh ids"""
        response = self.client.post(
            reverse("card-set-list"),
            {"title": "Días de la semana", "card_ids": ["n5-001", "n5-002"]},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["is_custom"]
        assert response.data["card_count"] == 2
        copies = Card.objects.filter(card_set_id=response.data["id"])
        assert {c.term for c in copies} == {"日", "月"}
        assert not {c.id for c in copies} & {"n5-001", "n5-002"}

    def test_delete_custom_set_cascades(self):
        card_set = CardSet.objects.create(id="mine", title="Mine", is_custom=True)
        Card.objects.create(id="mine-1", card_set=card_set, term="猫", meanings=["gato"])

        response = self.client.delete(reverse("card-set-detail", kwargs={"pk": "mine"}))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Card.objects.filter(id="mine-1").exists()

    def test_static_set_cannot_be_deleted(self):
        response = self.client.delete(reverse("card-set-detail", kwargs={"pk": "n5"}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert CardSet.objects.filter(id="n5").exists()

    def test_create_and_delete_custom_card_keeps_progress(self):
        CardSet.objects.create(id="mine", title="Mine", is_custom=True)
        response = self.client.post(
            reverse("card-list"),
            {"set_id": "mine", "term": "猫", "readings": ["ねこ"], "meanings": ["gato"]},
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED
        card_id = Card.objects.get(term="猫").id

        ItemProgress.objects.create(item_id=card_id, correct_count=1, streak=1)
        response = self.client.delete(reverse("card-detail", kwargs={"pk": card_id}))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert ItemProgress.objects.filter(item_id=card_id).exists()

    def test_static_card_cannot_be_deleted(self):
        response = self.client.delete(reverse("card-detail", kwargs={"pk": "n5-001"}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Card.objects.filter(id="n5-001").exists()

    def test_cards_cannot_be_added_to_static_sets(self):
        response = self.client.post(
            reverse("card-list"),
            {"set_id": "n5", "term": "猫", "meanings": ["gato"]},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "set_id" in response.data
        assert not Card.objects.filter(term="猫").exists()

    def test_card_requires_a_meaning(self):
        CardSet.objects.create(id="mine", title="Mine", is_custom=True)
        response = self.client.post(
            reverse("card-list"),
            {"set_id": "mine", "term": "猫", "meanings": []},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "meanings" in response.data

    def test_duplicate_card_id_rejected(self):
        CardSet.objects.create(id="mine", title="Mine", is_custom=True)
        response = self.client.post(
            reverse("card-list"),
            {"id": "n5-001", "set_id": "mine", "term": "猫", "meanings": ["gato"]},
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Card.objects.get(id="n5-001").card_set_id == "n5"

    def test_initialize_endpoint_reports_missing_file(self):
        response = self.client.post(
            reverse("catalog-initialize"), {"file": "missing.json"}, format="json"
        )
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    def test_initialize_endpoint_reloads_static_sets(self):
        Card.objects.filter(id="n3-001").delete()
        response = self.client.post(reverse("catalog-initialize"), {}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["loaded"] == {"n5": 10, "n4": 8, "n3": 6}
        assert Card.objects.filter(id="n3-001").exists()


@pytest.mark.django_db
def test_card_pool_filters_by_set():
    load_static_catalog()
    assert len(card_pool()) == 24
    assert {c.card_set_id for c in card_pool(["n3"])} == {"n3"}
    assert search_cards(["n4"], "empresa")[0].term in {"会", "社"}


def test_read_entries_rejects_malformed(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps([{"id": "x", "readings": []}]))
    with pytest.raises(CatalogUnavailable):
        read_entries(bad)

    not_json = tmp_path / "broken.json"
    not_json.write_text("{not json")
    with pytest.raises(CatalogUnavailable):
        read_entries(not_json)


def test_read_entries_rejects_card_without_meanings(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps([{"id": "e-1", "kanji": "猫", "meanings": []}]))
    with pytest.raises(CatalogUnavailable, match="no meanings"):
        read_entries(path)


@pytest.mark.django_db
def test_load_catalog_command_with_file(tmp_path):
    path = tmp_path / "extra.json"
    path.write_text(
        json.dumps([{"id": "x-1", "kanji": "犬", "readings": ["いぬ"], "meanings": ["perro"]}]),
        encoding="utf-8",
    )

    call_command("load_catalog", file=str(path), set_id="animals")

    card = Card.objects.get(id="x-1")
    assert card.term == "犬"
    assert card.card_set.is_custom
    assert card.card_set_id == "animals"


@pytest.mark.django_db
def test_load_catalog_command_defaults_to_static_sets():
    call_command("load_catalog")
    assert CardSet.objects.filter(is_custom=False).count() == 3


@pytest.mark.django_db
def test_load_catalog_command_missing_file():
    with pytest.raises(CommandError):
        call_command("load_catalog", file="/nonexistent/cards.json")


@pytest.mark.django_db
def test_entries_without_set_land_in_default_custom_set(tmp_path):
    path = tmp_path / "loose.json"
    path.write_text(json.dumps([{"id": "l-1", "kanji": "鳥", "meanings": ["pájaro"]}]))

    call_command("load_catalog", file=str(path))

    assert Card.objects.get(id="l-1").card_set_id == "custom-default"
