import uuid
from pathlib import Path

import structlog
from django.db import transaction
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import api_view
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from .loader import (
    DATA_DIR,
    CatalogUnavailable,
    load_entries,
    load_static_catalog,
    read_entries,
)
from .models import Card, CardSet
from .selectors import search_cards
from .serializers import (
    CardQuerySerializer,
    CardSerializer,
    CardSetCreateSerializer,
    CardSetSerializer,
    InitializeSerializer,
)

logger = structlog.get_logger()


@api_view(["POST"])
def initialize_catalog(request):
    s = InitializeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    file_name = s.validated_data.get("file")
    try:
        if file_name:
            # only files shipped in the catalog data directory
            entries = read_entries(DATA_DIR / Path(file_name).name)
            load_entries(entries, set_id=s.validated_data.get("set_id"))
            loaded = {s.validated_data.get("set_id") or "file": len(entries)}
        else:
            loaded = load_static_catalog()
    except CatalogUnavailable as e:
        logger.error("catalog_unavailable", error=str(e))
        return Response({"error": str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    return Response(
        {"message": "Catalog initialized", "loaded": loaded},
        status=status.HTTP_200_OK,
    )


class CardSetViewSet(
    mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet
):
    """
    Static and custom sets. Creating a set may copy existing cards into it;
    only custom sets can be deleted, and their cards go with them.
    """

    queryset = CardSet.objects.all()
    serializer_class = CardSetSerializer

    def create(self, request):
        s = CardSetCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        with transaction.atomic():
            card_set = CardSet.objects.create(
                id=str(uuid.uuid4()), title=s.validated_data["title"], is_custom=True
            )
            sources = Card.objects.filter(id__in=s.validated_data["card_ids"])
            Card.objects.bulk_create(
                [
                    Card(
                        id=str(uuid.uuid4()),
                        card_set=card_set,
                        term=src.term,
                        readings=src.readings,
                        meanings=src.meanings,
                        examples=src.examples,
                    )
                    for src in sources
                ]
            )

        logger.info("card_set_created", set_id=card_set.id, card_count=card_set.cards.count())
        return Response(CardSetSerializer(card_set).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        card_set = self.get_object()
        if not card_set.is_custom:
            raise ValidationError({"error": "Static sets cannot be deleted"})
        card_set.delete()
        logger.info("card_set_deleted", set_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CardViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Card.objects.all()
    serializer_class = CardSerializer

    def list(self, request):
        qs = CardQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        cards = search_cards(qs.validated_data.get("sets"), qs.validated_data.get("q"))
        return Response(CardSerializer(cards, many=True).data)

    def perform_create(self, serializer):
        card_id = serializer.validated_data.pop("id", None) or str(uuid.uuid4())
        if Card.objects.filter(id=card_id).exists():
            raise ValidationError({"id": "A card with this id already exists"})
        card = serializer.save(id=card_id)
        logger.info("card_created", card_id=card.id, set_id=card.card_set_id)

    def perform_destroy(self, instance):
        if not instance.card_set.is_custom:
            raise ValidationError({"error": "Static cards cannot be deleted"})
        # progress for the card is kept; the scheduler tracks items by id only
        logger.info("card_deleted", card_id=instance.id)
        instance.delete()
