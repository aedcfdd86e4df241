from rest_framework import serializers

from .models import Card, CardSet


class CardSerializer(serializers.ModelSerializer):
    id = serializers.CharField(max_length=64, required=False)
    set_id = serializers.PrimaryKeyRelatedField(
        source="card_set", queryset=CardSet.objects.filter(is_custom=True)
    )
    readings = serializers.ListField(child=serializers.CharField(), default=list)
    meanings = serializers.ListField(child=serializers.CharField(), min_length=1)
    examples = serializers.ListField(
        child=serializers.DictField(child=serializers.CharField()), default=list
    )

    class Meta:
        model = Card
        fields = ["id", "set_id", "term", "readings", "meanings", "examples"]


class CardSetSerializer(serializers.ModelSerializer):
    card_count = serializers.SerializerMethodField()

    class Meta:
        model = CardSet
        fields = ["id", "title", "is_custom", "card_count"]

    def get_card_count(self, obj):
        return obj.cards.count()


class CardSetCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    card_ids = serializers.ListField(child=serializers.CharField(), default=list)


class InitializeSerializer(serializers.Serializer):
    file = serializers.CharField(required=False)
    set_id = serializers.CharField(required=False)


class CardQuerySerializer(serializers.Serializer):
    sets = serializers.CharField(required=False)  # comma separated
    q = serializers.CharField(required=False)

    def validate_sets(self, value):
        return [s for s in value.split(",") if s]
