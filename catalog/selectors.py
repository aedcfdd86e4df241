from .models import Card


def card_pool(set_ids=None):
    """Cards in the given sets, or the whole catalog when no set is named."""
    qs = Card.objects.all()
    if set_ids:
        qs = qs.filter(card_set_id__in=list(set_ids))
    return list(qs)


def matches(card, query):
    lower = query.lower()
    return (
        query in card.term
        or any(lower in m.lower() for m in card.meanings)
        or any(query in r for r in card.readings)
    )


def search_cards(set_ids=None, query=None):
    cards = card_pool(set_ids)
    if not query:
        return cards
    # meanings/readings are JSON lists, so match in Python
    return [card for card in cards if matches(card, query)]
