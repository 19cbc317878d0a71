"""Unit tests for catalog domain entities"""

from decimal import Decimal
from src.domain.catalog import CatalogEntry, Offer


def make_entry(**overrides):
    data = {
        "main_category_id": 1,
        "main_category": "voice_sms",
        "sub_category_id": 2,
        "sub_category": "tubitayeho",
        "period_id": 3,
        "period": "day",
        "offer_id": 4,
        "quantity": Decimal("200"),
        "price": Decimal("180"),
    }
    data.update(overrides)
    return CatalogEntry(**data)


class TestCatalogEntry:

    def test_label(self):
        assert make_entry().label == "voice_sms > tubitayeho > day"

    def test_group_key_is_id_triple(self):
        assert make_entry().group_key == (1, 2, 3)

    def test_same_names_different_ids_have_different_keys(self):
        first = make_entry()
        second = make_entry(sub_category_id=9, period_id=10)

        assert first.label == second.label
        assert first.group_key != second.group_key


class TestOffer:

    def test_create_offer(self):
        offer = Offer(quantity=Decimal("500"), price=Decimal("400"), period_id=1)

        assert offer.id is None
        assert offer.quantity == Decimal("500")
        assert offer.price == Decimal("400")
