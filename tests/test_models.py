"""Tests for unifi_monitor/models.py"""

import pytest

from unifi_monitor.models import Product

from tests.conftest import make_product_dict


class TestFromDict:
    def test_reads_storefront_fields(self):
        p = Product.from_dict(make_product_dict("A"))
        assert p.id == "A"
        assert p.title == "Product A"
        assert p.short_description == "Short A"
        assert p.slug == "product-a"
        assert p.thumbnail_url == "https://cdn.example.com/A.png"
        assert p.variants[0].id == "A-1"
        assert p.variants[0].display_price.amount == 9900

    def test_missing_id_raises(self):
        with pytest.raises(ValueError):
            Product.from_dict({"title": "nameless"})

    def test_numeric_id_is_stringified(self):
        assert Product.from_dict({"id": 42}).id == "42"

    def test_keeps_raw_payload(self):
        data = make_product_dict("A", collectionSlug="switching", isNew=True)
        p = Product.from_dict(data)
        assert p.payload()["collectionSlug"] == "switching"
        assert p.payload()["isNew"] is True


class TestToDict:
    def test_defaults_missing_thumbnail_and_currency(self):
        p = Product.from_dict({
            "id": "A",
            "variants": [{"id": "v1", "displayPrice": {"amount": 100}}],
        })
        out = p.to_dict()
        assert out["thumbnail"] == {"url": ""}
        assert out["variants"] == [{"id": "v1", "displayPrice": {"amount": 100, "currency": "USD"}}]

    def test_missing_amount_passes_through_as_none(self):
        p = Product.from_dict({"id": "A", "variants": [{"id": "v1"}]})
        assert p.to_dict()["variants"][0]["displayPrice"] == {"amount": None, "currency": "USD"}

    def test_empty_variants_stay_a_list(self):
        assert Product.from_dict({"id": "A", "variants": []}).to_dict()["variants"] == []
        assert Product.from_dict({"id": "A", "variants": None}).to_dict()["variants"] == []
        assert Product.from_dict({"id": "A"}).to_dict()["variants"] == []

    def test_drops_unknown_fields(self):
        p = Product.from_dict(make_product_dict("A", collectionSlug="switching"))
        assert set(p.to_dict()) == {"id", "title", "shortDescription", "slug", "thumbnail", "variants"}
