"""Service tests for catalog lookups and reference data."""

import pytest
from uuid import uuid4

from apps.catalog.models import Country, FlowerType
from apps.catalog.services import (
    ProductNotFoundError,
    get_product,
    get_products_by_ids,
    seed_countries,
    seed_flower_types,
    DEFAULT_COUNTRIES,
)
from apps.common.exceptions import NotFoundError


@pytest.mark.django_db
class TestProductLookup:

    def test_get_product(self, rose):
        assert get_product(product_id=rose.id) == rose

    def test_get_product_accepts_string_id(self, rose):
        assert get_product(product_id=str(rose.id)) == rose

    def test_get_product_missing(self):
        with pytest.raises(ProductNotFoundError):
            get_product(product_id=uuid4())

    def test_get_product_malformed_id(self):
        with pytest.raises(NotFoundError):
            get_product(product_id='not-a-uuid')

    def test_get_products_by_ids(self, rose, usd_rose):
        missing = uuid4()
        found = get_products_by_ids([rose.id, usd_rose.id, rose.id, missing, 'garbage'])

        assert found == {str(rose.id): rose, str(usd_rose.id): usd_rose}

    def test_has_price(self, make_product):
        assert make_product(price_uah=1).has_price
        assert make_product(price_usd=1).has_price
        assert not make_product().has_price


@pytest.mark.django_db
class TestCatalogSeeding:

    def test_seed_countries(self):
        created = seed_countries()

        assert created == len(DEFAULT_COUNTRIES)
        kenya = Country.objects.get(code='KE')
        assert kenya.name == 'Kenya'
        assert kenya.flag == 'KE'

    def test_seed_countries_skips_existing(self, kenya):
        created = seed_countries()

        assert created == len(DEFAULT_COUNTRIES) - 1
        assert Country.objects.filter(code='KE').count() == 1

    def test_seed_flower_types_is_repeatable(self):
        seed_flower_types()
        count = FlowerType.objects.count()

        assert seed_flower_types() == 0
        assert FlowerType.objects.count() == count
