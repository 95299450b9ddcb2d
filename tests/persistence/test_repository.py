"""
Tests for bilemo/persistence/repository.py.
"""

import pytest

from bilemo.persistence.repository import (
    customer_user_repository,
    image_repository,
    product_repository,
)


class TestPagedRepository:
    """Page and count queries."""

    def test_pages_in_id_order(self, session, create_product):
        products = [create_product(str(1000 + n)) for n in range(5)]

        first = product_repository.find_page(session, 1, 2)
        last = product_repository.find_page(session, 3, 2)

        assert [p.id for p in first] == [products[0].id, products[1].id]
        assert [p.id for p in last] == [products[4].id]

    def test_page_past_the_end_is_empty(self, session, create_product):
        create_product("1000")

        assert product_repository.find_page(session, 2, 2) == []

    def test_count(self, session, create_product):
        create_product("1000", images=3)
        create_product("1001", images=2)

        assert product_repository.count(session) == 2
        assert image_repository.count(session) == 5

    def test_count_empty(self, session):
        assert product_repository.count(session) == 0

    def test_find(self, session, create_product):
        product = create_product("1000")

        assert product_repository.find(session, product.id).reference == "1000"
        assert product_repository.find(session, product.id + 1) is None

    @pytest.mark.parametrize("page,limit", [(0, 2), (1, 0), (-1, 5)])
    def test_invalid_bounds(self, session, page, limit):
        with pytest.raises(ValueError):
            product_repository.find_page(session, page, limit)


class TestCustomerScopedQueries:
    """Queries restricted to the rows of one customer."""

    def test_by_customer(self, session, create_customer, create_customer_user):
        first = create_customer(1)
        second = create_customer(2)
        for name in ("Martin", "Bernard", "Petit"):
            create_customer_user(first, name)
        create_customer_user(second, "Robert")

        page = customer_user_repository.find_page_by_customer(session, first.id, 1, 2)

        assert [cu.last_name for cu in page] == ["Martin", "Bernard"]
        assert customer_user_repository.count_by_customer(session, first.id) == 3
        assert customer_user_repository.count_by_customer(session, second.id) == 1

    def test_unowned_entity_refused(self, session):
        with pytest.raises(ValueError):
            product_repository.count_by_customer(session, 1)
