"""Tests for the catalog store."""

from decimal import Decimal

from storefront.database.products import INITIAL_ITEMS, CatalogStore


def _ids(items):
    return [item.id for item in items]


class TestSearch:
    def test_no_filters_returns_everything_in_order(self):
        catalog = CatalogStore()
        assert _ids(catalog.search_items()) == ["p1", "p2", "p3", "p4"]

    def test_query_matches_name_case_insensitively(self):
        assert _ids(CatalogStore().search_items(query="MONSTERA")) == ["p1"]

    def test_query_matches_subtitle(self):
        # "Rooted cutting" and "Cutting · Variegated"
        assert _ids(CatalogStore().search_items(query="cutting")) == ["p2", "p3"]

    def test_query_matches_tags(self):
        assert _ids(CatalogStore().search_items(query="giftable")) == ["p2"]

    def test_category_filter(self):
        assert _ids(CatalogStore().search_items(category="Aroids")) == ["p1", "p3"]

    def test_filters_compose(self):
        catalog = CatalogStore()
        assert _ids(catalog.search_items(category="Aroids", type="Cutting")) == ["p3"]
        assert _ids(catalog.search_items(query="monstera", type="Cutting")) == []

    def test_all_and_none_disable_facets(self):
        catalog = CatalogStore()
        assert _ids(catalog.search_items(category="All", type="All")) == ["p1", "p2", "p3", "p4"]
        assert _ids(catalog.search_items(category=None, type=None)) == ["p1", "p2", "p3", "p4"]

    def test_unknown_category_matches_nothing(self):
        assert CatalogStore().search_items(category="Cacti") == []

    def test_search_does_not_mutate_catalog(self):
        catalog = CatalogStore()
        catalog.search_items(query="hoya", category="Hoyas")
        assert len(catalog.get_all_items()) == 4

    def test_out_of_stock_items_stay_visible(self, make_item):
        catalog = CatalogStore([make_item("a", stock=0), make_item("b")])
        assert _ids(catalog.search_items()) == ["a", "b"]


class TestFacets:
    def test_categories(self):
        assert CatalogStore().categories() == ["All", "Alocasia", "Aroids", "Hoyas"]

    def test_types(self):
        assert CatalogStore().types() == ["All", "Corms", "Cutting", "Medium plant", "Starter plant"]

    def test_empty_catalog(self):
        assert CatalogStore([]).categories() == ["All"]


class TestStock:
    def test_update_stock(self):
        catalog = CatalogStore()
        assert catalog.update_stock("p1", -2)
        assert catalog.get_item("p1").stock == 10

    def test_update_stock_refuses_negative(self):
        catalog = CatalogStore()
        assert not catalog.update_stock("p3", -7)
        assert catalog.get_item("p3").stock == 6

    def test_update_unknown_item(self):
        assert not CatalogStore().update_stock("nope", 1)

    def test_set_stock(self):
        catalog = CatalogStore()
        assert catalog.set_stock("p2", 0)
        assert not catalog.get_item("p2").is_available
        assert not catalog.set_stock("p2", -1)

    def test_seed_items_are_not_shared(self):
        catalog = CatalogStore()
        catalog.set_stock("p1", 0)
        assert INITIAL_ITEMS[0].stock == 12


class TestItemFlags:
    def test_on_sale(self):
        catalog = CatalogStore()
        assert catalog.get_item("p1").on_sale
        assert not catalog.get_item("p2").on_sale

    def test_low_stock(self, make_item):
        assert make_item(stock=5).is_low_stock
        assert not make_item(stock=6).is_low_stock
        assert not make_item(stock=0).is_low_stock

    def test_payment_link(self, make_item):
        assert not make_item(payment_link="").has_payment_link
        assert not make_item(payment_link=None).has_payment_link
        assert make_item(payment_link="https://pay.example/a").has_payment_link

    def test_seed_prices(self):
        catalog = CatalogStore()
        assert catalog.get_item("p1").price == Decimal("38")
        assert catalog.get_item("p4").price == Decimal("12")
