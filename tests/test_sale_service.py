"""
Tests für den Aufbau von Verkäufen und Einkäufen aus Anfragen.

Testet:
- Preisstufen und Custom-Preise
- Vorbelegung mit dem zuletzt verwendeten Preis
- Anzahlung
- Snapshots im Einkauf
"""
import pytest
from uuid import uuid4

from iliri.exceptions import NotFoundError, ValidationFailed
from iliri.models import Article, PriceType
from iliri.schemas.sale import SaleCreate
from iliri.schemas.purchase import PurchaseCreate
from iliri.services.sale_service import resolve_unit_price, classify_price, build_sale, create_sale
from iliri.services.purchase_service import build_purchase, create_purchase


class TestPriceResolution:

    def test_tiers(self, stocked_article):
        assert resolve_unit_price(stocked_article, PriceType.PRICE_1) == 8
        assert resolve_unit_price(stocked_article, PriceType.PRICE_2) == 7.5
        assert resolve_unit_price(stocked_article, PriceType.PRICE_3) == 7
        assert resolve_unit_price(stocked_article, PriceType.CUSTOM) is None

    def test_missing_tier_falls_back_to_price1(self):
        article = Article(name="Brot", code1="B1", price1=2)
        assert resolve_unit_price(article, PriceType.PRICE_2) == 2
        assert resolve_unit_price(article, PriceType.PRICE_3) == 2

    def test_classify(self, stocked_article):
        assert classify_price(stocked_article, 7.5) == PriceType.PRICE_2
        assert classify_price(stocked_article, 6.99) == PriceType.CUSTOM


class TestBuildSale:

    def test_default_price1(self, store, customer, stocked_article):
        payload = SaleCreate(client_id=customer.id, items=[{"article_id": stocked_article.id, "quantity": 2}])
        sale, initial = build_sale(store, payload, "admin")

        assert sale.items[0].price_type == PriceType.PRICE_1
        assert sale.items[0].unit_price == 8
        assert sale.items[0].cost == 4
        assert sale.total == 16
        assert initial == 16
        assert sale.client_name == "Test Kunde"

    def test_header_from_first_line(self, store, customer, stocked_article, article):
        payload = SaleCreate(client_id=customer.id, items=[
            {"article_id": stocked_article.id, "quantity": 1, "price_type": "Price 3"},
            {"article_id": article.id, "quantity": 1},
        ])
        sale, _ = build_sale(store, payload, "admin")

        assert sale.price_type == PriceType.PRICE_3
        assert sale.unit_price == 7
        assert sale.total == 17

    def test_explicit_price_matching_tier(self, store, customer, stocked_article):
        payload = SaleCreate(client_id=customer.id, items=[
            {"article_id": stocked_article.id, "quantity": 1, "unit_price": 7.5}
        ])
        sale, _ = build_sale(store, payload, "admin")
        assert sale.items[0].price_type == PriceType.PRICE_2

    def test_explicit_custom_price(self, store, customer, stocked_article):
        payload = SaleCreate(client_id=customer.id, items=[
            {"article_id": stocked_article.id, "quantity": 4, "unit_price": 6.25}
        ])
        sale, _ = build_sale(store, payload, "admin")
        assert sale.items[0].price_type == PriceType.CUSTOM
        assert sale.total == 25

    def test_last_used_price_is_default(self, store, customer, stocked_article):
        first = SaleCreate(client_id=customer.id, items=[
            {"article_id": stocked_article.id, "quantity": 1, "unit_price": 6.5}
        ])
        create_sale(store, first, "admin")

        second = SaleCreate(client_id=customer.id, items=[{"article_id": stocked_article.id, "quantity": 1}])
        sale, _ = build_sale(store, second, "admin")
        assert sale.items[0].unit_price == 6.5
        assert sale.items[0].price_type == PriceType.CUSTOM

    def test_not_paid_with_deposit(self, store, customer, stocked_article):
        payload = SaleCreate(
            client_id=customer.id,
            items=[{"article_id": stocked_article.id, "quantity": 5}],
            paid=False,
            paid_amount=12,
        )
        sale = create_sale(store, payload, "admin")

        assert sale.paid is False
        assert sale.paid_amount == 12
        assert len(store.payments) == 1

    def test_deposit_above_total(self, store, customer, stocked_article):
        payload = SaleCreate(
            client_id=customer.id,
            items=[{"article_id": stocked_article.id, "quantity": 1}],
            paid=False,
            paid_amount=100,
        )
        with pytest.raises(ValidationFailed):
            build_sale(store, payload, "admin")

    def test_unknown_client(self, store, stocked_article):
        payload = SaleCreate(client_id=uuid4(), items=[{"article_id": stocked_article.id, "quantity": 1}])
        with pytest.raises(NotFoundError):
            build_sale(store, payload, "admin")

    def test_deleted_article_not_selectable(self, store, customer, stocked_article):
        store.soft_delete_article(stocked_article.id)
        payload = SaleCreate(client_id=customer.id, items=[{"article_id": stocked_article.id, "quantity": 1}])
        with pytest.raises(ValidationFailed) as exc:
            build_sale(store, payload, "admin")
        assert exc.value.field == "items.0.article_id"

    def test_zero_price_rejected(self, store, customer):
        free = store.add_article(Article(name="Gratis", code1="G1", price1=0, current_stock=3))
        payload = SaleCreate(client_id=customer.id, items=[{"article_id": free.id, "quantity": 1}])
        with pytest.raises(ValidationFailed):
            build_sale(store, payload, "admin")


    def test_total_rounding_to_zero_rejected(self, store, customer, stocked_article):
        payload = SaleCreate(client_id=customer.id, items=[
            {"article_id": stocked_article.id, "quantity": 1, "unit_price": 0.001}
        ])
        with pytest.raises(ValidationFailed) as exc:
            build_sale(store, payload, "admin")
        assert exc.value.field == "items"
        assert store.sales == []


class TestBuildPurchase:

    def test_snapshots_and_totals(self, store, supplier, stocked_article):
        payload = PurchaseCreate(supplier_id=supplier.id, items=[
            {"article_id": stocked_article.id, "quantity": 3, "unit_cost": 4.2}
        ])
        purchase = build_purchase(store, payload, "admin")

        assert purchase.supplier_name == "Test Großhandel"
        assert purchase.items[0].article_code == "OL-1"
        assert purchase.total == 12.6
        assert stocked_article.current_stock == 50

    def test_unit_cost_defaults_to_article_cost(self, store, supplier, stocked_article):
        payload = PurchaseCreate(supplier_id=supplier.id, items=[{"article_id": stocked_article.id, "quantity": 2}])
        purchase = create_purchase(store, payload, "admin")

        assert purchase.items[0].unit_cost == 4
        assert stocked_article.current_stock == 52

    def test_unit_cost_must_be_positive(self, store, supplier, article):
        article.cost = 0
        payload = PurchaseCreate(supplier_id=supplier.id, items=[{"article_id": article.id, "quantity": 2}])
        with pytest.raises(ValidationFailed):
            build_purchase(store, payload, "admin")

    def test_unknown_supplier(self, store, stocked_article):
        payload = PurchaseCreate(supplier_id=uuid4(), items=[{"article_id": stocked_article.id, "quantity": 1}])
        with pytest.raises(NotFoundError):
            build_purchase(store, payload, "admin")
