"""
Aufbau eines Verkaufs aus der Anfrage.

Preisermittlung pro Position (erste passende Regel gewinnt):
1. expliziter Einzelpreis -> Preisstufe wird dazu ermittelt (sonst Custom)
2. explizite Preisstufe
3. zuletzt verwendeter Preis für diesen Kunden und Artikel
4. Preis 1
"""
from typing import Optional

from iliri.exceptions import NotFoundError, ValidationFailed
from iliri.models import Article, Sale, SaleItem, PriceType
from iliri.schemas.sale import SaleCreate, SaleItemCreate
from iliri.services.purchase_service import as_utc
from iliri.store import LedgerStore


def resolve_unit_price(article: Article, price_type: PriceType) -> Optional[float]:
    if price_type == PriceType.PRICE_1:
        return article.price1
    if price_type == PriceType.PRICE_2:
        return article.price2 or article.price1
    if price_type == PriceType.PRICE_3:
        return article.price3 or article.price1
    return None


def classify_price(article: Article, unit_price: float) -> PriceType:
    tiers = [
        (PriceType.PRICE_1, article.price1),
        (PriceType.PRICE_2, article.price2),
        (PriceType.PRICE_3, article.price3),
    ]
    for price_type, price in tiers:
        if price is not None and price == unit_price:
            return price_type
    return PriceType.CUSTOM


def _price_line(store: LedgerStore, client_id, article: Article, item: SaleItemCreate) -> tuple[PriceType, Optional[float]]:
    if item.unit_price is not None:
        if item.price_type == PriceType.CUSTOM:
            return PriceType.CUSTOM, item.unit_price
        return classify_price(article, item.unit_price), item.unit_price

    if item.price_type is not None:
        return item.price_type, resolve_unit_price(article, item.price_type)

    last = store.get_last_used_price(client_id, article.id)
    if last:
        return last.price_type, last.last_price

    return PriceType.PRICE_1, article.price1


def build_sale(store: LedgerStore, payload: SaleCreate, username: str) -> tuple[Sale, float]:
    """Liefert den Verkauf und die zu buchende Anzahlung"""
    client = store.get_client(payload.client_id)
    if not client:
        raise NotFoundError("Kunde nicht gefunden", field="client_id")

    items = []
    for index, item in enumerate(payload.items):
        article = store.get_article(item.article_id)
        if not article or not article.is_selectable:
            raise ValidationFailed("Artikel muss ausgewählt werden", field=f"items.{index}.article_id")

        price_type, unit_price = _price_line(store, client.id, article, item)
        if not unit_price or unit_price <= 0:
            raise ValidationFailed("Einzelpreis muss positiv sein", field=f"items.{index}.unit_price")

        items.append(SaleItem(
            article_id=article.id,
            article_code=article.code1,
            article_name=article.name,
            price_type=price_type,
            unit_price=unit_price,
            quantity=item.quantity,
            total=round(unit_price * item.quantity, 2),
            cost=article.cost,
        ))

    total = round(sum(i.total for i in items), 2)
    if total <= 0:
        raise ValidationFailed("Gesamtbetrag muss positiv sein", field="items")
    sale = Sale(
        client_id=client.id,
        client_name=client.name,
        client_reference=payload.client_reference or None,
        username=username,
        price_type=items[0].price_type,
        unit_price=items[0].unit_price,
        total=total,
        items=items,
    )
    if payload.date:
        sale.date = as_utc(payload.date)

    initial_payment = total if payload.paid else (payload.paid_amount or 0)
    if initial_payment > total:
        raise ValidationFailed("Anzahlung übersteigt den Gesamtbetrag", field="paid_amount")
    return sale, initial_payment


def create_sale(store: LedgerStore, payload: SaleCreate, username: str) -> Sale:
    sale, initial_payment = build_sale(store, payload, username)
    return store.record_sale(sale, initial_payment=initial_payment)
