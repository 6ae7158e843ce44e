from uuid import UUID
from datetime import datetime, timezone

from iliri.exceptions import NotFoundError, ValidationFailed
from iliri.models import Article, Purchase, PurchaseItem
from iliri.schemas.purchase import PurchaseCreate
from iliri.store import LedgerStore


def as_utc(d: datetime) -> datetime:
    # naive Zeitangaben gelten als UTC
    return d if d.tzinfo else d.replace(tzinfo=timezone.utc)


def _get_selectable_article(store: LedgerStore, article_id: UUID, index: int) -> Article:
    article = store.get_article(article_id)
    if not article or not article.is_selectable:
        raise ValidationFailed("Artikel muss ausgewählt werden", field=f"items.{index}.article_id")
    return article


def build_purchase(store: LedgerStore, payload: PurchaseCreate, username: str) -> Purchase:
    """Baut einen Einkauf mit Snapshots von Lieferant und Artikeln"""
    supplier = store.get_supplier(payload.supplier_id)
    if not supplier:
        raise NotFoundError("Lieferant nicht gefunden", field="supplier_id")

    items = []
    for index, item in enumerate(payload.items):
        article = _get_selectable_article(store, item.article_id, index)
        unit_cost = item.unit_cost if item.unit_cost is not None else article.cost
        if unit_cost <= 0:
            raise ValidationFailed("Einstandspreis muss positiv sein", field=f"items.{index}.unit_cost")
        items.append(PurchaseItem(
            article_id=article.id,
            article_code=article.code1,
            article_name=article.name,
            unit_cost=unit_cost,
            quantity=item.quantity,
            total=round(unit_cost * item.quantity, 2),
        ))

    purchase = Purchase(
        supplier_id=supplier.id,
        supplier_name=supplier.name,
        username=username,
        total=round(sum(i.total for i in items), 2),
        items=items,
    )
    if payload.date:
        purchase.date = as_utc(payload.date)
    return purchase


def create_purchase(store: LedgerStore, payload: PurchaseCreate, username: str) -> Purchase:
    purchase = build_purchase(store, payload, username)
    return store.record_purchase(purchase)
