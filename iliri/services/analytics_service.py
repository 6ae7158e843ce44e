"""
Kennzahlen für das Dashboard.

Reine Funktionen über den Sammlungen des Stores: gleiche Eingaben liefern
immer die gleichen Ergebnisse, es wird nichts verändert.
"""
from uuid import UUID
from typing import Optional

from iliri.models import Article, Sale, Payment, DashboardAnalytics, TopProduct, ActiveClient


def effective_paid_amount(sale: Sale, payments: list[Payment]) -> float:
    # Sobald es Zahlungen gibt, ist das Journal maßgeblich
    ledger = [p.amount for p in payments if p.sale_id == sale.id]
    if ledger:
        return sum(ledger)
    return sale.paid_amount or 0


def _cost_of_goods_sold(sales: list[Sale], articles_by_id: dict[UUID, Article]) -> float:
    cogs = 0.0
    for sale in sales:
        if not sale.paid:
            continue
        for item in sale.items:
            article = articles_by_id.get(item.article_id)
            # Gelöschter Stammsatz -> Einstandspreis aus der Position
            cost = article.cost if article else item.cost
            cogs += cost * item.quantity
    return cogs


def compute_analytics(
    sales: list[Sale],
    articles: list[Article],
    payments: list[Payment],
    active_only: bool = False,
) -> DashboardAnalytics:
    articles_by_id = {a.id: a for a in articles}

    total_sales = sum(1 for s in sales if s.paid)
    total_revenue = 0.0
    total_debt = 0.0
    for sale in sales:
        if sale.paid:
            total_revenue += sale.total
        else:
            paid = effective_paid_amount(sale, payments)
            total_revenue += paid
            total_debt += sale.total - paid

    total_profit = total_revenue - _cost_of_goods_sold(sales, articles_by_id)

    valued = articles
    if active_only:
        valued = [a for a in articles if a.is_selectable]
    inventory_value = sum(a.cost * a.current_stock for a in valued)

    return DashboardAnalytics(
        total_sales=total_sales,
        total_revenue=round(total_revenue, 2),
        total_profit=round(total_profit, 2),
        total_debt=round(total_debt, 2),
        inventory_value=round(inventory_value, 2),
    )


def compute_top_products(sales: list[Sale], limit: int = 10) -> list[TopProduct]:
    totals: dict[UUID, dict] = {}
    for sale in sales:
        for item in sale.items:
            entry = totals.setdefault(item.article_id, {"name": item.article_name, "quantity": 0.0})
            entry["quantity"] += item.quantity

    ranked = sorted(totals.items(), key=lambda kv: kv[1]["quantity"], reverse=True)
    return [
        TopProduct(article_id=article_id, article_name=data["name"], quantity_sold=data["quantity"])
        for article_id, data in ranked[:limit]
    ]


def compute_active_clients(sales: list[Sale], limit: int = 10) -> list[ActiveClient]:
    counts: dict[UUID, dict] = {}
    for sale in sales:
        entry = counts.setdefault(sale.client_id, {"name": sale.client_name, "count": 0})
        entry["count"] += 1

    ranked = sorted(counts.items(), key=lambda kv: kv[1]["count"], reverse=True)
    return [
        ActiveClient(client_id=client_id, client_name=data["name"], total_purchases=data["count"])
        for client_id, data in ranked[:limit]
    ]


def compute_dashboard(
    sales: list[Sale],
    articles: list[Article],
    payments: list[Payment],
    limit: int = 10,
    active_only: Optional[bool] = False,
) -> tuple[DashboardAnalytics, list[TopProduct], list[ActiveClient]]:
    return (
        compute_analytics(sales, articles, payments, active_only=bool(active_only)),
        compute_top_products(sales, limit),
        compute_active_clients(sales, limit),
    )
