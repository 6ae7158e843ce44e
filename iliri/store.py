"""
Inventory Ledger Store.

Hält alle Stammdaten und Bewegungen im Speicher und wendet die Kaskaden an,
die ein Einkauf, ein Verkauf oder eine Löschung auslöst:

- Einkauf: Bestand += Menge, Einstandspreis = letzter Einkaufspreis
- Verkauf: Bestand -= Menge (nie unter 0), letzter Preis pro Kunde/Artikel
- Verkauf löschen: die abgebuchte Menge wird zurückgebucht, Zahlungen bleiben als Historie
- Zahlung: Summe aus dem Zahlungsjournal ist maßgeblich für paid/paid_amount

Der Store prüft keine Eingaben (das machen Router und Schemas vorher).
Einzige Ausnahme ist die Überzahlung, die hier abgewiesen wird.
Fehlende Referenzen in Kaskaden werden übersprungen und nur geloggt.
"""
import functools
import logging
import threading
from uuid import UUID
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request

from iliri.config import settings
from iliri.exceptions import NotFoundError, InvalidPaymentError, PaymentExceedsBalanceError
from iliri.models import (
    Article, Supplier, Client, Purchase, Sale, Payment, ClientArticlePrice,
    Notification, NotificationType, PriceType, DashboardAnalytics, TopProduct, ActiveClient,
)
from iliri.services.analytics_service import compute_dashboard, effective_paid_amount
from iliri.services.code_service import generate_unique_code

logger = logging.getLogger("iliri.store")

def _find(collection: list, id: UUID):
    return next((entry for entry in collection if entry.id == id), None)


def _patch(entity, changes: dict):
    for field, value in changes.items():
        setattr(entity, field, value)
    return entity


def _locked(method):
    """Hält den Store-Lock für die Dauer des Aufrufs"""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class LedgerStore:

    def __init__(
        self,
        top_limit: Optional[int] = None,
        code_length: Optional[int] = None,
        code_max_attempts: Optional[int] = None,
        inventory_value_active_only: Optional[bool] = None,
    ):
        self.top_limit = top_limit if top_limit is not None else settings.top_limit
        self.code_length = code_length if code_length is not None else settings.code_length
        self.code_max_attempts = code_max_attempts if code_max_attempts is not None else settings.code_max_attempts
        self.inventory_value_active_only = (
            inventory_value_active_only
            if inventory_value_active_only is not None
            else settings.inventory_value_active_only
        )

        # reentrant: record_sale bucht die Anzahlung über record_payment
        self._lock = threading.RLock()

        self.articles: list[Article] = []
        self.suppliers: list[Supplier] = []
        self.clients: list[Client] = []
        self.purchases: list[Purchase] = []
        self.sales: list[Sale] = []
        self.payments: list[Payment] = []
        self.notifications: list[Notification] = []
        self.client_article_prices: list[ClientArticlePrice] = []

        # höchste je vergebene Nummer, damit gelöschte Nummern nicht wieder auftauchen
        self._last_purchase_number = 0
        self._last_sale_number = 0

        self.analytics: Optional[DashboardAnalytics] = None
        self.top_products: list[TopProduct] = []
        self.active_clients: list[ActiveClient] = []

    # ============ ARTIKEL ============

    @_locked
    def add_article(self, article: Article) -> Article:
        self.articles.append(article)
        logger.info(f"Artikel angelegt: {article.code1} ({article.name})")
        return article

    def get_article(self, id: UUID) -> Optional[Article]:
        return _find(self.articles, id)

    def find_article_by_code(self, code: str) -> Optional[Article]:
        return next((a for a in self.articles if a.code1 == code), None)

    @_locked
    def update_article(self, id: UUID, **changes) -> Optional[Article]:
        article = self.get_article(id)
        if not article:
            logger.warning(f"Artikel {id} nicht gefunden, Update übersprungen")
            return None
        return _patch(article, changes)

    @_locked
    def soft_delete_article(self, id: UUID) -> Optional[Article]:
        article = self.update_article(id, deleted=True)
        if article:
            logger.info(f"Artikel {article.code1} als gelöscht markiert")
        return article

    def filter_articles(self, view: str = "Active", search: Optional[str] = None) -> list[Article]:
        if view == "Active":
            result = [a for a in self.articles if a.is_selectable]
        elif view == "Deleted":
            result = [a for a in self.articles if a.deleted]
        else:
            result = list(self.articles)

        if search and search.strip():
            needle = search.strip().lower()
            result = [a for a in result if needle in a.name.lower()]
        return result

    def search_articles(self, term: str, by: str = "code", limit: int = 10) -> list[Article]:
        """Vorschläge für die Artikelauswahl, nur aktive und nicht gelöschte"""
        if not term or not term.strip():
            return []
        needle = term.strip().lower()
        result = []
        for article in self.articles:
            if not article.is_selectable:
                continue
            if by == "code":
                hit = needle in article.code1.lower() or (article.code2 and needle in article.code2.lower())
            else:
                hit = needle in article.name.lower()
            if hit:
                result.append(article)
        return result[:limit]

    # ============ LIEFERANTEN ============

    @_locked
    def add_supplier(self, supplier: Supplier) -> Supplier:
        self.suppliers.append(supplier)
        logger.info(f"Lieferant angelegt: {supplier.code} ({supplier.name})")
        return supplier

    def get_supplier(self, id: UUID) -> Optional[Supplier]:
        return _find(self.suppliers, id)

    @_locked
    def update_supplier(self, id: UUID, **changes) -> Optional[Supplier]:
        supplier = self.get_supplier(id)
        if not supplier:
            logger.warning(f"Lieferant {id} nicht gefunden, Update übersprungen")
            return None
        return _patch(supplier, changes)

    @_locked
    def delete_supplier(self, id: UUID) -> bool:
        supplier = self.get_supplier(id)
        if not supplier:
            return False
        self.suppliers.remove(supplier)
        logger.info(f"Lieferant {supplier.code} gelöscht")
        return True

    @_locked
    def new_supplier_code(self) -> str:
        return generate_unique_code(
            (s.code for s in self.suppliers), self.code_length, self.code_max_attempts
        )

    # ============ KUNDEN ============

    @_locked
    def add_client(self, client: Client) -> Client:
        self.clients.append(client)
        logger.info(f"Kunde angelegt: {client.code} ({client.name})")
        return client

    def get_client(self, id: UUID) -> Optional[Client]:
        return _find(self.clients, id)

    @_locked
    def update_client(self, id: UUID, **changes) -> Optional[Client]:
        client = self.get_client(id)
        if not client:
            logger.warning(f"Kunde {id} nicht gefunden, Update übersprungen")
            return None
        return _patch(client, changes)

    @_locked
    def delete_client(self, id: UUID) -> bool:
        client = self.get_client(id)
        if not client:
            return False
        self.clients.remove(client)
        logger.info(f"Kunde {client.code} gelöscht")
        return True

    @_locked
    def new_client_code(self) -> str:
        return generate_unique_code(
            (c.code for c in self.clients), self.code_length, self.code_max_attempts
        )

    # ============ EINKAUF ============

    def next_purchase_number(self) -> int:
        # max + 1, nicht Anzahl: Lücken nach Löschungen werden nie wiederverwendet
        return max(max((p.number for p in self.purchases), default=0), self._last_purchase_number) + 1

    def get_purchase(self, id: UUID) -> Optional[Purchase]:
        return _find(self.purchases, id)

    @_locked
    def record_purchase(self, purchase: Purchase) -> Purchase:
        purchase.number = self.next_purchase_number()
        self._last_purchase_number = purchase.number
        self.purchases.append(purchase)

        for item in purchase.items:
            article = self.get_article(item.article_id)
            if not article:
                logger.warning(f"Einkauf #{purchase.number}: Artikel {item.article_id} nicht gefunden")
                continue
            article.current_stock += item.quantity
            article.cost = item.unit_cost

        logger.info(f"Einkauf #{purchase.number} bei {purchase.supplier_name} gebucht ({purchase.total:.2f})")
        return purchase

    @_locked
    def delete_purchase(self, id: UUID) -> bool:
        purchase = self.get_purchase(id)
        if not purchase:
            return False
        self.purchases.remove(purchase)
        logger.info(f"Einkauf #{purchase.number} gelöscht, Bestand bleibt unverändert")
        return True

    def filter_purchases(
        self,
        supplier_id: Optional[UUID] = None,
        username: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Purchase]:
        result = sorted(self.purchases, key=lambda p: p.date, reverse=True)
        if supplier_id:
            result = [p for p in result if p.supplier_id == supplier_id]
        if username:
            result = [p for p in result if p.username == username]
        if search and search.strip():
            needle = search.strip().lower()
            result = [
                p for p in result
                if needle in p.supplier_name.lower() or needle in p.date.strftime("%d/%m/%Y")
            ]
        return result

    # ============ VERKAUF ============

    def next_sale_number(self) -> int:
        return max(max((s.number for s in self.sales), default=0), self._last_sale_number) + 1

    def get_sale(self, id: UUID) -> Optional[Sale]:
        return _find(self.sales, id)

    @_locked
    def record_sale(self, sale: Sale, initial_payment: Optional[float] = None) -> Sale:
        """
        Bucht einen Verkauf inkl. Kaskade.

        Ein mitgelieferter paid/paid_amount-Wert wird nicht übernommen, sondern
        als erste Zahlung ins Journal geschrieben.
        """
        if initial_payment is None:
            initial_payment = sale.paid_amount or (sale.total if sale.paid else 0)
        initial_payment = round(initial_payment, 2)
        if initial_payment < 0:
            raise InvalidPaymentError("Anzahlung darf nicht negativ sein", field="paid_amount")
        if initial_payment > round(sale.total, 2):
            raise PaymentExceedsBalanceError("Anzahlung übersteigt den Gesamtbetrag", field="paid_amount")

        sale.number = self.next_sale_number()
        self._last_sale_number = sale.number
        # Summe 0 ist ohne Zahlung beglichen
        sale.paid = round(sale.total, 2) <= 0
        sale.paid_amount = None
        self.sales.append(sale)

        known_client = self.get_client(sale.client_id) is not None
        for item in sale.items:
            article = self.get_article(item.article_id)
            if article:
                item.deducted = max(0, min(item.quantity, article.current_stock))
                article.current_stock -= item.deducted
            else:
                logger.warning(f"Verkauf #{sale.number}: Artikel {item.article_id} nicht gefunden")
            if known_client:
                self.update_last_used_price(sale.client_id, item.article_id, item.unit_price, item.price_type)

        logger.info(f"Verkauf #{sale.number} an {sale.client_name} gebucht ({sale.total:.2f})")

        if initial_payment > 0:
            self.record_payment(sale.id, initial_payment, timestamp=sale.date)
        return sale

    @_locked
    def delete_sale(self, id: UUID) -> bool:
        sale = self.get_sale(id)
        if not sale:
            return False

        for item in sale.items:
            article = self.get_article(item.article_id)
            if not article:
                logger.warning(f"Verkauf #{sale.number} löschen: Artikel {item.article_id} nicht gefunden")
                continue
            article.current_stock += item.deducted

        self.sales.remove(sale)
        orphaned = sum(1 for p in self.payments if p.sale_id == sale.id)
        logger.info(f"Verkauf #{sale.number} gelöscht, {orphaned} Zahlung(en) bleiben in der Historie")
        return True

    def filter_sales(
        self,
        client_id: Optional[UUID] = None,
        username: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Sale]:
        result = sorted(self.sales, key=lambda s: s.date, reverse=True)
        if client_id:
            result = [s for s in result if s.client_id == client_id]
        if username:
            result = [s for s in result if s.username == username]
        if search and search.strip():
            needle = search.strip().lower()
            result = [
                s for s in result
                if needle in s.client_name.lower()
                or (s.client_reference and needle in s.client_reference.lower())
                or needle in s.date.strftime("%d/%m/%Y")
            ]
        return result

    # ============ ZAHLUNGEN ============

    def paid_amount(self, sale: Sale) -> float:
        return round(effective_paid_amount(sale, self.payments), 2)

    def remaining_balance(self, sale: Sale) -> float:
        return round(sale.total - self.paid_amount(sale), 2)

    def payments_for_sale(self, sale_id: UUID) -> list[Payment]:
        return sorted(
            (p for p in self.payments if p.sale_id == sale_id),
            key=lambda p: p.timestamp,
            reverse=True,
        )

    @_locked
    def record_payment(self, sale_id: UUID, amount: float, timestamp: Optional[datetime] = None) -> Payment:
        sale = self.get_sale(sale_id)
        if not sale:
            raise NotFoundError("Verkauf nicht gefunden")
        amount = round(amount, 2)
        if amount <= 0:
            raise InvalidPaymentError("Betrag muss größer als 0 sein", field="amount")
        if sale.paid:
            raise InvalidPaymentError("Verkauf ist bereits bezahlt", field="amount")

        remaining = self.remaining_balance(sale)
        if amount > remaining:
            logger.warning(f"Zahlung {amount:.2f} für Verkauf #{sale.number} abgewiesen, offen: {remaining:.2f}")
            raise PaymentExceedsBalanceError(
                f"Betrag übersteigt den offenen Restbetrag ({remaining:.2f})", field="amount"
            )

        payment = Payment(
            sale_id=sale.id,
            amount=amount,
            timestamp=timestamp or datetime.now(timezone.utc),
        )
        self.payments.append(payment)

        sale.paid_amount = self.paid_amount(sale)
        sale.paid = sale.paid_amount >= round(sale.total, 2)
        logger.info(f"Zahlung {amount:.2f} für Verkauf #{sale.number} erfasst ({sale.paid_amount:.2f}/{sale.total:.2f})")
        return payment

    @_locked
    def settle_sale(self, sale_id: UUID) -> Payment:
        """Bucht den offenen Restbetrag als Zahlung"""
        sale = self.get_sale(sale_id)
        if not sale:
            raise NotFoundError("Verkauf nicht gefunden")
        return self.record_payment(sale_id, self.remaining_balance(sale))

    # ============ LETZTE PREISE ============

    def get_last_used_price(self, client_id: UUID, article_id: UUID) -> Optional[ClientArticlePrice]:
        return next(
            (p for p in self.client_article_prices if p.client_id == client_id and p.article_id == article_id),
            None,
        )

    @_locked
    def update_last_used_price(
        self, client_id: UUID, article_id: UUID, price: float, price_type: PriceType
    ) -> ClientArticlePrice:
        now = datetime.now(timezone.utc)
        existing = self.get_last_used_price(client_id, article_id)
        if existing:
            return _patch(existing, {"last_price": price, "price_type": price_type, "last_used_at": now})

        entry = ClientArticlePrice(
            client_id=client_id,
            article_id=article_id,
            last_price=price,
            price_type=price_type,
            last_used_at=now,
        )
        self.client_article_prices.append(entry)
        return entry

    # ============ BENACHRICHTIGUNGEN ============

    @_locked
    def add_notification(self, type: NotificationType, description: str) -> Notification:
        notification = Notification(type=type, description=description)
        self.notifications.insert(0, notification)
        return notification

    @_locked
    def notify_low_stock(self, article: Article) -> Optional[Notification]:
        # Kein Dedup: jedes Speichern unter Mindestbestand erzeugt eine neue Meldung
        if not article.is_low_stock:
            return None
        logger.info(f"Mindestbestand erreicht: {article.code1}")
        return self.add_notification(
            NotificationType.LOW_STOCK,
            f"Artikel {article.name} hat den Mindestbestand erreicht",
        )

    def get_notification(self, id: UUID) -> Optional[Notification]:
        return _find(self.notifications, id)

    @_locked
    def mark_notification_read(self, id: UUID) -> Optional[Notification]:
        notification = self.get_notification(id)
        if notification:
            notification.read = True
        return notification

    @_locked
    def mark_all_notifications_read(self) -> int:
        unread = [n for n in self.notifications if not n.read]
        for notification in unread:
            notification.read = True
        return len(unread)

    def unread_notifications_count(self) -> int:
        return sum(1 for n in self.notifications if not n.read)

    # ============ DASHBOARD ============

    @_locked
    def refresh_analytics(self, active_only: Optional[bool] = None) -> DashboardAnalytics:
        if active_only is None:
            active_only = self.inventory_value_active_only
        self.analytics, self.top_products, self.active_clients = compute_dashboard(
            self.sales,
            self.articles,
            self.payments,
            limit=self.top_limit,
            active_only=active_only,
        )
        logger.debug(f"Kennzahlen neu berechnet: {self.analytics}")
        return self.analytics


def get_store(request: Request) -> LedgerStore:
    return request.app.state.store
