"""
Pytest Fixtures für Iliri.

Jeder Test bekommt einen frischen LedgerStore und eine eigene Sitzungsdatei,
die App wird über dependency_overrides darauf umgebogen.
"""
import pytest
from fastapi.testclient import TestClient

from iliri.main import app
from iliri.config import settings
from iliri.store import LedgerStore, get_store
from iliri.services.session_service import SessionStore, get_session
from iliri.models import Article, Supplier, Client, Purchase, PurchaseItem, Sale, SaleItem, PriceType


# ============ BASIS FIXTURES ============

@pytest.fixture(scope="function")
def store():
    """Leerer Store für jeden Test"""
    return LedgerStore(top_limit=10, code_length=8, code_max_attempts=100, inventory_value_active_only=False)


@pytest.fixture(scope="function")
def session(tmp_path):
    """Sitzung mit eigener Datei im tmp-Verzeichnis"""
    return SessionStore(path=str(tmp_path / "auth-storage.json"), key="auth-storage")


@pytest.fixture(scope="function")
def client(store, session):
    """
    FastAPI TestClient mit überschriebenem Store und Sitzung.
    """
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_session] = lambda: session

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def token(client):
    """Login als Standardbenutzer, gibt Token zurück"""
    response = client.post("/auth/login", json={
        "name": settings.login_name,
        "password": settings.login_password
    })
    assert response.status_code == 200, f"Login failed: {response.json()}"
    return response.json()["access_token"]


# ============ STAMMDATEN FIXTURES ============

@pytest.fixture
def article(store):
    """Artikel A1 ohne Bestand"""
    return store.add_article(Article(name="Wasser", code1="A1", cost=5, current_stock=0, price1=10))


@pytest.fixture
def stocked_article(store):
    """Artikel mit Bestand und drei Preisstufen"""
    return store.add_article(Article(
        name="Olivenöl",
        code1="OL-1",
        code2="5901234",
        cost=4,
        current_stock=50,
        price1=8,
        price2=7.5,
        price3=7,
        unit="L",
    ))


@pytest.fixture
def supplier(store):
    return store.add_supplier(Supplier(name="Test Großhandel", code="SUP00001", telephone="+355 69 123 4567"))


@pytest.fixture
def customer(store):
    return store.add_client(Client(name="Test Kunde", code="CLI00001", email="kunde@test.al"))


# ============ HELPER FUNKTIONEN ============

def auth_header(token: str) -> dict:
    """Erstellt Authorization Header"""
    return {"Authorization": f"Bearer {token}"}


def make_purchase(supplier: Supplier, lines: list[tuple[Article, float, float]]) -> Purchase:
    """lines: (Artikel, Menge, Einstandspreis)"""
    items = [
        PurchaseItem(
            article_id=a.id,
            article_code=a.code1,
            article_name=a.name,
            unit_cost=cost,
            quantity=qty,
            total=round(cost * qty, 2),
        )
        for a, qty, cost in lines
    ]
    return Purchase(
        supplier_id=supplier.id,
        supplier_name=supplier.name,
        username="admin",
        total=round(sum(i.total for i in items), 2),
        items=items,
    )


def make_sale(customer: Client, lines: list[tuple[Article, float, float]], price_type: PriceType = PriceType.PRICE_1) -> Sale:
    """lines: (Artikel, Menge, Einzelpreis)"""
    items = [
        SaleItem(
            article_id=a.id,
            article_code=a.code1,
            article_name=a.name,
            price_type=price_type,
            unit_price=price,
            quantity=qty,
            total=round(price * qty, 2),
            cost=a.cost,
        )
        for a, qty, price in lines
    ]
    return Sale(
        client_id=customer.id,
        client_name=customer.name,
        username="admin",
        price_type=items[0].price_type,
        unit_price=items[0].unit_price,
        total=round(sum(i.total for i in items), 2),
        items=items,
    )
