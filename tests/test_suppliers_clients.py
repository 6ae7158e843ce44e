"""
Tests für Suppliers und Clients Endpoints.

Testet:
- Anlegen mit und ohne Code
- Telefonnummer-Validierung
- Suche und Aktiv-Filter
- Update und hartes Löschen
"""
import pytest
from uuid import uuid4

from tests.conftest import auth_header


@pytest.mark.parametrize("path", ["/suppliers/", "/clients/"])
class TestCreateContact:

    def test_generated_code(self, client, token, path):
        response = client.post(path, headers=auth_header(token), json={"name": "Neu"})

        assert response.status_code == 200
        code = response.json()["code"]
        assert len(code) == 8
        assert code.isalnum() and code == code.upper()

    def test_explicit_code(self, client, token, path):
        response = client.post(path, headers=auth_header(token), json={"name": "Neu", "code": "EIGEN01"})
        assert response.json()["code"] == "EIGEN01"

    def test_duplicate_code(self, client, token, path):
        client.post(path, headers=auth_header(token), json={"name": "Erster", "code": "DOPPELT"})
        response = client.post(path, headers=auth_header(token), json={"name": "Zweiter", "code": "DOPPELT"})

        assert response.status_code == 409
        assert response.json()["field"] == "code"

    def test_blank_name(self, client, token, path):
        response = client.post(path, headers=auth_header(token), json={"name": "  "})
        assert response.status_code == 422

    @pytest.mark.parametrize("telephone,status", [
        ("+355 69 123-4567", 200),
        ("", 200),
        ("069/1234", 422),
        ("abc", 422),
    ])
    def test_telephone(self, client, token, path, telephone, status):
        response = client.post(path, headers=auth_header(token), json={"name": "Tel", "telephone": telephone})
        assert response.status_code == status

    def test_without_auth(self, client, path):
        assert client.post(path, json={"name": "Neu"}).status_code == 401


class TestSuppliers:

    def test_search(self, client, token, supplier):
        client.post("/suppliers/", headers=auth_header(token), json={"name": "Anderer"})

        response = client.get("/suppliers/?search=großhandel", headers=auth_header(token))
        assert [s["code"] for s in response.json()] == ["SUP00001"]

    def test_is_active_filter(self, client, token, store, supplier):
        store.update_supplier(supplier.id, active=False)

        assert client.get("/suppliers/?is_active=true", headers=auth_header(token)).json() == []
        assert len(client.get("/suppliers/?is_active=false", headers=auth_header(token)).json()) == 1

    def test_update(self, client, token, supplier):
        response = client.patch(f"/suppliers/{supplier.id}", headers=auth_header(token), json={"name": "Umbenannt"})

        assert response.status_code == 200
        assert supplier.name == "Umbenannt"
        assert supplier.code == "SUP00001"

    def test_delete(self, client, token, store, supplier):
        response = client.delete(f"/suppliers/{supplier.id}", headers=auth_header(token))

        assert response.status_code == 200
        assert store.suppliers == []

    def test_delete_not_found(self, client, token):
        assert client.delete(f"/suppliers/{uuid4()}", headers=auth_header(token)).status_code == 404


class TestClients:

    def test_get_by_id(self, client, token, customer):
        response = client.get(f"/clients/{customer.id}", headers=auth_header(token))

        assert response.status_code == 200
        assert response.json()["email"] == "kunde@test.al"

    def test_update_telephone(self, client, token, customer):
        response = client.patch(f"/clients/{customer.id}", headers=auth_header(token), json={"telephone": "069 111"})

        assert response.status_code == 200
        assert customer.telephone == "069 111"

    def test_delete_keeps_sales(self, client, token, store, customer, stocked_article):
        """Verkäufe behalten den Kundennamen als Snapshot"""
        client.post("/sales/", headers=auth_header(token), json={
            "client_id": str(customer.id),
            "items": [{"article_id": str(stocked_article.id), "quantity": 1}],
        })

        response = client.delete(f"/clients/{customer.id}", headers=auth_header(token))

        assert response.status_code == 200
        assert store.clients == []
        assert store.sales[0].client_name == "Test Kunde"
