"""
Tests für GET /dashboard/
"""
from tests.conftest import auth_header


class TestDashboard:

    def test_empty(self, client, token):
        response = client.get("/dashboard/", headers=auth_header(token))

        assert response.status_code == 200
        data = response.json()
        assert data["analytics"]["total_revenue"] == 0
        assert data["top_products"] == []
        assert data["active_clients"] == []
        assert data["unread_notifications"] == 0

    def test_with_sales(self, client, token, store, customer, stocked_article):
        client.post("/sales/", headers=auth_header(token), json={
            "client_id": str(customer.id),
            "items": [{"article_id": str(stocked_article.id), "quantity": 5}],
        })

        data = client.get("/dashboard/", headers=auth_header(token)).json()

        assert data["analytics"]["total_sales"] == 1
        assert data["analytics"]["total_revenue"] == 40
        assert data["analytics"]["total_profit"] == 20
        assert data["analytics"]["inventory_value"] == 180
        assert data["top_products"][0]["article_name"] == "Olivenöl"
        assert data["active_clients"][0]["total_purchases"] == 1

    def test_active_only_toggle(self, client, token, store, stocked_article):
        store.soft_delete_article(stocked_article.id)

        everything = client.get("/dashboard/", headers=auth_header(token)).json()
        active = client.get("/dashboard/?active_only=true", headers=auth_header(token)).json()

        assert everything["analytics"]["inventory_value"] == 200
        assert active["analytics"]["inventory_value"] == 0

    def test_unread_count(self, client, token, store, stocked_article):
        store.update_article(stocked_article.id, minimum_stock=60)
        store.notify_low_stock(stocked_article)

        data = client.get("/dashboard/", headers=auth_header(token)).json()
        assert data["unread_notifications"] == 1

    def test_without_auth(self, client):
        assert client.get("/dashboard/").status_code == 401
