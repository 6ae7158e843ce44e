"""
Tests für Auth Endpoints.

Testet:
- POST /auth/login (inkl. remember_me)
- POST /auth/logout
- GET /auth/me
- PATCH /auth/me
"""
from iliri.config import settings
from tests.conftest import auth_header


class TestLogin:
    """Tests für POST /auth/login"""

    def test_login_success(self, client, session):
        response = client.post("/auth/login", json={
            "name": settings.login_name,
            "password": settings.login_password
        })

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["token_type"] == "bearer"
        assert data["user"]["name"] == settings.login_name
        assert session.persisted is False

    def test_login_remember_me(self, client, session):
        response = client.post("/auth/login", json={
            "name": settings.login_name,
            "password": settings.login_password,
            "remember_me": True
        })

        assert response.status_code == 200
        assert session.persisted is True

    def test_login_wrong_password(self, client):
        """Falsches Passwort → 401"""
        response = client.post("/auth/login", json={
            "name": settings.login_name,
            "password": "wrongpassword"
        })
        assert response.status_code == 401

    def test_login_password_too_short(self, client):
        response = client.post("/auth/login", json={"name": settings.login_name, "password": "kurz"})
        assert response.status_code == 422

    def test_login_name_invalid_chars(self, client):
        response = client.post("/auth/login", json={"name": "ad#min", "password": settings.login_password})
        assert response.status_code == 422

    def test_login_name_too_short(self, client):
        response = client.post("/auth/login", json={"name": "a", "password": settings.login_password})
        assert response.status_code == 422


class TestMe:
    """Tests für GET/PATCH /auth/me"""

    def test_me(self, client, token):
        response = client.get("/auth/me", headers=auth_header(token))

        assert response.status_code == 200
        assert response.json()["theme"] == "light"

    def test_me_wrong_token(self, client, token):
        response = client.get("/auth/me", headers=auth_header("falsch"))
        assert response.status_code == 401

    def test_switch_theme(self, client, token, session):
        response = client.patch("/auth/me", headers=auth_header(token), json={"theme": "dark"})

        assert response.status_code == 200
        assert response.json()["theme"] == "dark"
        assert session.user.theme == "dark"

    def test_invalid_theme(self, client, token):
        response = client.patch("/auth/me", headers=auth_header(token), json={"theme": "pink"})
        assert response.status_code == 422


class TestLogout:
    """Tests für POST /auth/logout"""

    def test_logout_invalidates_token(self, client, token, session):
        response = client.post("/auth/logout", headers=auth_header(token))

        assert response.status_code == 200
        assert session.user is None
        assert client.get("/auth/me", headers=auth_header(token)).status_code == 401
