"""
Anmelde-Flag der Oberfläche.

Das ist der einzige Zustand, der einen Neustart überlebt: aktueller Benutzer
plus Theme, als JSON-Blob unter einem festen Schlüssel. Die Geschäftsdaten
liegen ausschließlich im LedgerStore und werden nicht gespeichert.
"""
import json
import logging
import os
import secrets
from typing import Optional

from fastapi import Request

from iliri.config import settings
from iliri.models import User

logger = logging.getLogger("iliri.session")


class InvalidCredentials(Exception):
    pass


class SessionStore:

    def __init__(self, path: Optional[str] = None, key: Optional[str] = None):
        self.path = path or settings.session_file
        self.key = key or settings.session_key
        self.user: Optional[User] = None
        self.token: Optional[str] = None
        self._load()

    def _load(self):
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, encoding="utf-8") as f:
                state = json.load(f).get(self.key, {}).get("state", {})
            if state.get("user") and state.get("token"):
                self.user = User(**state["user"])
                self.token = state["token"]
                logger.info(f"Sitzung von {self.user.name} wiederhergestellt")
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Gespeicherte Sitzung nicht lesbar, wird ignoriert: {e}")

    def _save(self):
        blob = {self.key: {"state": {
            "user": self.user.model_dump() if self.user else None,
            "token": self.token,
        }}}
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(blob, f)

    def _clear_file(self):
        if os.path.exists(self.path):
            os.remove(self.path)

    @property
    def persisted(self) -> bool:
        return os.path.exists(self.path)

    def login(self, name: str, password: str, remember_me: bool = False) -> User:
        # Mock-Anmeldung: es gibt genau einen Benutzer aus der Konfiguration
        if name.strip() != settings.login_name or password != settings.login_password:
            logger.warning(f"Fehlgeschlagene Anmeldung für {name!r}")
            raise InvalidCredentials()

        self.user = User(id="1", name=name.strip(), email="user@example.com")
        self.token = secrets.token_urlsafe(32)
        if remember_me:
            self._save()
        logger.info(f"{self.user.name} angemeldet")
        return self.user

    def logout(self):
        if self.user:
            logger.info(f"{self.user.name} abgemeldet")
        self.user = None
        self.token = None
        self._clear_file()

    def update_user(self, **changes) -> Optional[User]:
        if not self.user:
            return None
        self.user = self.user.model_copy(update=changes)
        self._save()
        return self.user

    def user_for_token(self, token: Optional[str]) -> Optional[User]:
        if not token or not self.token or not secrets.compare_digest(token, self.token):
            return None
        return self.user


def get_session(request: Request) -> SessionStore:
    return request.app.state.session
