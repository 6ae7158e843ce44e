"""
Fachliche Fehler des Inventory Ledgers.

Jeder Fehler kennt seinen HTTP-Statuscode, damit main.py ihn ohne
Fallunterscheidung als JSON ausliefern kann.
"""
from typing import Optional


class LedgerError(Exception):
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"detail": self.message, "field": self.field}


class NotFoundError(LedgerError):
    status_code = 404


class ValidationFailed(LedgerError):
    status_code = 422


class DuplicateCodeError(LedgerError):
    status_code = 409


class InvalidPaymentError(LedgerError):
    status_code = 400


class PaymentExceedsBalanceError(InvalidPaymentError):
    """Zahlung wäre größer als der offene Restbetrag"""
