import enum
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class PriceType(enum.Enum):
    PRICE_1 = "Price 1"
    PRICE_2 = "Price 2"
    PRICE_3 = "Price 3"
    CUSTOM = "Custom"


class SaleStatus(enum.Enum):
    UNPAID = "UNPAID"
    PARTIALLY_PAID = "PARTIALLY PAID"
    PAID = "PAID"


class SaleItem(BaseModel):
    article_id: UUID
    article_code: str
    article_name: str
    price_type: PriceType = PriceType.PRICE_1
    unit_price: float
    quantity: float
    total: float
    # Einstandspreis zum Verkaufszeitpunkt
    cost: float = 0
    # tatsächlich abgebuchte Menge (kleiner als quantity, wenn der Bestand nicht reichte)
    deducted: float = 0


class Sale(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    number: int = 0
    client_id: UUID
    client_name: str
    client_reference: Optional[str] = None
    username: str
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    # Kopfdaten kommen aus der ersten Position
    price_type: PriceType = PriceType.PRICE_1
    unit_price: float = 0
    total: float = 0
    paid: bool = False
    # Cache der Summe aus dem Zahlungsjournal, wird nur von record_payment geschrieben
    paid_amount: Optional[float] = None
    items: list[SaleItem] = Field(default_factory=list)

    @property
    def status(self) -> SaleStatus:
        if self.paid:
            return SaleStatus.PAID
        if self.paid_amount:
            return SaleStatus.PARTIALLY_PAID
        return SaleStatus.UNPAID
