from uuid import UUID, uuid4
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class PurchaseItem(BaseModel):
    article_id: UUID
    # Snapshot zum Zeitpunkt des Einkaufs
    article_code: str
    article_name: str
    unit_cost: float
    quantity: float
    total: float


class Purchase(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    number: int = 0
    supplier_id: UUID
    supplier_name: str
    username: str
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total: float = 0
    items: list[PurchaseItem] = Field(default_factory=list)
