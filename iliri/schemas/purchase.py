from uuid import UUID
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field


class PurchaseItemCreate(BaseModel):
    article_id: UUID
    # ohne Angabe gilt der aktuelle Einstandspreis des Artikels
    unit_cost: Optional[float] = Field(default=None, gt=0)
    quantity: float = Field(gt=0)


class PurchaseCreate(BaseModel):
    supplier_id: UUID
    items: list[PurchaseItemCreate] = Field(min_length=1)
    date: Optional[datetime] = None


class PurchaseItemResponse(BaseModel):
    article_id: UUID
    article_code: str
    article_name: str
    unit_cost: float
    quantity: float
    total: float

    model_config = {"from_attributes": True}


class PurchaseResponse(BaseModel):
    id: UUID
    number: int
    supplier_id: UUID
    supplier_name: str
    username: str
    date: datetime
    total: float
    items: list[PurchaseItemResponse]

    model_config = {"from_attributes": True}
