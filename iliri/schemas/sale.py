from uuid import UUID
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field

from iliri.models.sale import PriceType, SaleStatus


class SaleItemCreate(BaseModel):
    article_id: UUID
    price_type: Optional[PriceType] = None
    unit_price: Optional[float] = Field(default=None, gt=0)
    quantity: float = Field(gt=0)


class SaleCreate(BaseModel):
    client_id: UUID
    client_reference: Optional[str] = None
    items: list[SaleItemCreate] = Field(min_length=1)
    date: Optional[datetime] = None
    # paid=False entspricht "Nicht bezahlt", optional mit Anzahlung
    paid: bool = True
    paid_amount: Optional[float] = Field(default=None, ge=0)


class SaleItemResponse(BaseModel):
    article_id: UUID
    article_code: str
    article_name: str
    price_type: PriceType
    unit_price: float
    quantity: float
    total: float
    cost: float

    model_config = {"from_attributes": True}


class SaleResponse(BaseModel):
    id: UUID
    number: int
    client_id: UUID
    client_name: str
    client_reference: Optional[str]
    username: str
    date: datetime
    price_type: PriceType
    unit_price: float
    total: float
    paid: bool
    paid_amount: Optional[float]
    status: SaleStatus
    items: list[SaleItemResponse]

    model_config = {"from_attributes": True}


class PaymentCreate(BaseModel):
    amount: float = Field(gt=0)


class PaymentResponse(BaseModel):
    id: UUID
    sale_id: UUID
    amount: float
    timestamp: datetime

    model_config = {"from_attributes": True}


class LastUsedPriceResponse(BaseModel):
    client_id: UUID
    article_id: UUID
    last_price: float
    price_type: PriceType
    last_used_at: datetime

    model_config = {"from_attributes": True}
