from uuid import UUID
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _not_blank(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError('Feld darf nicht leer sein')
    return v


class ArticleCreate(BaseModel):
    name: str
    code1: str
    code2: Optional[str] = None
    cost: float = Field(default=0, ge=0)
    current_stock: float = Field(default=0, ge=0)
    minimum_stock: Optional[float] = Field(default=None, ge=0)
    price1: float = Field(default=0, ge=0)
    price2: Optional[float] = Field(default=None, ge=0)
    price3: Optional[float] = Field(default=None, ge=0)
    supplier_id: Optional[UUID] = None
    unit: str = "pcs"
    active: bool = True

    strip_required = field_validator('name', 'code1')(_not_blank)


class ArticleUpdate(BaseModel):
    name: Optional[str] = None
    code1: Optional[str] = None
    code2: Optional[str] = None
    cost: Optional[float] = Field(default=None, ge=0)
    current_stock: Optional[float] = Field(default=None, ge=0)
    minimum_stock: Optional[float] = Field(default=None, ge=0)
    price1: Optional[float] = Field(default=None, ge=0)
    price2: Optional[float] = Field(default=None, ge=0)
    price3: Optional[float] = Field(default=None, ge=0)
    supplier_id: Optional[UUID] = None
    unit: Optional[str] = None
    active: Optional[bool] = None

    strip_required = field_validator('name', 'code1')(_not_blank)


class ArticleResponse(BaseModel):
    id: UUID
    name: str
    code1: str
    code2: Optional[str]
    cost: float
    current_stock: float
    minimum_stock: Optional[float]
    price1: float
    price2: Optional[float]
    price3: Optional[float]
    supplier_id: Optional[UUID]
    unit: str
    active: bool
    deleted: bool
    is_low_stock: bool

    model_config = {"from_attributes": True}
