from uuid import UUID, uuid4
from typing import Optional

from pydantic import BaseModel, Field


class Article(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    code1: str
    code2: Optional[str] = None
    cost: float = 0
    current_stock: float = 0
    minimum_stock: Optional[float] = None
    price1: float = 0
    price2: Optional[float] = None
    price3: Optional[float] = None
    supplier_id: Optional[UUID] = None
    unit: str = "pcs"
    active: bool = True
    deleted: bool = False

    @property
    def is_selectable(self) -> bool:
        # Nur aktive, nicht gelöschte Artikel tauchen in Auswahllisten auf
        return self.active and not self.deleted

    @property
    def is_low_stock(self) -> bool:
        return self.minimum_stock is not None and self.current_stock <= self.minimum_stock
