from uuid import UUID, uuid4
from typing import Optional

from pydantic import BaseModel, Field


class Supplier(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    code: str
    telephone: Optional[str] = None
    active: bool = True
