from uuid import UUID, uuid4
from typing import Optional

from pydantic import BaseModel, Field


class Client(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    code: str
    telephone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    active: bool = True
