from uuid import UUID, uuid4
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class Payment(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    sale_id: UUID
    amount: float
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
