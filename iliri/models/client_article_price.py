from uuid import UUID, uuid4
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from iliri.models.sale import PriceType


class ClientArticlePrice(BaseModel):
    """Zuletzt verwendeter Preis pro Kunde und Artikel"""
    id: UUID = Field(default_factory=uuid4)
    client_id: UUID
    article_id: UUID
    last_price: float
    price_type: PriceType
    last_used_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
