import enum
from uuid import UUID, uuid4
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class NotificationType(enum.Enum):
    LOW_STOCK = "Low Stock"
    SYSTEM_ALERT = "System Alert"
    PAYMENT_DUE = "Payment Due"
    OTHER = "Other"


class Notification(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    type: NotificationType
    description: str
    read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
