from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, Field

from iliri.models.notification import NotificationType


class NotificationCreate(BaseModel):
    type: NotificationType = NotificationType.OTHER
    description: str = Field(min_length=1)


class NotificationResponse(BaseModel):
    id: UUID
    type: NotificationType
    description: str
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}
