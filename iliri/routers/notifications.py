from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from iliri.models import User
from iliri.schemas.notification import NotificationCreate, NotificationResponse
from iliri.store import LedgerStore, get_store
from iliri.utils.security import get_current_user

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationResponse])
def get_notifications(
    unread_only: bool = False,
    current_user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store)
):
    if unread_only:
        return [n for n in store.notifications if not n.read]
    return store.notifications


@router.post("/", response_model=NotificationResponse)
def create_notification(notification: NotificationCreate, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    return store.add_notification(notification.type, notification.description)


@router.post("/read-all")
def mark_all_read(current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    count = store.mark_all_notifications_read()
    return {"message": f"{count} Benachrichtigung(en) gelesen"}


@router.post("/{id}/read", response_model=NotificationResponse)
def mark_read(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    notification = store.mark_notification_read(id)
    if not notification:
        raise HTTPException(status_code=404, detail="Benachrichtigung nicht gefunden")
    return notification
