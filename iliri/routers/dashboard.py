from typing import Optional

from fastapi import APIRouter, Depends

from iliri.models import User
from iliri.schemas.dashboard import DashboardResponse
from iliri.store import LedgerStore, get_store
from iliri.utils.security import get_current_user

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/", response_model=DashboardResponse)
def get_dashboard(
    active_only: Optional[bool] = None,
    current_user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store)
):
    """
    Berechnet die Kennzahlen neu und liefert sie aus.

    active_only=true bewertet den Lagerwert nur über aktive, nicht gelöschte Artikel.
    """
    analytics = store.refresh_analytics(active_only=active_only)
    return DashboardResponse(
        analytics=analytics,
        top_products=store.top_products,
        active_clients=store.active_clients,
        unread_notifications=store.unread_notifications_count(),
    )
