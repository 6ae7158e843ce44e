from pydantic import BaseModel

from iliri.models.analytics import DashboardAnalytics, TopProduct, ActiveClient


class DashboardResponse(BaseModel):
    analytics: DashboardAnalytics
    top_products: list[TopProduct]
    active_clients: list[ActiveClient]
    unread_notifications: int
