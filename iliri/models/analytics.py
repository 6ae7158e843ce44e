from uuid import UUID

from pydantic import BaseModel


class DashboardAnalytics(BaseModel):
    total_sales: int = 0
    total_revenue: float = 0
    total_profit: float = 0
    total_debt: float = 0
    inventory_value: float = 0


class TopProduct(BaseModel):
    article_id: UUID
    article_name: str
    quantity_sold: float


class ActiveClient(BaseModel):
    client_id: UUID
    client_name: str
    total_purchases: int
