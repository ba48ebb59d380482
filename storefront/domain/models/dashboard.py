"""Admin dashboard statistics."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.models.order import Order


class StatusCount(BaseModel):
    status: str = Field(..., alias="_id")
    count: int = 0

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MonthlyRevenue(BaseModel):
    year: int
    month: int = Field(..., ge=1, le=12)
    revenue: float = 0
    orders: int = 0

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_group(cls, data: dict[str, Any]) -> "MonthlyRevenue":
        """Flatten an aggregation group ``{"_id": {"year", "month"}, ...}``."""
        key = data.get("_id") or {}
        return cls(
            year=key.get("year"),
            month=key.get("month"),
            revenue=data.get("revenue", 0),
            orders=data.get("orders", 0),
        )


class DashboardStats(BaseModel):
    total_revenue: float = Field(default=0, alias="totalRevenue")
    total_orders: int = Field(default=0, alias="totalOrders")
    total_products: int = Field(default=0, alias="totalProducts")
    total_users: int = Field(default=0, alias="totalUsers")
    recent_orders: list[Order] = Field(default_factory=list, alias="recentOrders")
    orders_by_status: list[StatusCount] = Field(default_factory=list, alias="ordersByStatus")
    monthly_revenue: list[MonthlyRevenue] = Field(default_factory=list, alias="monthlyRevenue")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "DashboardStats":
        data = dict(data or {})
        data["monthlyRevenue"] = [MonthlyRevenue.from_group(g) for g in data.get("monthlyRevenue") or []]
        return cls.model_validate(data)

    def status_count(self, status: str) -> int:
        for entry in self.orders_by_status:
            if entry.status == status:
                return entry.count
        return 0
