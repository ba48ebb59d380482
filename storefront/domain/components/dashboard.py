"""AdminDashboard component: the back-office landing page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.models.api_error import ApiError
from storefront.domain.models.dashboard import DashboardStats

if TYPE_CHECKING:
    from storefront.infrastructure.adapters.storefront_api import AdminAPI


class AdminDashboard:
    def __init__(self, admin_api: AdminAPI, notifier: Notifier) -> None:
        self._admin_api = admin_api
        self._notifier = notifier
        self.stats: DashboardStats | None = None

    async def load(self) -> DashboardStats | None:
        """Fetch the totals; on failure the previous figures stay."""
        try:
            self.stats = await self._admin_api.get_dashboard()
        except ApiError:
            self._notifier.error("Failed to fetch dashboard data")
        return self.stats
