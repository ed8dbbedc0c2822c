"""Dashboard counters on the main page."""

import logging

from ..exceptions import GuvohnomaAdminError
from ..models import Dashboard
from .base import BaseController

logger = logging.getLogger(__name__)

COUNTER_IDS = {
    "users": "usersCount",
    "students": "studentsCount",
    "documents": "documentsCount",
}


class DashboardLoader(BaseController):
    """Fill the dashboard counters from the API."""

    async def load_dashboard(self) -> Dashboard:
        """Fetch the aggregate counts and write them into the page.

        Any failure shows zeros instead; it is logged but not notified.

        Returns:
            The counts that were written
        """
        try:
            dashboard = await self.client.get_dashboard()
        except GuvohnomaAdminError as e:
            logger.error(f"Dashboard load error: {e}")
            dashboard = Dashboard()

        for field, element_id in COUNTER_IDS.items():
            self.page.set_text(element_id, getattr(dashboard, field))

        return dashboard
