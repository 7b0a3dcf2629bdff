"""Pages (screens) of the dashboard."""

from .dashboard import DashboardPage

__all__ = ["DashboardPage"]
