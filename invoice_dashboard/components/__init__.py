"""UI components for the dashboard."""

from .cards import Card, CardWrapper
from .latest_invoices import LatestInvoices
from .revenue_chart import RevenueChart
from .skeletons import CardsSkeleton, LatestInvoicesSkeleton, RevenueChartSkeleton
from .status_bar import StatusBar
from .suspense import AsyncContent, Suspense

__all__ = [
    "AsyncContent",
    "Card",
    "CardWrapper",
    "CardsSkeleton",
    "LatestInvoices",
    "LatestInvoicesSkeleton",
    "RevenueChart",
    "RevenueChartSkeleton",
    "StatusBar",
    "Suspense",
]
