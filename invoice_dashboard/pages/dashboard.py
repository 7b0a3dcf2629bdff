"""Dashboard overview page.

The page lays out a heading and two grids, and wraps each data-dependent
region (cards, revenue chart, latest invoices) in its own ``Suspense``
boundary. The static layout is mounted in one go; each region then swaps its
skeleton for real content as soon as its own data arrives.
"""

import asyncio
import logging

from textual.binding import Binding
from textual.containers import Grid, VerticalScroll
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Static

from ..components.cards import CardWrapper
from ..components.latest_invoices import LatestInvoices
from ..components.revenue_chart import RevenueChart
from ..components.skeletons import CardsSkeleton, LatestInvoicesSkeleton, RevenueChartSkeleton
from ..components.status_bar import StatusBar
from ..components.suspense import Suspense

logger = logging.getLogger(__name__)

# Typography token applied to the page heading
HEADING_FONT = "heading-font"

PAGE_TITLE = "Dashboard"

REGION_IDS: dict[str, str] = {
    "cards": "cards-region",
    "chart": "chart-region",
    "invoices": "invoices-region",
}


class PageHeading(Static):
    """Page title styled with the heading typography token."""

    def __init__(self, title_text: str) -> None:
        super().__init__(title_text, id="page-title", classes=HEADING_FONT)
        self.title_text = title_text


class DashboardPage(Screen):
    """Overview page with cards, revenue chart and latest invoices."""

    BINDINGS = [
        Binding("r", "reload", "Refresh", show=True),
    ]

    DEFAULT_CSS = """
    DashboardPage #page-body {
        padding: 1 2;
    }

    DashboardPage .heading-font {
        text-style: bold italic;
        color: $primary-lighten-2;
        height: auto;
        margin: 0 0 1 0;
    }

    DashboardPage #card-grid {
        grid-size: 4;
        grid-gutter: 0 2;
        grid-rows: auto;
        height: auto;
    }

    DashboardPage #card-grid > Suspense {
        column-span: 4;
    }

    DashboardPage #lower-grid {
        grid-size: 8;
        grid-gutter: 0 2;
        grid-rows: auto;
        height: auto;
        margin: 1 0 0 0;
    }

    DashboardPage #lower-grid > Suspense {
        column-span: 4;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._body_mounted = False

    @property
    def streaming_enabled(self) -> bool:
        return self.app.app_config.page.streaming

    @property
    def body_rendered(self) -> bool:
        """Whether the page body has been mounted."""
        return self._body_mounted

    @property
    def region_states(self) -> dict[str, bool]:
        """Resolution state of each region, keyed by region name."""
        states: dict[str, bool] = {}
        for name, region_id in REGION_IDS.items():
            try:
                states[name] = self.query_one(f"#{region_id}", Suspense).resolved
            except NoMatches:
                states[name] = False
        return states

    def on_mount(self) -> None:
        self.run_worker(self._render_after_delay(), exclusive=True, group="page-render")

    async def _render_after_delay(self) -> None:
        """Wait for the configured delay, then mount the page body."""
        delay = self.app.app_config.page.effective_delay
        if delay > 0:
            logger.debug(f"Delaying dashboard render by {delay:.2f}s")
            await asyncio.sleep(delay)

        await self.mount_all(self._build_body())
        self._body_mounted = True
        logger.info("Dashboard layout rendered")
        self._update_progress()

    def _build_body(self) -> list[Widget]:
        body = VerticalScroll(
            PageHeading(PAGE_TITLE),
            Grid(
                Suspense(CardWrapper(), CardsSkeleton, id=REGION_IDS["cards"]),
                id="card-grid",
            ),
            Grid(
                Suspense(RevenueChart(), RevenueChartSkeleton, id=REGION_IDS["chart"]),
                Suspense(LatestInvoices(), LatestInvoicesSkeleton, id=REGION_IDS["invoices"]),
                id="lower-grid",
            ),
            id="page-body",
        )
        # Without streaming the page is shown only once every region is ready
        body.display = self.streaming_enabled
        return [body, StatusBar()]

    def _update_progress(self) -> None:
        states = self.region_states
        resolved = sum(states.values())
        for status_bar in self.query(StatusBar):
            status_bar.set_progress(resolved, len(states))

        if resolved == len(states) and not self.streaming_enabled:
            self.query_one("#page-body").display = True

    def on_suspense_resolved(self, event: Suspense.Resolved) -> None:
        """Track region resolution."""
        logger.info(f"Region {event.boundary.id} resolved")
        self._update_progress()

    async def refresh_regions(self) -> None:
        """Put every region back into the pending state and reload it."""
        if not self._body_mounted:
            return

        logger.info("Refreshing dashboard regions")
        if not self.streaming_enabled:
            self.query_one("#page-body").display = False
        for boundary in self.query(Suspense):
            await boundary.reset()
        self._update_progress()

    async def action_reload(self) -> None:
        """Refresh all regions."""
        await self.refresh_regions()
