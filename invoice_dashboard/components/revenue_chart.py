"""Revenue chart: monthly revenue for the last 12 months as a bar chart."""

import logging
import math

from textual.app import ComposeResult
from textual.widgets import Label, Static

from ..models.invoice import Revenue
from ..services.data_source import DataSourceError
from ..services.formatting import escape_markup, generate_y_axis
from .suspense import AsyncContent

logger = logging.getLogger(__name__)

BAR = "███"
COLUMN_WIDTH = 4


def render_bars(revenue: list[Revenue]) -> list[str]:
    """Render revenue as text rows, one row per y-axis step.

    Each month is a column; a bar fills every row at or below its value
    rounded up to the next thousand. The last row holds the month names.
    """
    labels, top_label = generate_y_axis(revenue)
    label_width = max(len(label) for label in labels)
    steps = top_label // 1000

    rows: list[str] = []
    for step, label in enumerate(labels[:-1]):
        threshold = steps - step
        cells = []
        for month in revenue:
            height = math.ceil(month.revenue / 1000)
            cells.append(BAR if height >= threshold else " " * len(BAR))
        rows.append(f"{label:>{label_width}} │" + "".join(c.ljust(COLUMN_WIDTH) for c in cells))

    axis = " " * label_width + " └" + "─" * (COLUMN_WIDTH * len(revenue))
    months = " " * (label_width + 2) + "".join(
        m.month[:3].ljust(COLUMN_WIDTH) for m in revenue
    )
    rows.append(axis)
    rows.append(months)
    return rows


class RevenueChart(AsyncContent):
    """Bar chart of recent monthly revenue."""

    DEFAULT_CSS = """
    RevenueChart {
        height: auto;
        border: round $primary;
        padding: 0 1;
    }

    RevenueChart #chart-title {
        text-style: bold;
        padding: 0 0 1 0;
    }

    RevenueChart #chart-footer {
        color: $text-muted;
        padding: 1 0 0 0;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="revenue-chart")
        self.revenue: list[Revenue] = []
        self.error: str | None = None

    def compose(self) -> ComposeResult:
        yield Label("Recent Revenue", id="chart-title")
        yield Static("", id="chart-body")
        yield Label("◷ Last 12 months", id="chart-footer")

    async def load_data(self) -> None:
        try:
            revenue = await self.app.data_source.fetch_revenue()
        except DataSourceError as e:
            logger.error(f"Failed to load revenue: {e}")
            self.set_error(str(e))
            return
        self.update_revenue(revenue)

    def update_revenue(self, revenue: list[Revenue]) -> None:
        """Render the chart for the given months."""
        self.revenue = revenue
        self.error = None
        body = self.query_one("#chart-body", Static)

        if not revenue:
            body.update("[dim]No data available.[/dim]")
            return

        body.update("\n".join(render_bars(revenue)))

    def set_error(self, error: str) -> None:
        """Display an error message instead of the chart."""
        self.revenue = []
        self.error = error
        self.query_one("#chart-body", Static).update(
            f"[red]Failed to load revenue: {escape_markup(error)}[/red]"
        )
