"""Latest invoices list component."""

import logging

from textual.app import ComposeResult
from textual.widgets import DataTable, Label

from ..models.invoice import LatestInvoice
from ..services.data_source import DataSourceError
from ..services.formatting import escape_markup
from .suspense import AsyncContent

logger = logging.getLogger(__name__)


class LatestInvoices(AsyncContent):
    """Table of the most recent invoices."""

    DEFAULT_CSS = """
    LatestInvoices {
        height: auto;
        border: round $primary;
        padding: 0 1;
    }

    LatestInvoices #invoices-title {
        text-style: bold;
        padding: 0 0 1 0;
    }

    LatestInvoices DataTable {
        height: auto;
    }

    LatestInvoices #invoices-error {
        color: $error;
    }

    LatestInvoices #invoices-footer {
        color: $text-muted;
        padding: 1 0 0 0;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="latest-invoices")
        self.invoices: list[LatestInvoice] = []
        self.error: str | None = None

    def compose(self) -> ComposeResult:
        yield Label("Latest Invoices", id="invoices-title")
        yield Label("", id="invoices-error")
        yield DataTable(id="invoices-table", show_cursor=False, zebra_stripes=True)
        yield Label("⟳ Updated just now", id="invoices-footer")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_columns("Customer", "Email", "Amount")

    async def load_data(self) -> None:
        limit = self.app.app_config.data.latest_invoices_limit
        try:
            invoices = await self.app.data_source.fetch_latest_invoices(limit)
        except DataSourceError as e:
            logger.error(f"Failed to load latest invoices: {e}")
            self.set_error(str(e))
            return
        self.update_invoices(invoices)

    def update_invoices(self, invoices: list[LatestInvoice]) -> None:
        """Replace the table rows with the given invoices."""
        self.invoices = invoices
        self.error = None
        self.query_one("#invoices-error", Label).update("")

        table = self.query_one(DataTable)
        table.clear()
        for invoice in invoices:
            table.add_row(
                f"[bold]{escape_markup(invoice.name)}[/bold]",
                f"[dim]{escape_markup(invoice.email)}[/dim]",
                invoice.amount,
            )

        if not invoices:
            self.query_one("#invoices-error", Label).update("[dim]No invoices yet[/dim]")

    def set_error(self, error: str) -> None:
        """Display an error message instead of the table."""
        self.invoices = []
        self.error = error
        self.query_one(DataTable).clear()
        self.query_one("#invoices-error", Label).update(
            f"[red]Failed to load invoices: {escape_markup(error)}[/red]"
        )
