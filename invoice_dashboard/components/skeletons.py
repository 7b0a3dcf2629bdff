"""Loading placeholders shown while a dashboard region is pending."""

from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Static

SHIMMER = "░"


class CardSkeleton(Static):
    """Placeholder for a single summary card."""

    def __init__(self) -> None:
        super().__init__(f"[dim]{SHIMMER * 8}[/dim]\n\n[dim]{SHIMMER * 14}[/dim]", markup=True)


class CardsSkeleton(Container):
    """Placeholder for the four summary cards."""

    DEFAULT_CSS = """
    CardsSkeleton {
        layout: grid;
        grid-size: 4;
        grid-gutter: 0 2;
        height: auto;
    }

    CardsSkeleton CardSkeleton {
        height: 5;
        border: round $surface-lighten-2;
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        for _ in range(4):
            yield CardSkeleton()


class RevenueChartSkeleton(Static):
    """Placeholder for the revenue chart."""

    DEFAULT_CSS = """
    RevenueChartSkeleton {
        height: auto;
        border: round $surface-lighten-2;
        padding: 0 1;
    }
    """

    def __init__(self) -> None:
        rows = [f"[dim]{SHIMMER * 12}[/dim]", ""]
        rows.extend(f"[dim]{SHIMMER * 44}[/dim]" for _ in range(8))
        super().__init__("\n".join(rows), markup=True)


class InvoiceRowSkeleton(Static):
    """Placeholder for one row of the latest invoices list."""

    def __init__(self) -> None:
        super().__init__(
            f"[dim]{SHIMMER * 16}  {SHIMMER * 20}  {SHIMMER * 8}[/dim]",
            markup=True,
        )


class LatestInvoicesSkeleton(Vertical):
    """Placeholder for the latest invoices list."""

    DEFAULT_CSS = """
    LatestInvoicesSkeleton {
        height: auto;
        border: round $surface-lighten-2;
        padding: 0 1;
    }

    LatestInvoicesSkeleton InvoiceRowSkeleton {
        height: 2;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static(f"[dim]{SHIMMER * 15}[/dim]\n", markup=True)
        for _ in range(5):
            yield InvoiceRowSkeleton()
