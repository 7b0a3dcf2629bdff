"""Summary cards: collected, pending, invoice and customer totals."""

import logging
from typing import Literal

from textual.app import ComposeResult
from textual.widgets import Static

from ..models.invoice import CardData
from ..services.data_source import DataSourceError
from ..services.formatting import escape_markup
from .suspense import AsyncContent

logger = logging.getLogger(__name__)

CardType = Literal["collected", "pending", "invoices", "customers"]

CARD_ICONS: dict[str, str] = {
    "collected": "$",
    "pending": "◷",
    "invoices": "▤",
    "customers": "☺",
}

CARD_TITLES: dict[str, str] = {
    "collected": "Collected",
    "pending": "Pending",
    "invoices": "Total Invoices",
    "customers": "Total Customers",
}


class Card(Static):
    """A single summary card with a title and a value."""

    def __init__(self, card_type: CardType) -> None:
        super().__init__("", id=f"card-{card_type}", markup=True)
        self.card_type = card_type
        self.value = ""

    def set_value(self, value: str | int) -> None:
        """Show a value on the card."""
        self.value = str(value)
        icon = CARD_ICONS[self.card_type]
        title = CARD_TITLES[self.card_type]
        self.update(f"[dim]{icon}[/dim] [bold]{title}[/bold]\n\n{self.value}")


class CardWrapper(AsyncContent):
    """The four summary cards, loaded together from the card aggregates."""

    DEFAULT_CSS = """
    CardWrapper {
        layout: grid;
        grid-size: 4;
        grid-gutter: 0 2;
        height: auto;
    }

    CardWrapper Card {
        height: 5;
        border: round $primary;
        padding: 0 1;
    }

    CardWrapper #cards-error {
        column-span: 4;
        color: $error;
        display: none;
    }

    CardWrapper #cards-error.visible {
        display: block;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="card-wrapper")
        self.data: CardData | None = None
        self.error: str | None = None

    def compose(self) -> ComposeResult:
        for card_type in CARD_TITLES:
            yield Card(card_type)
        yield Static("", id="cards-error")

    async def load_data(self) -> None:
        try:
            data = await self.app.data_source.fetch_card_data()
        except DataSourceError as e:
            logger.error(f"Failed to load card data: {e}")
            self.set_error(str(e))
            return
        self.update_cards(data)

    def update_cards(self, data: CardData) -> None:
        """Render card aggregates."""
        self.data = data
        self.error = None
        self.query_one("#cards-error", Static).remove_class("visible")
        self.query_one("#card-collected", Card).set_value(data.total_paid_invoices)
        self.query_one("#card-pending", Card).set_value(data.total_pending_invoices)
        self.query_one("#card-invoices", Card).set_value(data.number_of_invoices)
        self.query_one("#card-customers", Card).set_value(data.number_of_customers)

    def set_error(self, error: str) -> None:
        """Display an error message instead of the aggregates."""
        self.data = None
        self.error = error
        for card in self.query(Card):
            card.set_value("-")
        error_label = self.query_one("#cards-error", Static)
        error_label.update(f"[red]Failed to load cards: {escape_markup(error)}[/red]")
        error_label.add_class("visible")
