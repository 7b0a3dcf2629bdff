"""Display helpers shared by the dashboard widgets."""

import math

from ..models.invoice import Revenue


def format_currency(amount: int) -> str:
    """Format an amount in cents as US dollars, e.g. 15795 -> '$157.95'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount) / 100:,.2f}"


def generate_y_axis(revenue: list[Revenue]) -> tuple[list[str], int]:
    """Build y-axis labels for the revenue chart.

    Labels run from the highest value down to ``$0K`` in steps of 1000,
    where the highest value is the largest month rounded up to the next
    thousand.

    Returns:
        Tuple of (labels, top_label_value)
    """
    highest = max((month.revenue for month in revenue), default=0)
    top_label = math.ceil(highest / 1000) * 1000

    labels = [f"${value // 1000}K" for value in range(top_label, -1, -1000)]
    return labels, top_label


def escape_markup(text: str) -> str:
    """Escape Rich markup characters in user content."""
    return text.replace("[", r"\[").replace("]", r"\]")
