"""Invoice Dashboard - a terminal dashboard for revenue and invoices."""

__version__ = "0.1.0"
