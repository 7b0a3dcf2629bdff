"""Data models for the dashboard."""

from .config import Config, DataConfig, PageConfig, Settings
from .invoice import CardData, Customer, Invoice, InvoiceStatus, LatestInvoice, Revenue

__all__ = [
    "CardData",
    "Config",
    "Customer",
    "DataConfig",
    "Invoice",
    "InvoiceStatus",
    "LatestInvoice",
    "PageConfig",
    "Revenue",
    "Settings",
]
