"""Invoice, customer and revenue data models."""

import datetime
from enum import Enum

from pydantic import BaseModel, Field


class InvoiceStatus(str, Enum):
    """Payment status of an invoice."""

    PENDING = "pending"
    PAID = "paid"


class Customer(BaseModel):
    """A customer that invoices are billed to."""

    id: str
    name: str = Field(..., min_length=1)
    email: str
    image_url: str = ""


class Invoice(BaseModel):
    """A single invoice. Amounts are stored in cents."""

    id: str
    customer_id: str
    amount: int = Field(..., ge=0)
    status: InvoiceStatus
    date: datetime.date


class Revenue(BaseModel):
    """Revenue for one month, in whole dollars."""

    month: str
    revenue: int = Field(..., ge=0)


class LatestInvoice(BaseModel):
    """An invoice joined with its customer, ready for display."""

    id: str
    name: str
    email: str
    image_url: str = ""
    amount: str  # Formatted currency, e.g. "$157.95"


class CardData(BaseModel):
    """Aggregates shown on the summary cards."""

    number_of_customers: int = 0
    number_of_invoices: int = 0
    total_paid_invoices: str = "$0.00"
    total_pending_invoices: str = "$0.00"
