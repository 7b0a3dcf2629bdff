"""Data sources for revenue, invoices and customers."""

import asyncio
import logging
import random
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..models.config import Config
from ..models.invoice import (
    CardData,
    Customer,
    Invoice,
    InvoiceStatus,
    LatestInvoice,
    Revenue,
)
from . import placeholder_data
from .cache import Cache
from .formatting import format_currency

logger = logging.getLogger(__name__)

# Retry configuration
MAX_RETRIES = 3
INITIAL_BACKOFF = 1.0
MAX_BACKOFF = 10.0
BACKOFF_MULTIPLIER = 2.0
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

ModelT = TypeVar("ModelT", bound=BaseModel)


class DataSourceError(Exception):
    """Raised when a dataset cannot be obtained."""


def _calculate_backoff(attempt: int) -> float:
    """Calculate backoff time with jitter."""
    backoff = min(INITIAL_BACKOFF * (BACKOFF_MULTIPLIER**attempt), MAX_BACKOFF)
    jitter = 0.5 + random.random()
    return backoff * jitter


def summarize_cards(invoices: list[Invoice], customers: list[Customer]) -> CardData:
    """Aggregate invoice totals and counts for the summary cards."""
    paid = sum(i.amount for i in invoices if i.status == InvoiceStatus.PAID)
    pending = sum(i.amount for i in invoices if i.status == InvoiceStatus.PENDING)
    return CardData(
        number_of_customers=len(customers),
        number_of_invoices=len(invoices),
        total_paid_invoices=format_currency(paid),
        total_pending_invoices=format_currency(pending),
    )


def select_latest_invoices(
    invoices: list[Invoice], customers: list[Customer], limit: int = 5
) -> list[LatestInvoice]:
    """Return the most recent invoices joined with their customers."""
    by_id = {c.id: c for c in customers}
    latest: list[LatestInvoice] = []
    seen: set[str] = set()

    for invoice in sorted(invoices, key=lambda i: i.date, reverse=True):
        if invoice.id in seen:
            logger.warning(f"Skipping duplicate invoice {invoice.id}")
            continue
        customer = by_id.get(invoice.customer_id)
        if customer is None:
            logger.debug(f"Skipping invoice {invoice.id}: unknown customer {invoice.customer_id}")
            continue
        latest.append(
            LatestInvoice(
                id=invoice.id,
                name=customer.name,
                email=customer.email,
                image_url=customer.image_url,
                amount=format_currency(invoice.amount),
            )
        )
        seen.add(invoice.id)
        if len(latest) >= limit:
            break

    return latest


def _parse(model: type[ModelT], rows: object, dataset: str) -> list[ModelT]:
    """Validate raw rows into models, raising DataSourceError on bad data."""
    if not isinstance(rows, list):
        raise DataSourceError(f"Malformed {dataset} data: expected a list")
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        raise DataSourceError(f"Malformed {dataset} data: {e.error_count()} invalid field(s)")


class DataSource:
    """Base class for dashboard data sources.

    Subclasses provide the raw rows; parsing, joining and aggregation live
    here so every source behaves the same.
    """

    async def _load_revenue(self) -> list[dict]:
        raise NotImplementedError

    async def _load_invoices(self) -> list[dict]:
        raise NotImplementedError

    async def _load_customers(self) -> list[dict]:
        raise NotImplementedError

    async def fetch_revenue(self) -> list[Revenue]:
        """Fetch monthly revenue."""
        logger.debug("Fetching revenue data")
        return _parse(Revenue, await self._load_revenue(), "revenue")

    async def _fetch_invoices_and_customers(self) -> tuple[list[Invoice], list[Customer]]:
        raw_invoices, raw_customers = await asyncio.gather(
            self._load_invoices(), self._load_customers()
        )
        return (
            _parse(Invoice, raw_invoices, "invoice"),
            _parse(Customer, raw_customers, "customer"),
        )

    async def fetch_latest_invoices(self, limit: int = 5) -> list[LatestInvoice]:
        """Fetch the most recent invoices with customer details."""
        logger.debug("Fetching latest invoices")
        invoices, customers = await self._fetch_invoices_and_customers()
        return select_latest_invoices(invoices, customers, limit)

    async def fetch_card_data(self) -> CardData:
        """Fetch counts and totals for the summary cards."""
        logger.debug("Fetching card data")
        invoices, customers = await self._fetch_invoices_and_customers()
        return summarize_cards(invoices, customers)


class PlaceholderDataSource(DataSource):
    """In-memory sample data with optional simulated latency."""

    def __init__(
        self,
        revenue_latency: float = 0.0,
        invoices_latency: float = 0.0,
        cards_latency: float = 0.0,
    ):
        self.revenue_latency = revenue_latency
        self.invoices_latency = invoices_latency
        self.cards_latency = cards_latency

    async def _load_revenue(self) -> list[dict]:
        return [dict(row) for row in placeholder_data.revenue]

    async def _load_invoices(self) -> list[dict]:
        return [dict(row) for row in placeholder_data.invoices]

    async def _load_customers(self) -> list[dict]:
        return [dict(row) for row in placeholder_data.customers]

    async def fetch_revenue(self) -> list[Revenue]:
        if self.revenue_latency:
            logger.debug(f"Simulating {self.revenue_latency:.1f}s revenue latency")
            await asyncio.sleep(self.revenue_latency)
        return await super().fetch_revenue()

    async def fetch_latest_invoices(self, limit: int = 5) -> list[LatestInvoice]:
        if self.invoices_latency:
            await asyncio.sleep(self.invoices_latency)
        return await super().fetch_latest_invoices(limit)

    async def fetch_card_data(self) -> CardData:
        if self.cards_latency:
            await asyncio.sleep(self.cards_latency)
        return await super().fetch_card_data()


class ApiDataSource(DataSource):
    """JSON-over-HTTP data source with retries and a stale-cache fallback."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = MAX_RETRIES,
        cache: Cache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.cache = cache
        self._transport = transport

    async def _load_revenue(self) -> list[dict]:
        return await self._get_json("/revenue")

    async def _load_invoices(self) -> list[dict]:
        return await self._get_json("/invoices")

    async def _load_customers(self) -> list[dict]:
        return await self._get_json("/customers")

    async def _get_json(self, path: str) -> list[dict]:
        """GET a JSON document with retry logic, falling back to stale cache."""
        url = f"{self.base_url}{path}"

        if self.cache is not None:
            cached = self.cache.get(url)
            if cached is not None:
                logger.debug(f"Cache hit for {url}")
                return cached

        last_error: str | None = None

        for attempt in range(self.max_retries + 1):
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout, transport=self._transport
                ) as client:
                    response = await client.get(url)
                    response.raise_for_status()
                    data = response.json()

                if self.cache is not None:
                    self.cache.set(url, data)
                return data

            except httpx.TimeoutException:
                last_error = "Request timeout"
                if attempt < self.max_retries:
                    backoff = _calculate_backoff(attempt)
                    logger.debug(f"Timeout on {path}, retry {attempt + 1} in {backoff:.1f}s")
                    await asyncio.sleep(backoff)
                    continue
                logger.warning(f"Timeout fetching {url} after retries")

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                last_error = f"HTTP {status}"

                if status in RETRYABLE_STATUS_CODES and attempt < self.max_retries:
                    backoff = _calculate_backoff(attempt)
                    logger.debug(f"HTTP {status} on {path}, retry {attempt + 1} in {backoff:.1f}s")
                    await asyncio.sleep(backoff)
                    continue
                logger.error(f"HTTP error fetching {url}: {status}")

            except httpx.ConnectError as e:
                last_error = "Connection error"
                if attempt < self.max_retries:
                    backoff = _calculate_backoff(attempt)
                    logger.debug(f"Connection error on {path}, retry {attempt + 1} in {backoff:.1f}s")
                    await asyncio.sleep(backoff)
                    continue
                logger.error(f"Connection error fetching {url}: {e}")

            except ValueError as e:
                # Body was not valid JSON
                logger.error(f"Invalid JSON from {url}: {e}")
                last_error = "Invalid JSON response"

            except httpx.HTTPError as e:
                logger.error(f"Error fetching {url}: {e}")
                last_error = str(e) or type(e).__name__

            break

        if self.cache is not None:
            stale = self.cache.get(url, allow_stale=True)
            if stale is not None:
                logger.warning(f"Serving stale data for {url}: {last_error}")
                return stale

        raise DataSourceError(f"{path.lstrip('/').capitalize()}: {last_error or 'Unknown error'}")


def create_data_source(config: Config) -> DataSource:
    """Build the data source described by the configuration."""
    data = config.data
    if data.source == "api":
        cache = Cache(config.settings.cache_dir, ttl_minutes=config.settings.cache_ttl_minutes)
        logger.info(f"Using API data source at {data.base_url}")
        return ApiDataSource(
            base_url=data.base_url or "",
            timeout=data.timeout_seconds,
            max_retries=data.max_retries,
            cache=cache,
        )

    logger.info("Using placeholder data source")
    return PlaceholderDataSource(
        revenue_latency=data.revenue_latency_seconds,
        invoices_latency=data.invoices_latency_seconds,
        cards_latency=data.cards_latency_seconds,
    )
