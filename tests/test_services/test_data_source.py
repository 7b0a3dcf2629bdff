"""Tests for dashboard data sources."""

import time

import httpx
import pytest

from invoice_dashboard.models.config import Config, DataConfig, Settings
from invoice_dashboard.models.invoice import Customer, Invoice
from invoice_dashboard.services import data_source
from invoice_dashboard.services.cache import Cache
from invoice_dashboard.services.data_source import (
    ApiDataSource,
    DataSourceError,
    PlaceholderDataSource,
    create_data_source,
    select_latest_invoices,
    summarize_cards,
)

BASE_URL = "https://api.example.com"


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch):
    """Make retries immediate."""
    monkeypatch.setattr(data_source, "_calculate_backoff", lambda attempt: 0)


def make_transport(routes, calls=None):
    """Build a mock transport answering from a {path: response-or-callable} map."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request.url.path)
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404)
        if callable(route):
            return route(request)
        return route

    return httpx.MockTransport(handler)


class TestSummaries:
    """Tests for the pure aggregation helpers."""

    def test_summarize_cards(self, invoice_rows, customer_rows):
        invoices = [Invoice.model_validate(r) for r in invoice_rows]
        customers = [Customer.model_validate(r) for r in customer_rows]

        cards = summarize_cards(invoices, customers)
        assert cards.number_of_customers == 2
        assert cards.number_of_invoices == 3
        assert cards.total_paid_invoices == "$233.88"
        assert cards.total_pending_invoices == "$157.95"

    def test_latest_invoices_newest_first(self, invoice_rows, customer_rows):
        invoices = [Invoice.model_validate(r) for r in invoice_rows]
        customers = [Customer.model_validate(r) for r in customer_rows]

        latest = select_latest_invoices(invoices, customers)
        assert [i.id for i in latest] == ["i2", "i3", "i1"]
        assert latest[0].name == "Lee Robinson"
        assert latest[0].amount == "$203.48"
        assert latest[1].image_url == "/amy.png"

    def test_latest_invoices_limit(self, invoice_rows, customer_rows):
        invoices = [Invoice.model_validate(r) for r in invoice_rows]
        customers = [Customer.model_validate(r) for r in customer_rows]

        assert len(select_latest_invoices(invoices, customers, limit=2)) == 2

    def test_latest_invoices_skip_unknown_customer(self, invoice_rows, customer_rows):
        invoices = [Invoice.model_validate(r) for r in invoice_rows]
        customers = [Customer.model_validate(customer_rows[0])]

        latest = select_latest_invoices(invoices, customers)
        assert [i.id for i in latest] == ["i3", "i1"]

    def test_latest_invoices_duplicate_ids_kept_once(self, invoice_rows, customer_rows):
        rows = invoice_rows + [{**invoice_rows[1], "date": "2023-01-01"}]
        invoices = [Invoice.model_validate(r) for r in rows]
        customers = [Customer.model_validate(r) for r in customer_rows]

        latest = select_latest_invoices(invoices, customers)
        assert [i.id for i in latest] == ["i2", "i3", "i1"]


class TestPlaceholderDataSource:
    """Tests for the in-memory sample data source."""

    @pytest.mark.asyncio
    async def test_fetch_revenue(self):
        revenue = await PlaceholderDataSource().fetch_revenue()
        assert len(revenue) == 12
        assert revenue[0].month == "Jan"
        assert max(r.revenue for r in revenue) == 4800

    @pytest.mark.asyncio
    async def test_fetch_card_data(self):
        cards = await PlaceholderDataSource().fetch_card_data()
        assert cards.number_of_customers == 6
        assert cards.number_of_invoices == 13
        assert cards.total_paid_invoices == "$1,006.26"
        assert cards.total_pending_invoices == "$1,256.32"

    @pytest.mark.asyncio
    async def test_fetch_latest_invoices(self):
        latest = await PlaceholderDataSource().fetch_latest_invoices()
        assert len(latest) == 5
        assert latest[0].name == "Michael Novotny"
        assert latest[0].amount == "$448.00"

    @pytest.mark.asyncio
    async def test_simulated_latency(self):
        """Test each dataset waits for its own configured latency."""
        source = PlaceholderDataSource(revenue_latency=0.2, invoices_latency=0.0)

        started = time.monotonic()
        await source.fetch_latest_invoices()
        assert time.monotonic() - started < 0.2

        started = time.monotonic()
        await source.fetch_revenue()
        assert time.monotonic() - started >= 0.19


class TestApiDataSource:
    """Tests for the HTTP data source."""

    @pytest.mark.asyncio
    async def test_fetch_revenue(self, revenue_rows):
        transport = make_transport({"/revenue": httpx.Response(200, json=revenue_rows)})
        source = ApiDataSource(BASE_URL, transport=transport)

        revenue = await source.fetch_revenue()
        assert [r.month for r in revenue] == ["Jan", "Feb", "Mar"]

    @pytest.mark.asyncio
    async def test_fetch_card_data(self, invoice_rows, customer_rows):
        calls = []
        transport = make_transport(
            {
                "/invoices": httpx.Response(200, json=invoice_rows),
                "/customers": httpx.Response(200, json=customer_rows),
            },
            calls,
        )
        source = ApiDataSource(BASE_URL, transport=transport)

        cards = await source.fetch_card_data()
        assert cards.number_of_invoices == 3
        assert sorted(calls) == ["/customers", "/invoices"]

    @pytest.mark.asyncio
    async def test_retries_on_server_error(self, revenue_rows):
        attempts = []

        def flaky(request):
            attempts.append(request)
            if len(attempts) < 3:
                return httpx.Response(503)
            return httpx.Response(200, json=revenue_rows)

        source = ApiDataSource(BASE_URL, max_retries=3, transport=make_transport({"/revenue": flaky}))

        revenue = await source.fetch_revenue()
        assert len(revenue) == 3
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_no_retry_on_client_error(self):
        calls = []
        source = ApiDataSource(BASE_URL, max_retries=3, transport=make_transport({}, calls))

        with pytest.raises(DataSourceError) as exc_info:
            await source.fetch_revenue()
        assert "HTTP 404" in str(exc_info.value)
        assert calls == ["/revenue"]

    @pytest.mark.asyncio
    async def test_connection_error_after_retries(self):
        calls = []

        def refuse(request):
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        source = ApiDataSource(BASE_URL, max_retries=2, transport=make_transport({"/revenue": refuse}))

        with pytest.raises(DataSourceError) as exc_info:
            await source.fetch_revenue()
        assert "Connection error" in str(exc_info.value)
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_malformed_payload(self):
        transport = make_transport({"/revenue": httpx.Response(200, json=[{"month": "Jan"}])})
        source = ApiDataSource(BASE_URL, transport=transport)

        with pytest.raises(DataSourceError) as exc_info:
            await source.fetch_revenue()
        assert "Malformed revenue data" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_payload_not_a_list(self):
        transport = make_transport({"/revenue": httpx.Response(200, json={"rows": []})})
        source = ApiDataSource(BASE_URL, transport=transport)

        with pytest.raises(DataSourceError):
            await source.fetch_revenue()

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        transport = make_transport({"/revenue": httpx.Response(200, text="<html>")})
        source = ApiDataSource(BASE_URL, transport=transport)

        with pytest.raises(DataSourceError) as exc_info:
            await source.fetch_revenue()
        assert "Invalid JSON" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_cache_hit_skips_request(self, temp_dir, revenue_rows):
        cache = Cache(temp_dir / "cache", ttl_minutes=5)
        cache.set(f"{BASE_URL}/revenue", revenue_rows)
        calls = []
        source = ApiDataSource(BASE_URL, cache=cache, transport=make_transport({}, calls))

        revenue = await source.fetch_revenue()
        assert len(revenue) == 3
        assert calls == []

    @pytest.mark.asyncio
    async def test_successful_response_is_cached(self, temp_dir, revenue_rows):
        cache = Cache(temp_dir / "cache", ttl_minutes=5)
        transport = make_transport({"/revenue": httpx.Response(200, json=revenue_rows)})
        source = ApiDataSource(BASE_URL, cache=cache, transport=transport)

        await source.fetch_revenue()
        assert cache.get(f"{BASE_URL}/revenue") == revenue_rows

    @pytest.mark.asyncio
    async def test_stale_cache_on_failure(self, temp_dir, revenue_rows):
        cache = Cache(temp_dir / "cache", ttl_minutes=0)
        cache.set(f"{BASE_URL}/revenue", revenue_rows)
        time.sleep(0.01)
        transport = make_transport({"/revenue": lambda request: httpx.Response(500)})
        source = ApiDataSource(BASE_URL, max_retries=1, cache=cache, transport=transport)

        revenue = await source.fetch_revenue()
        assert [r.month for r in revenue] == ["Jan", "Feb", "Mar"]


class TestCreateDataSource:
    """Tests for the data source factory."""

    def test_default_is_placeholder(self):
        source = create_data_source(Config())
        assert isinstance(source, PlaceholderDataSource)
        assert source.revenue_latency == 3.0

    def test_api_source(self, temp_dir):
        config = Config(
            data=DataConfig(source="api", base_url="https://api.example.com/", max_retries=1),
            settings=Settings(cache_dir=str(temp_dir / "cache")),
        )
        source = create_data_source(config)
        assert isinstance(source, ApiDataSource)
        assert source.base_url == "https://api.example.com"
        assert source.max_retries == 1
        assert source.cache is not None
