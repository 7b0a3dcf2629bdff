"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "page": {
            "delay_enabled": True,
            "delay_seconds": 0.25,
            "streaming": False,
        },
        "data": {
            "source": "api",
            "base_url": "https://api.example.com/v1/",
            "timeout_seconds": 5,
            "max_retries": 2,
            "latest_invoices_limit": 3,
        },
        "settings": {
            "cache_ttl_minutes": 10,
            "cache_dir": ".cache",
            "log_level": "DEBUG",
        },
    }


@pytest.fixture
def sample_config_file(temp_dir, sample_config_data):
    """Create a sample config file for testing."""
    config_path = temp_dir / "config.json"
    with open(config_path, "w") as f:
        json.dump(sample_config_data, f)
    return config_path


@pytest.fixture
def revenue_rows():
    """Raw revenue rows as an API would return them."""
    return [
        {"month": "Jan", "revenue": 2000},
        {"month": "Feb", "revenue": 1800},
        {"month": "Mar", "revenue": 4800},
    ]


@pytest.fixture
def customer_rows():
    """Raw customer rows as an API would return them."""
    return [
        {"id": "c1", "name": "Amy Burns", "email": "amy@burns.com", "image_url": "/amy.png"},
        {"id": "c2", "name": "Lee Robinson", "email": "lee@robinson.com"},
    ]


@pytest.fixture
def invoice_rows():
    """Raw invoice rows as an API would return them."""
    return [
        {"id": "i1", "customer_id": "c1", "amount": 15795, "status": "pending", "date": "2023-01-02"},
        {"id": "i2", "customer_id": "c2", "amount": 20348, "status": "paid", "date": "2023-03-15"},
        {"id": "i3", "customer_id": "c1", "amount": 3040, "status": "paid", "date": "2023-02-10"},
    ]
