"""Services for fetching and formatting dashboard data."""

from .cache import Cache
from .data_source import (
    ApiDataSource,
    DataSource,
    DataSourceError,
    PlaceholderDataSource,
    create_data_source,
)
from .formatting import escape_markup, format_currency, generate_y_axis

__all__ = [
    "ApiDataSource",
    "Cache",
    "DataSource",
    "DataSourceError",
    "PlaceholderDataSource",
    "create_data_source",
    "escape_markup",
    "format_currency",
    "generate_y_axis",
]
