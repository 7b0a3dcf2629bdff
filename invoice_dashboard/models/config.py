"""Configuration models using Pydantic for validation."""

from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator


class PageConfig(BaseModel):
    """Rendering options for the dashboard page."""

    delay_enabled: bool = True  # Artificial delay so the loading state is visible
    delay_seconds: float = Field(default=0.5, ge=0)
    streaming: bool = True  # False shows the page only once every region resolved

    @property
    def effective_delay(self) -> float:
        """Delay to apply before rendering, 0 when disabled."""
        return self.delay_seconds if self.delay_enabled else 0.0


class DataConfig(BaseModel):
    """Where the dashboard gets its data from."""

    source: Literal["placeholder", "api"] = "placeholder"
    base_url: str | None = None
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0)
    revenue_latency_seconds: float = Field(default=3.0, ge=0)
    invoices_latency_seconds: float = Field(default=0.0, ge=0)
    cards_latency_seconds: float = Field(default=0.0, ge=0)
    latest_invoices_limit: int = Field(default=5, ge=1, le=50)

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Validate that URL is a valid HTTP/HTTPS URL."""
        if v is None:
            return v
        try:
            parsed = urlparse(v)
            if parsed.scheme not in ("http", "https"):
                raise ValueError(f"URL must use http or https scheme, got '{parsed.scheme}'")
            if not parsed.netloc:
                raise ValueError("URL must have a valid host")
        except Exception as e:
            raise ValueError(f"Invalid URL '{v}': {e}")
        return v.rstrip("/")

    @model_validator(mode="after")
    def require_base_url_for_api(self) -> "DataConfig":
        """The api source needs somewhere to talk to."""
        if self.source == "api" and not self.base_url:
            raise ValueError("base_url is required when source is 'api'")
        return self


class Settings(BaseModel):
    """General application settings."""

    cache_ttl_minutes: int = Field(default=5, ge=0)
    cache_dir: str = ".cache"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class Config(BaseModel):
    """Main configuration model."""

    page: PageConfig = Field(default_factory=PageConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    settings: Settings = Field(default_factory=Settings)

    @classmethod
    def load(cls, path: Path | str = "config.json") -> "Config":
        """Load configuration from a JSON file."""
        import json

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    @classmethod
    def load_or_default(cls, path: Path | str = "config.json") -> "Config":
        """Load configuration or return default if file doesn't exist."""
        try:
            return cls.load(path)
        except FileNotFoundError:
            return cls()
