"""File-based cache for API payloads."""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class Cache:
    """File-based JSON cache with TTL support.

    Each entry is one file holding the payload and the time it was stored.
    """

    def __init__(self, cache_dir: Path | str = ".cache", ttl_minutes: int = 5):
        self.cache_dir = Path(cache_dir)
        self.ttl = timedelta(minutes=ttl_minutes)
        self._enabled = True

        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            # Test write permission
            probe = self.cache_dir / ".probe"
            probe.touch()
            probe.unlink()
        except (PermissionError, OSError) as e:
            logger.warning(f"Cache disabled - cannot write to {cache_dir}: {e}")
            self._enabled = False

    @property
    def enabled(self) -> bool:
        """Return whether the cache directory is usable."""
        return self._enabled

    def _get_path(self, key: str) -> Path:
        """Get cache file path for a key."""
        safe_key = "".join(c if c.isalnum() else "_" for c in key)
        return self.cache_dir / f"{safe_key}.json"

    def _read_entry(self, key: str) -> dict | None:
        path = self._get_path(key)
        if not path.exists():
            return None

        try:
            with open(path) as f:
                entry = json.load(f)
            datetime.fromisoformat(entry["cached_at"])
            if "value" not in entry:
                raise KeyError("value")
            return entry
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, OSError) as e:
            logger.warning(f"Failed to read cache for {key}: {e}")
            return None

    def get(self, key: str, allow_stale: bool = False) -> Any | None:
        """Get cached value if it exists and hasn't expired.

        With ``allow_stale`` an expired value is returned as well, which lets
        callers fall back to old data when a refresh fails.
        """
        if not self._enabled:
            return None

        entry = self._read_entry(key)
        if entry is None:
            return None

        cached_at = datetime.fromisoformat(entry["cached_at"])
        if not allow_stale and datetime.now() - cached_at > self.ttl:
            logger.debug(f"Cache expired for {key}")
            return None

        return entry["value"]

    def set(self, key: str, value: Any) -> None:
        """Cache a value."""
        if not self._enabled:
            return

        path = self._get_path(key)
        entry = {"cached_at": datetime.now().isoformat(), "value": value}

        try:
            with open(path, "w") as f:
                json.dump(entry, f)
            logger.debug(f"Cached {key}")
        except (TypeError, ValueError, OSError) as e:
            logger.warning(f"Failed to cache {key}: {e}")
            path.unlink(missing_ok=True)

    def clear(self, key: str) -> None:
        """Clear a specific cache entry."""
        self._get_path(key).unlink(missing_ok=True)

    def clear_all(self) -> None:
        """Clear all cached data."""
        for path in self.cache_dir.glob("*.json"):
            path.unlink(missing_ok=True)
