"""In-memory response cache for Parcelize.

Responses are cached per category (Hub, Products, Players) and path. Each
category has its own time-to-live; a negative TTL keeps entries for the
lifetime of the client. Entries expire on read only, nothing is evicted in
the background.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from parcelize.shared.constants import CacheCategory
from parcelize.shared.errors import DomainError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the time it was generated.

    Attributes:
        data: The normalized response.
        generated_at: Clock reading (seconds) at write time.
    """

    data: Any
    generated_at: float


class ResponseCache:
    """Category/path keyed cache with per-category expiry.

    Args:
        durations: TTL in seconds per category, negative for "never expires".
            Every CacheCategory must be present.
        clock: Time source in seconds, ``time.time`` by default.
    """

    def __init__(
        self,
        durations: Mapping[CacheCategory | str, int],
        clock: Clock | None = None,
    ) -> None:
        resolved: dict[CacheCategory, int] = {}
        for category, duration in durations.items():
            resolved[self._resolve_category(category, operation="initialize_cache")] = int(duration)

        missing = [category.value for category in CacheCategory if category not in resolved]
        if missing:
            raise DomainError(
                code=ErrorCode.CACHE_INVALID_CATEGORY,
                message=f"Cache durations missing for categories: {', '.join(missing)}",
                context=ErrorContext(operation="initialize_cache"),
            )

        self._durations = MappingProxyType(resolved)
        self._store: dict[CacheCategory, dict[str, CacheEntry]] = {
            category: {} for category in CacheCategory
        }
        self._clock = clock or time.time

    @property
    def durations(self) -> Mapping[CacheCategory, int]:
        """Read-only TTL per category."""
        return self._durations

    @staticmethod
    def _resolve_category(category: CacheCategory | str, operation: str) -> CacheCategory:
        if isinstance(category, CacheCategory):
            return category
        try:
            return CacheCategory(category)
        except ValueError as e:
            raise DomainError(
                code=ErrorCode.CACHE_INVALID_CATEGORY,
                message=f"Cache category {category!r} does not exist",
                context=ErrorContext(
                    operation=operation,
                    additional_data={"category": str(category)},
                ),
                original_error=e,
            ) from e

    def should_return_cached(self, category: CacheCategory | str, path: str) -> bool:
        """Whether a usable entry exists for ``category``/``path``.

        An entry is usable when the category never expires or when it is
        younger than the category TTL.

        Raises:
            DomainError: If the category is unknown.
        """
        resolved = self._resolve_category(category, operation="should_return_cached")
        entry = self._store[resolved].get(path)
        if entry is None:
            return False

        duration = self._durations[resolved]
        return duration < 0 or (self._clock() - entry.generated_at) < duration

    def get(self, category: CacheCategory | str, path: str) -> Any | None:
        """Return the cached data for ``category``/``path``, fresh or not."""
        resolved = self._resolve_category(category, operation="cache_get")
        entry = self._store[resolved].get(path)
        return entry.data if entry is not None else None

    def set(self, category: CacheCategory | str, path: str, value: Any) -> bool:
        """Store ``value`` unless a fresh entry already exists.

        Returns:
            True if the entry was written, False if a fresh entry was kept.
        """
        resolved = self._resolve_category(category, operation="cache_set")
        if self.should_return_cached(resolved, path):
            # a concurrent refresh already wrote a fresh value
            logger.debug("Kept fresh cache entry [%s][%s]", resolved.value, path)
            return False

        self._store[resolved][path] = CacheEntry(data=value, generated_at=self._clock())
        logger.debug("Updated cache entry [%s][%s]", resolved.value, path)
        return True

    def clear(self, category: CacheCategory | str | None = None) -> None:
        """Drop every entry of ``category``, or of all categories."""
        if category is None:
            for entries in self._store.values():
                entries.clear()
            return
        self._store[self._resolve_category(category, operation="cache_clear")].clear()

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._store.values())
