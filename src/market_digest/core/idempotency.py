"""In-memory idempotency cache for rendered reports."""

import time
from datetime import date, timedelta
from typing import Callable, Optional, Union

from market_digest.core.entities import CacheEntry

DEFAULT_TTL = timedelta(minutes=30)


class IdempotencyCache:
    """Reuse a rendered report for semantically identical generation requests.

    A request is identified by its fingerprint
    ``"{date}_{material_count}_{last_item_timestamp}"``. Entries live for
    ``ttl`` and are only checked for expiry when read; there is no background
    sweep. The orchestrator owns the instance: create it at startup and
    ``clear()`` it at shutdown.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @staticmethod
    def fingerprint(
        digest_date: Union[date, str],
        material_count: int,
        last_item_timestamp: Optional[str],
    ) -> str:
        return f"{digest_date}_{material_count}_{last_item_timestamp}"

    def get(
        self,
        digest_date: Union[date, str],
        material_count: int,
        last_item_timestamp: Optional[str],
    ) -> Optional[str]:
        """Return the stored report, or None when absent or expired."""
        key = self.fingerprint(digest_date, material_count, last_item_timestamp)
        entry = self._entries.get(key)

        if entry is None:
            return None

        if self.clock() - entry.stored_at >= self.ttl.total_seconds():
            del self._entries[key]
            return None

        print(f"✅ Cache hit, reusing previous report ({key})")
        return entry.report

    def set(
        self,
        digest_date: Union[date, str],
        material_count: int,
        last_item_timestamp: Optional[str],
        report: str,
    ) -> None:
        """Store or overwrite the report for this fingerprint."""
        key = self.fingerprint(digest_date, material_count, last_item_timestamp)
        self._entries[key] = CacheEntry(report=report, stored_at=self.clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
