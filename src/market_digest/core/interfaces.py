"""Core interfaces for adapters."""

import asyncio
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar, Union

from market_digest.core.entities import (
    Confidence,
    DigestEntry,
    FetchMetadata,
    FetchResult,
    assess_confidence,
)
from market_digest.core.errors import CapabilityNotImplementedError

T = TypeVar("T")

OPTIONAL_CAPABILITIES = ("fetch_market_data", "fetch_technical_indicators")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DataSourceAdapter(ABC):
    """Interface for fetching news, market and technical data from one source.

    ``fetch_news`` is mandatory: a variant without it cannot be instantiated.
    Market data and technical indicators are optional capabilities that raise
    ``CapabilityNotImplementedError`` unless a variant overrides them.
    """

    emoji = "📡"

    def __init__(
        self,
        name: str,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.name = name
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.clock = clock or _utcnow

    @abstractmethod
    async def fetch_news(self) -> FetchResult:
        """Fetch the latest articles, raising FetchError once retries run out."""
        pass

    async def fetch_market_data(self, symbol: str) -> dict[str, Any]:
        """Fetch quote data for a symbol."""
        raise CapabilityNotImplementedError(self.name, "fetch_market_data")

    async def fetch_technical_indicators(
        self, symbol: str, config: Optional[Mapping[str, Any]] = None
    ) -> dict[str, Any]:
        """Fetch technical indicators for a symbol."""
        raise CapabilityNotImplementedError(self.name, "fetch_technical_indicators")

    def supports(self, capability: str) -> bool:
        """Check whether this variant overrides an optional capability."""
        if capability == "fetch_news":
            return True
        if capability not in OPTIONAL_CAPABILITIES:
            return False
        return getattr(type(self), capability) is not getattr(DataSourceAdapter, capability)

    async def with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        max_attempts: Optional[int] = None,
    ) -> T:
        """Run ``operation`` with linear backoff between attempts.

        Waits ``retry_delay * attempt`` seconds after each failed attempt; the
        last failure is re-raised unchanged. Missing capabilities are never
        retried.
        """
        attempts = max_attempts if max_attempts is not None else self.max_attempts

        for attempt in range(1, attempts + 1):
            try:
                return await operation()
            except CapabilityNotImplementedError:
                raise
            except Exception as e:
                if attempt >= attempts:
                    raise
                delay = self.retry_delay * attempt
                print(f"  └─ ⚠️  {self.name}: {e}, retrying in {delay:.1f}s ({attempt}/{attempts})")
                await asyncio.sleep(delay)

        raise RuntimeError("with_retry called with no attempts")

    def assess_confidence(
        self,
        data: Any,
        metadata: Union[FetchMetadata, Mapping[str, Any]],
    ) -> Confidence:
        """Grade data freshness relative to this adapter's clock."""
        if isinstance(metadata, FetchMetadata):
            timestamp = metadata.fetched_at
        else:
            timestamp = metadata.get("timestamp") or metadata.get("fetched_at")

        if timestamp is None:
            return Confidence.LOW

        return assess_confidence(data, timestamp, self.clock())


class DigestGenerator(ABC):
    """Interface for generating digests."""

    @abstractmethod
    async def generate(
        self,
        entries: list[DigestEntry],
        digest_date: date,
        status_message: Optional[str] = None,
    ) -> str:
        """Generate digest from entries."""
        pass
