"""Core domain layer."""

from market_digest.core.bullet_formatter import BulletFormatter
from market_digest.core.digest_signal import (
    extract_digest_signal,
    get_digest_impact,
)
from market_digest.core.entities import (
    Article,
    CacheEntry,
    Confidence,
    DigestEntry,
    DigestRun,
    DigestSignal,
    FetchMetadata,
    FetchResult,
    Impact,
    ImpactAssessment,
)
from market_digest.core.errors import (
    CapabilityNotImplementedError,
    FetchError,
    MarketDigestError,
)
from market_digest.core.idempotency import IdempotencyCache
from market_digest.core.interfaces import DataSourceAdapter, DigestGenerator
from market_digest.core.trading_calendar import TradingCalendar

__all__ = [
    "Article",
    "CacheEntry",
    "Confidence",
    "DigestEntry",
    "DigestRun",
    "DigestSignal",
    "FetchMetadata",
    "FetchResult",
    "Impact",
    "ImpactAssessment",
    "MarketDigestError",
    "FetchError",
    "CapabilityNotImplementedError",
    "DataSourceAdapter",
    "DigestGenerator",
    "IdempotencyCache",
    "TradingCalendar",
    "BulletFormatter",
    "extract_digest_signal",
    "get_digest_impact",
]
