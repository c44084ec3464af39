"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional, Union

HIGH_CONFIDENCE_MAX_AGE = timedelta(hours=4)
MEDIUM_CONFIDENCE_MAX_AGE = timedelta(hours=24)


class Confidence(str, Enum):
    """Freshness tier of fetched data."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Impact(str, Enum):
    """Coarse market impact label derived from the dominant theme."""

    STRUCTURAL_AI_BULLISH = "結構性偏多（AI 主軸）"
    POLICY_MACRO = "政策／總經主導（波動升溫）"
    INDEX_WEIGHT = "權值股影響盤勢"
    NEUTRAL = "中性"


@dataclass(frozen=True)
class Article:
    """News item produced by a source adapter."""

    title: str
    link: str
    source: str
    published_at: Optional[datetime] = None
    summary: str = ""
    guid: str = ""

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Title cannot be empty")
        if not self.guid:
            object.__setattr__(self, "guid", self.link)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "publishedAt": self.published_at.isoformat() if self.published_at else None,
            "summary": self.summary,
            "source": self.source,
            "guid": self.guid,
        }


@dataclass(frozen=True)
class FetchMetadata:
    """Where and when a batch of articles was fetched."""

    source: str
    fetched_at: datetime
    count: int


@dataclass(frozen=True)
class FetchResult:
    """Articles returned by one adapter fetch.

    Confidence is not stored; it is recomputed from ``metadata.fetched_at``
    and item presence every time it is asked for.
    """

    items: tuple[Article, ...]
    metadata: FetchMetadata

    def confidence(self, now: Optional[datetime] = None) -> Confidence:
        return assess_confidence(self.items, self.metadata.fetched_at, now)

    def to_dict(self, now: Optional[datetime] = None) -> dict[str, Any]:
        """Serialize to the ``{data, metadata}`` exchange shape."""
        return {
            "data": [article.to_dict() for article in self.items],
            "metadata": {
                "source": self.metadata.source,
                "timestamp": self.metadata.fetched_at.isoformat(),
                "count": self.metadata.count,
                "confidence": self.confidence(now).value,
            },
        }


@dataclass(frozen=True)
class CacheEntry:
    """Rendered report stored by the idempotency cache."""

    report: str
    stored_at: float


@dataclass
class DigestSignal:
    """Theme keyword counts found in a rendered report."""

    dominant_theme: Optional[str]
    raw_score: dict[str, int] = field(default_factory=dict)


@dataclass
class ImpactAssessment:
    """Dominant theme plus the impact label it maps to."""

    dominant_theme: Optional[str]
    impact: Impact
    raw_score: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dominantTheme": self.dominant_theme,
            "impact": self.impact.value,
            "rawScore": dict(self.raw_score),
        }


@dataclass
class DigestEntry:
    """Single formatted line of a digest."""

    article: Article
    bullet: str


@dataclass
class DigestRun:
    """Outcome of one digest generation request."""

    report: str
    target_date: str
    query_date: str
    material_count: int
    from_cache: bool
    status_message: Optional[str] = None


def parse_timestamp(value: Union[datetime, str]) -> datetime:
    """Coerce a datetime or ISO-8601 string to an aware datetime (UTC if naive)."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def assess_confidence(
    data: Any,
    fetched_at: Union[datetime, str],
    now: Optional[datetime] = None,
) -> Confidence:
    """Grade data freshness: HIGH under 4h, MEDIUM under 24h, LOW otherwise.

    Empty or missing data is always LOW.
    """
    if not data:
        return Confidence.LOW

    now = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    age = now - parse_timestamp(fetched_at)

    if age >= MEDIUM_CONFIDENCE_MAX_AGE:
        return Confidence.LOW
    if age >= HIGH_CONFIDENCE_MAX_AGE:
        return Confidence.MEDIUM
    return Confidence.HIGH
