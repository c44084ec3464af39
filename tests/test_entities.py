"""Tests for core entities."""

from datetime import datetime, timedelta, timezone

import pytest

from market_digest.core import (
    Article,
    Confidence,
    FetchMetadata,
    FetchResult,
    Impact,
    ImpactAssessment,
)
from market_digest.core.entities import assess_confidence

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def make_article(**overrides) -> Article:
    fields = {
        "title": "台股上漲",
        "link": "https://example.com/news/1",
        "source": "Example",
        "published_at": NOW,
    }
    fields.update(overrides)
    return Article(**fields)


def test_article_creation() -> None:
    """Test creating a valid article."""
    article = make_article(guid="abc-1")

    assert article.title == "台股上漲"
    assert article.guid == "abc-1"
    assert article.summary == ""


def test_article_guid_defaults_to_link() -> None:
    article = make_article()
    assert article.guid == "https://example.com/news/1"


def test_article_validation() -> None:
    """Test article validation."""
    with pytest.raises(ValueError, match="Title cannot be empty"):
        make_article(title="")


def test_article_is_immutable() -> None:
    article = make_article()
    with pytest.raises(AttributeError):
        article.title = "changed"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (timedelta(hours=3), Confidence.HIGH),
        (timedelta(hours=4), Confidence.MEDIUM),
        (timedelta(hours=10), Confidence.MEDIUM),
        (timedelta(hours=24), Confidence.LOW),
        (timedelta(hours=30), Confidence.LOW),
    ],
)
def test_assess_confidence_thresholds(age: timedelta, expected: Confidence) -> None:
    assert assess_confidence([make_article()], NOW - age, NOW) == expected


def test_assess_confidence_empty_data_is_low() -> None:
    assert assess_confidence([], NOW, NOW) == Confidence.LOW
    assert assess_confidence(None, NOW, NOW) == Confidence.LOW


def test_assess_confidence_accepts_iso_strings() -> None:
    fetched_at = (NOW - timedelta(hours=5)).isoformat()
    assert assess_confidence([make_article()], fetched_at, NOW) == Confidence.MEDIUM

    # Naive timestamps are read as UTC
    assert assess_confidence([make_article()], "2025-03-10T11:00:00", NOW) == Confidence.HIGH


def test_fetch_result_confidence_is_recomputed() -> None:
    fetched_at = NOW - timedelta(hours=3)
    result = FetchResult(
        items=(make_article(),),
        metadata=FetchMetadata(source="Example", fetched_at=fetched_at, count=1),
    )

    assert result.confidence(NOW) == Confidence.HIGH
    assert result.confidence(NOW + timedelta(hours=2)) == Confidence.MEDIUM
    assert result.confidence(NOW + timedelta(days=1)) == Confidence.LOW


def test_fetch_result_to_dict() -> None:
    result = FetchResult(
        items=(make_article(),),
        metadata=FetchMetadata(source="Example", fetched_at=NOW, count=1),
    )

    data = result.to_dict(now=NOW)

    assert data["metadata"] == {
        "source": "Example",
        "timestamp": "2025-03-10T12:00:00+00:00",
        "count": 1,
        "confidence": "HIGH",
    }
    assert data["data"][0]["title"] == "台股上漲"
    assert data["data"][0]["publishedAt"] == "2025-03-10T12:00:00+00:00"
    assert data["data"][0]["guid"] == "https://example.com/news/1"


def test_impact_assessment_to_dict() -> None:
    assessment = ImpactAssessment(
        dominant_theme="Fed",
        impact=Impact.POLICY_MACRO,
        raw_score={"Fed": 2},
    )

    assert assessment.to_dict() == {
        "dominantTheme": "Fed",
        "impact": "政策／總經主導（波動升溫）",
        "rawScore": {"Fed": 2},
    }
