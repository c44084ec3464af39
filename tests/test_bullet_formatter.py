"""Tests for the fact-driven bullet formatter."""

from datetime import datetime, timezone

import pytest

from market_digest.core import Article, BulletFormatter
from market_digest.core.bullet_formatter import (
    neutralize_emotive_verbs,
    strip_alert_glyphs,
    strip_analyst_prefix,
    strip_clickbait_terms,
    strip_exclamations,
    strip_outlet_tags,
)


@pytest.fixture
def formatter() -> BulletFormatter:
    return BulletFormatter()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("🚨 台股開高", "台股開高"),
        ("📌台股開高", "台股開高"),
        ("ℹ️ 台股開高", "台股開高"),
        ("⭐🚨 台股開高", "台股開高"),
        ("台股開高 🚨", "台股開高 🚨"),
    ],
)
def test_strip_alert_glyphs(raw: str, expected: str) -> None:
    assert strip_alert_glyphs(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("《經濟日報》台股開高", "台股開高"),
        ("【快訊】台股開高【更新】", "台股開高"),
        ("〈市場焦點〉台股開高", "台股開高"),
        ("台股《開高", "台股《開高"),
    ],
)
def test_strip_outlet_tags(raw: str, expected: str) -> None:
    assert strip_outlet_tags(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("陳小明：台股開高", "台股開高"),
        ("林宏:  外資回補", "外資回補"),
        ("台股開高：外資回補", "台股開高：外資回補"),
        ("外資：台股開高", "外資：台股開高"),
        ("林口長庚醫院院長：新制上路", "林口長庚醫院院長：新制上路"),
        ("黃金期貨價格：再創新高", "黃金期貨價格：再創新高"),
        ("王大明 ：台股開高", "王大明 ：台股開高"),
    ],
)
def test_strip_analyst_prefix(raw: str, expected: str) -> None:
    assert strip_analyst_prefix(raw) == expected


def test_neutralize_emotive_verbs() -> None:
    assert neutralize_emotive_verbs("美股暴跌後台股大漲") == "美股下跌後台股上漲"
    assert neutralize_emotive_verbs("重挫、重挫、再重挫") == "下跌、下跌、再下跌"
    assert neutralize_emotive_verbs("油價飆升，比特幣狂飆") == "油價上升，比特幣上漲"


def test_strip_exclamations() -> None:
    assert strip_exclamations("台股開高！還會漲嗎？?!") == "台股開高還會漲嗎"


def test_strip_clickbait_terms() -> None:
    assert strip_clickbait_terms("獨家曝光台積電新廠計畫") == "台積電新廠計畫"
    assert strip_clickbait_terms("重磅：降息時程") == "：降息時程"


def test_format_bullet_full_pipeline(formatter: BulletFormatter) -> None:
    raw = "🚨【快訊】張大同：台積電股價暴漲！獨家揭秘法人動向"
    assert formatter.format_bullet(raw) == "台積電股價上漲法人動向"


def test_format_bullet_accepts_article(formatter: BulletFormatter) -> None:
    article = Article(
        title="《工商時報》美股崩盤？",
        link="https://example.com/1",
        source="Example",
        published_at=datetime(2025, 3, 10, tzinfo=timezone.utc),
    )
    assert formatter.format_bullet(article) == "美股下跌"


@pytest.mark.parametrize(
    "raw",
    [
        "台積電股價上漲法人動向",
        "Fed 維持利率不變",
        "外資：台股開高",
        "  CPI 年增 2.8%  ",
    ],
)
def test_format_bullet_is_idempotent(formatter: BulletFormatter, raw: str) -> None:
    once = formatter.format_bullet(raw)
    assert formatter.format_bullet(once) == once


def test_format_entries_drops_empty_bullets(formatter: BulletFormatter) -> None:
    articles = [
        Article(title="🚨【快訊】", link="https://example.com/1", source="Example"),
        Article(title="台股大跌", link="https://example.com/2", source="Example"),
    ]

    entries = formatter.format_entries(articles)

    assert len(entries) == 1
    assert entries[0].bullet == "台股下跌"
    assert entries[0].article is articles[1]


def test_custom_word_lists() -> None:
    formatter = BulletFormatter(
        emotive_verbs={"soars": "rises"},
        clickbait_terms=["BREAKING "],
    )
    assert formatter.format_bullet("BREAKING Nasdaq soars!") == "Nasdaq rises"


def test_pipeline_order_is_exposed(formatter: BulletFormatter) -> None:
    names = [name for name, _ in formatter.transforms]
    assert names == [
        "strip_alert_glyphs",
        "strip_outlet_tags",
        "strip_analyst_prefix",
        "trim",
        "neutralize_emotive_verbs",
        "strip_exclamations",
        "strip_clickbait_terms",
        "trim",
    ]


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (("台積電", "法說會上修展望"), "台積電，法說會上修展望"),
        (("台積電", "法說會上修展望", "毛利率 58%"), "台積電，法說會上修展望，毛利率 58%"),
        (("台積電", "法說會上修展望", None, "AI 需求強"), "台積電，法說會上修展望，(AI 需求強)"),
        (("Fed", "維持利率", "4.5%", "降息延後"), "Fed，維持利率，4.5%，(降息延後)"),
    ],
)
def test_generate_structured_bullet(args: tuple, expected: str) -> None:
    assert BulletFormatter.generate_structured_bullet(*args) == expected
