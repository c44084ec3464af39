"""Tests for theme signal extraction and impact classification."""

from pathlib import Path

import pytest

from market_digest.core import DigestSignal, Impact, extract_digest_signal, get_digest_impact
from market_digest.core.digest_signal import classify_impact, dominant_theme, score_themes


def write_report(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "brief.md"
    path.write_text(text, encoding="utf-8")
    return path


def test_score_themes_zero_fills_in_keyword_order() -> None:
    score = score_themes("AI 伺服器需求強，AI 概念股上漲")
    assert list(score) == ["AI", "台積電", "Fed", "CPI", "通膨", "降息", "美股"]
    assert score["AI"] == 2
    assert score["Fed"] == 0


def test_extract_digest_signal(tmp_path: Path) -> None:
    path = write_report(tmp_path, "- AI 需求升溫\n- AI 伺服器出貨\n- Fed 官員談話\n- 輝達 AI 晶片\n")

    signal = extract_digest_signal(path)

    assert signal.dominant_theme == "AI"
    assert signal.raw_score == {
        "AI": 3, "Fed": 1, "台積電": 0, "CPI": 0, "通膨": 0, "降息": 0, "美股": 0,
    }


def test_tie_goes_to_first_keyword(tmp_path: Path) -> None:
    path = write_report(tmp_path, "台積電法說會\nAI 展望\n")

    signal = extract_digest_signal(path)

    assert signal.raw_score["AI"] == 1
    assert signal.raw_score["台積電"] == 1
    assert signal.dominant_theme == "AI"


def test_dominant_theme_prefers_higher_count() -> None:
    assert dominant_theme({"AI": 1, "台積電": 3, "Fed": 3}) == "台積電"
    assert dominant_theme({}) is None


def test_missing_report_fails_soft(tmp_path: Path) -> None:
    signal = extract_digest_signal(tmp_path / "missing.md")
    assert signal == DigestSignal(dominant_theme=None, raw_score={})


def test_blank_report_has_no_dominant_theme(tmp_path: Path) -> None:
    signal = extract_digest_signal(write_report(tmp_path, "  \n"))

    assert signal.dominant_theme is None
    assert set(signal.raw_score) == {"AI", "台積電", "Fed", "CPI", "通膨", "降息", "美股"}
    assert all(count == 0 for count in signal.raw_score.values())


def test_report_without_keywords_falls_back_to_first_keyword(tmp_path: Path) -> None:
    signal = extract_digest_signal(write_report(tmp_path, "- 油價持平\n"))
    assert signal.dominant_theme == "AI"
    assert get_digest_impact(tmp_path / "brief.md").impact == Impact.NEUTRAL


def test_custom_keywords(tmp_path: Path) -> None:
    path = write_report(tmp_path, "NVIDIA NVIDIA TSMC")
    signal = extract_digest_signal(path, keywords=["TSMC", "NVIDIA"])
    assert signal.dominant_theme == "NVIDIA"
    assert signal.raw_score == {"TSMC": 1, "NVIDIA": 2}


@pytest.mark.parametrize(
    ("theme", "score", "expected"),
    [
        ("AI", {"AI": 2}, Impact.STRUCTURAL_AI_BULLISH),
        ("AI", {"AI": 1}, Impact.NEUTRAL),
        ("Fed", {"Fed": 2}, Impact.POLICY_MACRO),
        ("CPI", {"CPI": 1}, Impact.POLICY_MACRO),
        ("台積電", {"台積電": 4}, Impact.INDEX_WEIGHT),
        ("通膨", {"通膨": 5}, Impact.NEUTRAL),
        (None, {}, Impact.NEUTRAL),
    ],
)
def test_classify_impact(theme, score, expected) -> None:
    assert classify_impact(DigestSignal(dominant_theme=theme, raw_score=score)) == expected


def test_get_digest_impact_policy(tmp_path: Path) -> None:
    path = write_report(tmp_path, "- Fed 維持利率\n- Fed 主席談話\n")

    assessment = get_digest_impact(path)

    assert assessment.dominant_theme == "Fed"
    assert assessment.impact == Impact.POLICY_MACRO
    assert assessment.raw_score["Fed"] == 2


def test_get_digest_impact_missing_report(tmp_path: Path) -> None:
    assessment = get_digest_impact(tmp_path / "missing.md")

    assert assessment.dominant_theme is None
    assert assessment.impact == Impact.NEUTRAL
    assert assessment.raw_score == {}
