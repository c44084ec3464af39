"""Theme signal extraction and impact classification for rendered reports."""

from pathlib import Path
from typing import Sequence, Union

from market_digest.core.entities import DigestSignal, Impact, ImpactAssessment
from market_digest.core.lexicon import (
    AI_MIN_MENTIONS,
    AI_THEME,
    INDEX_WEIGHT_THEMES,
    POLICY_THEMES,
    THEME_KEYWORDS,
)

DEFAULT_REPORT_PATH = Path("data/digest/output/brief.md")


def score_themes(text: str, keywords: Sequence[str] = THEME_KEYWORDS) -> dict[str, int]:
    """Count occurrences of each keyword, zero-filled, in keyword order."""
    return {keyword: text.count(keyword) for keyword in keywords}


def dominant_theme(raw_score: dict[str, int]) -> Union[str, None]:
    """Keyword with the highest count; ties go to the earliest keyword."""
    best = None
    for keyword, count in raw_score.items():
        if best is None or count > raw_score[best]:
            best = keyword
    return best


def extract_digest_signal(
    path: Union[str, Path] = DEFAULT_REPORT_PATH,
    keywords: Sequence[str] = THEME_KEYWORDS,
) -> DigestSignal:
    """Read a rendered report and find its dominant theme.

    An unreadable report yields ``DigestSignal(None, {})`` instead of raising;
    a blank one yields zero counts with no dominant theme.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"⚠️  Could not read report {path}: {e}")
        return DigestSignal(dominant_theme=None, raw_score={})

    raw_score = score_themes(text, keywords)

    if not text.strip():
        return DigestSignal(dominant_theme=None, raw_score=raw_score)

    return DigestSignal(dominant_theme=dominant_theme(raw_score), raw_score=raw_score)


def classify_impact(signal: DigestSignal) -> Impact:
    theme = signal.dominant_theme

    if theme == AI_THEME and signal.raw_score.get(AI_THEME, 0) >= AI_MIN_MENTIONS:
        return Impact.STRUCTURAL_AI_BULLISH
    if theme in POLICY_THEMES:
        return Impact.POLICY_MACRO
    if theme in INDEX_WEIGHT_THEMES:
        return Impact.INDEX_WEIGHT
    return Impact.NEUTRAL


def get_digest_impact(
    path: Union[str, Path] = DEFAULT_REPORT_PATH,
    keywords: Sequence[str] = THEME_KEYWORDS,
) -> ImpactAssessment:
    """Classify the market impact of the report stored at ``path``."""
    signal = extract_digest_signal(path, keywords)
    return ImpactAssessment(
        dominant_theme=signal.dominant_theme,
        impact=classify_impact(signal),
        raw_score=signal.raw_score,
    )
