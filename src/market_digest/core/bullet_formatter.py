"""Rewrite raw headlines into neutral, fact-driven bullets.

The formatter is an ordered list of small pure transforms. Each one can be
used on its own; ``BulletFormatter`` simply runs them in sequence. Running the
pipeline on its own output is a no-op.
"""

import re
from functools import partial
from typing import Callable, Iterable, Mapping, Optional, Sequence, Union

from market_digest.core.entities import Article, DigestEntry
from market_digest.core.lexicon import (
    ALERT_GLYPHS,
    ANALYST_SURNAMES,
    CLICKBAIT_TERMS,
    EMOTIVE_VERBS,
    OUTLET_TAG_BRACKETS,
)

Transform = Callable[[str], str]

BULLET_SEPARATOR = "，"


def strip_alert_glyphs(text: str, glyphs: Sequence[str] = ALERT_GLYPHS) -> str:
    """Drop leading alert emoji such as 🚨 or 📌."""
    if not glyphs:
        return text
    # Longest first so "ℹ️" wins over its bare "ℹ" prefix
    alternation = "|".join(re.escape(g) for g in sorted(glyphs, key=len, reverse=True))
    return re.sub(rf"^(?:(?:{alternation})\s*)+", "", text)


def strip_outlet_tags(
    text: str, brackets: Sequence[Sequence[str]] = OUTLET_TAG_BRACKETS
) -> str:
    """Remove bracketed media tags like 《經濟日報》 or 【快訊】."""
    for opening, closing in brackets:
        pattern = f"{re.escape(opening)}[^{re.escape(closing)}]+{re.escape(closing)}"
        text = re.sub(pattern, "", text)
    return text


def strip_analyst_prefix(
    text: str, surnames: Union[str, Iterable[str]] = ANALYST_SURNAMES
) -> str:
    """Remove a leading ``<surname><given name>：`` attribution.

    The given name is capped at 3 characters with no whitespace. An open
    ``[^：:]+`` match would also cut headline topics that start with a
    surname character, such as ``林口長庚醫院院長：`` or ``黃金期貨價格：``.
    """
    chars = surnames if isinstance(surnames, str) else "".join(surnames)
    if not chars:
        return text
    return re.sub(rf"^[{re.escape(chars)}][^\s：:]{{1,3}}[：:]\s*", "", text)


def neutralize_emotive_verbs(
    text: str, replacements: Mapping[str, str] = EMOTIVE_VERBS
) -> str:
    """Swap loaded market verbs (暴跌, 狂飆, ...) for neutral ones."""
    for emotive, neutral in replacements.items():
        text = text.replace(emotive, neutral)
    return text


def strip_exclamations(text: str) -> str:
    return re.sub(r"[！!？?]", "", text)


def strip_clickbait_terms(text: str, terms: Iterable[str] = CLICKBAIT_TERMS) -> str:
    """Delete clickbait words while keeping the rest of the sentence."""
    for term in terms:
        text = text.replace(term, "")
    return text


def trim(text: str) -> str:
    return text.strip()


class BulletFormatter:
    """Turn an article headline into a neutral fact statement."""

    def __init__(
        self,
        alert_glyphs: Optional[Sequence[str]] = None,
        outlet_brackets: Optional[Sequence[Sequence[str]]] = None,
        analyst_surnames: Optional[Union[str, Iterable[str]]] = None,
        emotive_verbs: Optional[Mapping[str, str]] = None,
        clickbait_terms: Optional[Sequence[str]] = None,
    ) -> None:
        glyphs = ALERT_GLYPHS if alert_glyphs is None else alert_glyphs
        brackets = OUTLET_TAG_BRACKETS if outlet_brackets is None else outlet_brackets
        surnames = ANALYST_SURNAMES if analyst_surnames is None else analyst_surnames
        verbs = EMOTIVE_VERBS if emotive_verbs is None else emotive_verbs
        clickbait = CLICKBAIT_TERMS if clickbait_terms is None else clickbait_terms

        self.transforms: list[tuple[str, Transform]] = [
            ("strip_alert_glyphs", partial(strip_alert_glyphs, glyphs=glyphs)),
            ("strip_outlet_tags", partial(strip_outlet_tags, brackets=brackets)),
            ("strip_analyst_prefix", partial(strip_analyst_prefix, surnames=surnames)),
            ("trim", trim),
            ("neutralize_emotive_verbs", partial(neutralize_emotive_verbs, replacements=verbs)),
            ("strip_exclamations", strip_exclamations),
            ("strip_clickbait_terms", partial(strip_clickbait_terms, terms=clickbait)),
            ("trim", trim),
        ]

    def format_bullet(self, article: Union[Article, str]) -> str:
        """Normalize an article (or a bare headline) into a bullet string."""
        text = article.title if isinstance(article, Article) else article
        for _, transform in self.transforms:
            text = transform(text)
        return text

    def format_entries(self, articles: Iterable[Article]) -> list[DigestEntry]:
        """Format articles, dropping those whose headline normalizes to nothing."""
        entries = []
        for article in articles:
            bullet = self.format_bullet(article)
            if bullet:
                entries.append(DigestEntry(article=article, bullet=bullet))
        return entries

    @staticmethod
    def generate_structured_bullet(
        subject: str,
        event: str,
        data: Optional[str] = None,
        implication: Optional[str] = None,
    ) -> str:
        """Build ``subject，event[，data][，(implication)]``."""
        parts = [subject, event]
        if data:
            parts.append(data)
        if implication:
            parts.append(f"({implication})")
        return BULLET_SEPARATOR.join(parts)
