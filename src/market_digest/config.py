"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from market_digest.core import lexicon


@dataclass
class SourceConfig:
    """Single news feed."""
    name: str
    url: str
    enabled: bool = True


@dataclass
class FetchConfig:
    """Fetch and retry settings shared by all sources."""
    timeout: float = 10.0
    max_attempts: int = 3
    retry_delay: float = 1.0
    max_items_per_source: int = 20
    user_agent: str = "Mozilla/5.0 (compatible; MarketDigest/1.0)"


@dataclass
class CalendarConfig:
    """Trading calendar settings."""
    timezone: str = "Asia/Taipei"
    market_close_hour: int = 15
    market_closed_attempts: int = 3


@dataclass
class CacheConfig:
    """Idempotency cache settings."""
    ttl_minutes: float = 30


@dataclass
class MarketDataConfig:
    """Quote and indicator settings for the Yahoo Finance chart API."""
    enabled: bool = True
    base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart/"
    tw_symbol: str = "^TWII"
    us_symbols: list = field(default_factory=lambda: ["^GSPC", "^IXIC", "^DJI"])
    fx_pair: str = "TWD=X"
    indicators_enabled: bool = True
    rsi_period: int = 14


@dataclass
class PathsConfig:
    """Path settings."""
    report_path: Path = Path("data/digest/output/brief.md")


@dataclass
class LexiconConfig:
    """Word lists for bullet formatting and theme scoring."""
    alert_glyphs: list = field(default_factory=lambda: list(lexicon.ALERT_GLYPHS))
    outlet_brackets: list = field(default_factory=lambda: list(lexicon.OUTLET_TAG_BRACKETS))
    analyst_surnames: str = lexicon.ANALYST_SURNAMES
    emotive_verbs: dict = field(default_factory=lambda: dict(lexicon.EMOTIVE_VERBS))
    clickbait_terms: list = field(default_factory=lambda: list(lexicon.CLICKBAIT_TERMS))
    theme_keywords: list = field(default_factory=lambda: list(lexicon.THEME_KEYWORDS))


def _default_sources() -> list[SourceConfig]:
    return [
        SourceConfig(name="Yahoo 股市", url="https://tw.stock.yahoo.com/rss?category=tw-market"),
        SourceConfig(name="經濟日報", url="https://money.udn.com/rssfeed/news/1001/5591/latest"),
        SourceConfig(
            name="CNBC Markets",
            url="https://search.cnbc.com/rs/search/combinedcms/view.xml?partnerId=wrss01&id=15839069",
        ),
    ]


@dataclass
class Settings:
    """Application settings."""

    sources: list[SourceConfig] = field(default_factory=_default_sources)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    market_data: MarketDataConfig = field(default_factory=MarketDataConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    lexicon: LexiconConfig = field(default_factory=LexiconConfig)

    @property
    def enabled_sources(self) -> list[SourceConfig]:
        return [s for s in self.sources if s.enabled]

    @property
    def report_path(self) -> Path:
        return self.paths.report_path

    @property
    def timezone(self) -> str:
        return self.calendar.timezone

    @property
    def theme_keywords(self) -> list[str]:
        return self.lexicon.theme_keywords


def default_config_path() -> Path:
    return Path(os.getenv("MARKET_DIGEST_CONFIG", "config.yaml"))


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from YAML file."""
    config_path = config_path or default_config_path()
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Optional[Path] = None) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings()

    if "sources" in config:
        settings.sources = [SourceConfig(**source) for source in config["sources"] or []]

    for section in ("fetch", "calendar", "cache", "market_data", "lexicon"):
        for key, value in (config.get(section) or {}).items():
            setattr(getattr(settings, section), key, value)

    for key, value in (config.get("paths") or {}).items():
        setattr(settings.paths, key, Path(value))

    # YAML has no tuples
    settings.lexicon.outlet_brackets = [tuple(pair) for pair in settings.lexicon.outlet_brackets]

    timezone_override = os.getenv("MARKET_DIGEST_TIMEZONE")
    if timezone_override:
        settings.calendar.timezone = timezone_override

    return settings
