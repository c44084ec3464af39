"""Source adapters for fetching news and market data."""

from market_digest.adapters.sources.rss_source import RSSNewsSource
from market_digest.adapters.sources.yahoo_source import YahooFinanceSource

__all__ = ["RSSNewsSource", "YahooFinanceSource"]
