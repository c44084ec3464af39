"""RSS/Atom news feed source."""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

import feedparser
import httpx
from bs4 import BeautifulSoup

from market_digest.core import (
    Article,
    CapabilityNotImplementedError,
    DataSourceAdapter,
    FetchError,
    FetchMetadata,
    FetchResult,
)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; MarketDigest/1.0)"


class RSSNewsSource(DataSourceAdapter):
    """Fetch headlines from a single RSS or Atom feed."""

    emoji = "📰"

    def __init__(
        self,
        name: str,
        url: str,
        max_items: int = 20,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        super().__init__(name, max_attempts=max_attempts, retry_delay=retry_delay, clock=clock)
        self.url = url
        self.max_items = max_items
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch_news(self) -> FetchResult:
        """Fetch and parse the feed, retrying transient failures."""
        try:
            return await self.with_retry(self._fetch_once)
        except CapabilityNotImplementedError:
            raise
        except Exception as e:
            raise FetchError(self.name, self.max_attempts, str(e)) from e

    async def _fetch_once(self) -> FetchResult:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        ) as client:
            response = await client.get(self.url)
            response.raise_for_status()

        articles = self._parse_feed(response.content)[:self.max_items]

        return FetchResult(
            items=tuple(articles),
            metadata=FetchMetadata(
                source=self.name,
                fetched_at=self.clock(),
                count=len(articles),
            ),
        )

    def _parse_feed(self, content: bytes) -> list[Article]:
        """Map feed entries to articles, skipping entries without a title."""
        parsed = feedparser.parse(content)

        if parsed.bozo and not parsed.entries:
            raise ValueError(f"Malformed feed: {parsed.get('bozo_exception', 'unknown error')}")

        articles = []
        for entry in parsed.entries:
            title = (entry.get("title") or "").strip()
            if not title:
                continue

            link = entry.get("link", "")
            articles.append(Article(
                title=title,
                link=link,
                source=self.name,
                published_at=self._published_at(entry),
                summary=self._clean_summary(entry.get("summary", "")),
                guid=entry.get("id") or link,
            ))

        return articles

    @staticmethod
    def _published_at(entry: Any) -> Optional[datetime]:
        parsed_time = entry.get("published_parsed") or entry.get("updated_parsed")
        if not parsed_time:
            return None
        # feedparser normalizes struct_time values to UTC
        return datetime(*parsed_time[:6], tzinfo=timezone.utc)

    @staticmethod
    def _clean_summary(summary: str) -> str:
        if not summary:
            return ""
        return BeautifulSoup(summary, "html.parser").get_text(separator=" ", strip=True)
