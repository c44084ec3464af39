"""Business logic use cases."""

from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

from market_digest.core import (
    Article,
    BulletFormatter,
    DataSourceAdapter,
    DigestGenerator,
    DigestRun,
    FetchError,
    IdempotencyCache,
    TradingCalendar,
)

NO_TIMESTAMP = "none"


class DigestService:
    """Collect news, reuse or render a digest, and keep the cache current."""

    def __init__(
        self,
        sources: list[DataSourceAdapter],
        formatter: BulletFormatter,
        cache: IdempotencyCache,
        calendar: TradingCalendar,
        digest_generator: DigestGenerator,
    ) -> None:
        self.sources = sources
        self.formatter = formatter
        self.cache = cache
        self.calendar = calendar
        self.digest_generator = digest_generator

    async def collect_news(self) -> list[Article]:
        """Fetch every source in order and merge articles by guid.

        A ``FetchError`` from any source aborts the run.
        """
        articles: list[Article] = []
        seen_guids: set[str] = set()

        for source in self.sources:
            emoji = getattr(source, "emoji", "🔍")
            print(f"\n{emoji} Fetching: {source.name}")

            result = await source.fetch_news()
            confidence = result.confidence()

            new_count = 0
            for article in result.items:
                if article.guid in seen_guids:
                    continue
                seen_guids.add(article.guid)
                articles.append(article)
                new_count += 1

            print(f"  └─ Found: {result.metadata.count} ({new_count} new), confidence {confidence.value}")

        print(f"\n✓ Collected {len(articles)} articles")
        return articles

    async def generate_digest(self, target_date: Optional[Union[date, str]] = None) -> DigestRun:
        """Generate the digest for ``target_date`` (today by default)."""
        target = date.fromisoformat(target_date) if isinstance(target_date, str) else target_date
        target = target or self.calendar.today()
        query_date = self.calendar.get_effective_query_date(target)
        status_message = self.calendar.get_data_status_message(target, query_date)

        if status_message:
            print(status_message)

        articles = await self.collect_news()
        material_count = len(articles)
        last_item_timestamp = self._last_item_timestamp(articles)

        cached = self.cache.get(query_date, material_count, last_item_timestamp)
        if cached is not None:
            return DigestRun(
                report=cached,
                target_date=target.isoformat(),
                query_date=query_date.isoformat(),
                material_count=material_count,
                from_cache=True,
                status_message=status_message,
            )

        entries = self.formatter.format_entries(articles)
        report = await self.digest_generator.generate(entries, query_date, status_message)
        self.cache.set(query_date, material_count, last_item_timestamp, report)

        return DigestRun(
            report=report,
            target_date=target.isoformat(),
            query_date=query_date.isoformat(),
            material_count=material_count,
            from_cache=False,
            status_message=status_message,
        )

    def save_digest(self, report: str, output_path: Path) -> None:
        """Save digest to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report, encoding="utf-8")
        print(f"Digest saved to {output_path}")

    @staticmethod
    def _last_item_timestamp(articles: list[Article]) -> str:
        timestamps = [a.published_at for a in articles if a.published_at is not None]
        if not timestamps:
            return NO_TIMESTAMP
        return max(timestamps).isoformat()


class MarketSnapshotService:
    """Collect index quotes, FX and indicators for the digest header.

    Each group is fetched independently: a ``FetchError`` in one group is
    recorded under ``errors`` and the remaining groups still run.
    """

    def __init__(
        self,
        source: DataSourceAdapter,
        tw_symbol: Optional[str] = None,
        us_symbols: Optional[list[str]] = None,
        fx_pair: Optional[str] = None,
        indicator_config: Optional[dict[str, Any]] = None,
    ) -> None:
        self.source = source
        self.tw_symbol = tw_symbol
        self.us_symbols = us_symbols or []
        self.fx_pair = fx_pair
        self.indicator_config = indicator_config

    async def collect(self) -> dict[str, Any]:
        print(f"\n{self.source.emoji} Fetching market data: {self.source.name}")
        snapshot: dict[str, Any] = {"errors": []}

        if self.tw_symbol:
            try:
                snapshot["tw_stock"] = await self.source.fetch_market_data(self.tw_symbol)
                if self.indicator_config is not None:
                    snapshot["tw_stock_indicators"] = await self.source.fetch_technical_indicators(
                        self.tw_symbol, self.indicator_config
                    )
            except FetchError as e:
                self._record_error(snapshot, "tw_stock", e)

        if self.us_symbols:
            snapshot["us_stock"] = {}
            try:
                for symbol in self.us_symbols:
                    key = symbol.replace("^", "").lower()
                    snapshot["us_stock"][key] = await self.source.fetch_market_data(symbol)
            except FetchError as e:
                self._record_error(snapshot, "us_stock", e)

        if self.fx_pair:
            try:
                snapshot["fx"] = await self.source.fetch_market_data(self.fx_pair)
            except FetchError as e:
                self._record_error(snapshot, "fx", e)

        return snapshot

    @staticmethod
    def _record_error(snapshot: dict[str, Any], group: str, error: FetchError) -> None:
        print(f"  └─ ❌ {group}: {error}")
        snapshot["errors"].append({"group": group, "source": error.source, "error": str(error)})
