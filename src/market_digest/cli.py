"""CLI entry point for market digest."""

import asyncio
import json
from datetime import timedelta
from pathlib import Path
from typing import Optional

import typer

from market_digest.adapters.digest import PlainTextDigestGenerator
from market_digest.adapters.sources import RSSNewsSource, YahooFinanceSource
from market_digest.config import Settings, get_settings
from market_digest.core import (
    BulletFormatter,
    FetchError,
    IdempotencyCache,
    TradingCalendar,
    get_digest_impact,
)
from market_digest.use_cases import DigestService, MarketSnapshotService


def main(
    date: Optional[str] = typer.Option(None, "--date", help="Target date (YYYY-MM-DD), defaults to today"),
    output: Optional[Path] = typer.Option(None, "--output", help="Where to write the report"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml"),
    impact_only: bool = typer.Option(False, "--impact-only", help="Only classify an existing report"),
) -> None:
    """Generate the market digest and print its theme impact."""
    settings = get_settings(config)
    report_path = output or settings.report_path

    if not impact_only:
        try:
            asyncio.run(async_run(settings, date, report_path))
        except FetchError as e:
            print(f"\n❌ Fetch failed: {e}")
            raise typer.Exit(code=1)

    print_impact(report_path, settings)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


def build_service(settings: Settings, cache: IdempotencyCache) -> DigestService:
    lex = settings.lexicon
    sources = [
        RSSNewsSource(
            name=source.name,
            url=source.url,
            max_items=settings.fetch.max_items_per_source,
            timeout=settings.fetch.timeout,
            user_agent=settings.fetch.user_agent,
            max_attempts=settings.fetch.max_attempts,
            retry_delay=settings.fetch.retry_delay,
        )
        for source in settings.enabled_sources
    ]

    return DigestService(
        sources=sources,
        formatter=BulletFormatter(
            alert_glyphs=lex.alert_glyphs,
            outlet_brackets=lex.outlet_brackets,
            analyst_surnames=lex.analyst_surnames,
            emotive_verbs=lex.emotive_verbs,
            clickbait_terms=lex.clickbait_terms,
        ),
        cache=cache,
        calendar=TradingCalendar(
            timezone=settings.calendar.timezone,
            market_close_hour=settings.calendar.market_close_hour,
            market_closed_attempts=settings.calendar.market_closed_attempts,
        ),
        digest_generator=PlainTextDigestGenerator(),
    )


async def async_run(settings: Settings, target_date: Optional[str], report_path: Path) -> None:
    """Async implementation of run command."""
    print("\n" + "=" * 70)
    print("📈 MARKET DIGEST")
    print("=" * 70)

    print(f"\n⚙️  Settings:")
    print(f"  • Timezone: {settings.calendar.timezone} (close {settings.calendar.market_close_hour}:00)")
    print(f"  • Retries: {settings.fetch.max_attempts}, timeout {settings.fetch.timeout:.0f}s")
    print(f"  • Sources: {len(settings.enabled_sources)}")

    cache = IdempotencyCache(ttl=timedelta(minutes=settings.cache.ttl_minutes))
    try:
        service = build_service(settings, cache)
        run = await service.generate_digest(target_date)
        service.save_digest(run.report, report_path)
    finally:
        cache.clear()

    print("\n" + "=" * 70)
    print("✅ DONE")
    print("=" * 70)
    print(f"📅 Query date: {run.query_date} (requested {run.target_date})")
    print(f"📰 Articles: {run.material_count}{' (cached report)' if run.from_cache else ''}")

    if settings.market_data.enabled:
        snapshot = await build_market_service(settings).collect()
        print_market_snapshot(snapshot)


def build_market_service(settings: Settings) -> MarketSnapshotService:
    market = settings.market_data
    source = YahooFinanceSource(
        base_url=market.base_url,
        timeout=settings.fetch.timeout,
        user_agent=settings.fetch.user_agent,
        max_attempts=settings.fetch.max_attempts,
        retry_delay=settings.fetch.retry_delay,
    )
    return MarketSnapshotService(
        source=source,
        tw_symbol=market.tw_symbol,
        us_symbols=list(market.us_symbols),
        fx_pair=market.fx_pair,
        indicator_config={"rsi_period": market.rsi_period} if market.indicators_enabled else None,
    )


def print_market_snapshot(snapshot: dict) -> None:
    quotes = [snapshot.get("tw_stock"), *snapshot.get("us_stock", {}).values(), snapshot.get("fx")]
    for quote in filter(None, quotes):
        data = quote["data"]
        print(
            f"  • {data['symbol']}: {data['close']:.2f} "
            f"({data['changePct']:+.2f}%, {quote['metadata']['confidence']})"
        )

    indicators = snapshot.get("tw_stock_indicators")
    if indicators:
        data = indicators["data"]
        print(f"  • MA5 {data['ma5']} / MA20 {data['ma20']} / RSI {data['rsi']}")

    if snapshot["errors"]:
        print(f"⚠️  Market data errors: {len(snapshot['errors'])}")


def print_impact(report_path: Path, settings: Settings) -> None:
    assessment = get_digest_impact(report_path, settings.theme_keywords)
    print(f"\n🧭 Impact: {assessment.impact.value}")
    print(json.dumps(assessment.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    app()
