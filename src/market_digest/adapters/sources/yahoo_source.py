"""Yahoo Finance chart API source for quotes and technical indicators."""

import math
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar

import httpx

from market_digest.core import (
    CapabilityNotImplementedError,
    DataSourceAdapter,
    FetchError,
    FetchMetadata,
    FetchResult,
)
from market_digest.core.indicators import MIN_INDICATOR_CLOSES, moving_average, rsi

T = TypeVar("T")

DEFAULT_BASE_URL = "https://query1.finance.yahoo.com/v8/finance/chart/"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; MarketDigest/1.0)"
DEFAULT_RSI_PERIOD = 14


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def _latest(quote: Mapping[str, Any], key: str) -> Any:
    values = quote.get(key) or []
    return values[-1] if values else None


class YahooFinanceSource(DataSourceAdapter):
    """Fetch daily quotes and derived indicators from the Yahoo Finance chart API.

    The chart API carries no headlines, so ``fetch_news`` always returns an
    empty result.
    """

    emoji = "💹"

    def __init__(
        self,
        name: str = "Yahoo Finance",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        super().__init__(name, max_attempts=max_attempts, retry_delay=retry_delay, clock=clock)
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch_news(self) -> FetchResult:
        return FetchResult(
            items=(),
            metadata=FetchMetadata(source=self.name, fetched_at=self.clock(), count=0),
        )

    async def fetch_market_data(self, symbol: str) -> dict[str, Any]:
        """Fetch the latest daily bar for ``symbol`` with change vs. previous close."""
        return await self._fetch(lambda: self._market_data_once(symbol))

    async def fetch_technical_indicators(
        self, symbol: str, config: Optional[Mapping[str, Any]] = None
    ) -> dict[str, Any]:
        """Compute MA5, MA20 and RSI from the last 30 days of closes."""
        rsi_period = int((config or {}).get("rsi_period") or DEFAULT_RSI_PERIOD)
        return await self._fetch(lambda: self._indicators_once(symbol, rsi_period))

    async def _fetch(self, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await self.with_retry(operation)
        except CapabilityNotImplementedError:
            raise
        except Exception as e:
            raise FetchError(self.name, self.max_attempts, str(e)) from e

    async def _get_chart(self, symbol: str, chart_range: str) -> dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        ) as client:
            response = await client.get(
                f"{self.base_url}{symbol}",
                params={"interval": "1d", "range": chart_range},
            )
            response.raise_for_status()

        payload = response.json() or {}
        results = (payload.get("chart") or {}).get("result")
        if not results:
            raise ValueError(f"Invalid chart data structure for {symbol}")
        return results[0]

    @staticmethod
    def _quote(chart: Mapping[str, Any], symbol: str) -> Mapping[str, Any]:
        quotes = (chart.get("indicators") or {}).get("quote")
        if not quotes:
            raise ValueError(f"Missing quote data for {symbol}")

        quote = quotes[0]
        if not quote.get("close"):
            raise ValueError(f"Missing close prices for {symbol}")
        return quote

    async def _market_data_once(self, symbol: str) -> dict[str, Any]:
        chart = await self._get_chart(symbol, "5d")

        meta = chart.get("meta")
        if not meta:
            raise ValueError(f"Missing meta data for {symbol}")
        quote = self._quote(chart, symbol)

        close = _latest(quote, "close")
        prev_close = meta.get("chartPreviousClose")
        if not _is_number(close):
            raise ValueError(f"Invalid close price for {symbol}: {close}")
        if not _is_number(prev_close) or prev_close == 0:
            raise ValueError(f"Invalid previous close for {symbol}: {prev_close}")

        market_time = meta.get("regularMarketTime")
        timestamp = (
            datetime.fromtimestamp(market_time, tz=timezone.utc)
            if _is_number(market_time)
            else self.clock()
        )

        change = close - prev_close
        data = {
            "symbol": symbol,
            "close": close,
            "open": _latest(quote, "open"),
            "high": _latest(quote, "high"),
            "low": _latest(quote, "low"),
            "volume": _latest(quote, "volume"),
            "change": change,
            "changePct": change / prev_close * 100,
            "currency": meta.get("currency"),
            "timestamp": timestamp.isoformat(),
        }

        return {
            "data": data,
            "metadata": {
                "source": self.name,
                "timestamp": data["timestamp"],
                "confidence": self.assess_confidence(data, {"timestamp": timestamp}).value,
            },
        }

    async def _indicators_once(self, symbol: str, rsi_period: int) -> dict[str, Any]:
        chart = await self._get_chart(symbol, "30d")
        quote = self._quote(chart, symbol)

        closes = [c for c in quote["close"] if _is_number(c)]
        if len(closes) < MIN_INDICATOR_CLOSES:
            raise ValueError(
                f"Insufficient data for technical indicators ({len(closes)} < {MIN_INDICATOR_CLOSES})"
            )

        data = {
            "ma5": moving_average(closes, 5),
            "ma20": moving_average(closes, 20),
            "rsi": rsi(closes, rsi_period),
        }
        fetched_at = self.clock()

        return {
            "data": data,
            "metadata": {
                "source": self.name,
                "timestamp": fetched_at.isoformat(),
                "confidence": self.assess_confidence(data, {"timestamp": fetched_at}).value,
            },
        }
