"""Trading-day aware query date resolution."""

from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Optional, Union
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Asia/Taipei"
MARKET_CLOSE_HOUR = 15
# Distinct empty dates tried before a day is treated as a market holiday
MARKET_CLOSED_ATTEMPTS = 3

DateLike = Union[date, str]


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


class TradingCalendar:
    """Decide which trading date to query given the local market clock.

    Exchange data for the current session is only published after the close,
    so before ``market_close_hour`` a query for today is redirected to the
    previous day.
    """

    def __init__(
        self,
        timezone: str = DEFAULT_TIMEZONE,
        market_close_hour: int = MARKET_CLOSE_HOUR,
        market_closed_attempts: int = MARKET_CLOSED_ATTEMPTS,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.tz = ZoneInfo(timezone)
        self.market_close_hour = market_close_hour
        self.market_closed_attempts = market_closed_attempts
        self.clock = clock or (lambda: datetime.now(self.tz))

    def now(self) -> datetime:
        current = self.clock()
        if current.tzinfo is None:
            return current.replace(tzinfo=self.tz)
        return current.astimezone(self.tz)

    def today(self) -> date:
        return self.now().date()

    def should_use_previous_trading_day(self, query_date: Optional[DateLike] = None) -> bool:
        """True when querying today before the market has closed."""
        if query_date is not None and _to_date(query_date) != self.today():
            return False

        return self.now().hour < self.market_close_hour

    def get_effective_query_date(self, target_date: Optional[DateLike] = None) -> date:
        """Date whose data should actually be requested for ``target_date``."""
        target = _to_date(target_date) if target_date is not None else self.today()

        if self.should_use_previous_trading_day(target):
            return target - timedelta(days=1)

        return target

    def get_data_status_message(
        self, target_date: DateLike, actual_data_date: DateLike
    ) -> Optional[str]:
        """Advisory line for reports built from another day's data."""
        if _to_date(target_date) == _to_date(actual_data_date):
            return None

        actual = _to_date(actual_data_date).isoformat()
        if self.now().hour < self.market_close_hour:
            return f"📅 盤中報告（使用前一交易日數據：{actual}）"
        return f"📅 使用前一交易日數據（{actual}，當日數據尚未更新）"

    def is_market_closed(
        self, query_date: Optional[DateLike], attempted_dates: Iterable[DateLike] = ()
    ) -> bool:
        """Heuristic holiday check: enough distinct dates came back empty."""
        distinct = {_to_date(d) for d in attempted_dates}
        return len(distinct) >= self.market_closed_attempts
