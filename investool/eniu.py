"""Historical stock prices from the eniu data source."""

from __future__ import annotations

import datetime as _dt
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from investool.transport import HttpClient

logger = logging.getLogger(__name__)

_PERIOD_FACTORS = {
    "DAY": 1.0,
    "WEEK": 5.0,
    "MONTH": 21.75,
    "YEAR": 250.0,
}
_DEFAULT_PERIOD_FACTOR = 250.0


def _log_ratio(end: float, start: float) -> float:
    """Natural log of end/start, yielding inf or nan instead of raising."""
    if start == 0:
        if end == 0:
            return math.nan
        return math.inf if end > 0 else math.nan
    ratio = end / start
    if ratio == 0:
        return -math.inf
    if ratio < 0:
        return math.nan
    return math.log(ratio)


def _pstdev(values: list[float]) -> float:
    mean = sum(values) / len(values)
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))


@dataclass
class HistoricalStockPrice:
    """Daily closing prices, oldest first."""

    date: list[str] = field(default_factory=list)
    price: list[float] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HistoricalStockPrice":
        return cls(
            date=[str(d) for d in data.get("date") or []],
            price=[float(p) for p in data.get("price") or []],
        )

    def last_year_final_price(self, today: _dt.date | None = None) -> float:
        """Price on the last December trading day of the previous year, or 0."""
        today = today or _dt.date.today()
        prefix = f"{today.year - 1}-12-"
        for i in range(len(self.date) - 1, 0, -1):
            if prefix in self.date[i]:
                logger.debug("date:%s price:%f", self.date[i], self.price[i])
                return self.price[i]
        return 0.0

    def historical_volatility(self, period: str) -> float:
        """Volatility: stdev of log price ratios scaled by sqrt of the period length."""
        if not self.price:
            raise ValueError("no historical price data")
        logs = [
            _log_ratio(self.price[i], self.price[i - 1])
            for i in range(len(self.price) - 1, 0, -1)
        ]
        if not logs:
            raise ValueError("not enough historical price data")
        stdev = _pstdev(logs)
        logger.debug("stdev: %s", stdev)
        factor = _PERIOD_FACTORS.get(period.upper(), _DEFAULT_PERIOD_FACTOR)
        volatility = stdev * math.sqrt(factor)
        if math.isnan(volatility):
            raise ValueError("volatility is NaN")
        return volatility


def path_code(secu_code: str) -> str:
    """Turn '002459.SZ' into the 'sz002459' form used in URL paths."""
    parts = secu_code.split(".")
    if len(parts) != 2:
        return ""
    return parts[1].lower() + parts[0]


class Eniu:
    """Client for the eniu data source."""

    def __init__(self, http: HttpClient | None = None):
        self.http = http if http is not None else HttpClient()

    def query_historical_stock_price(self, secu_code: str) -> HistoricalStockPrice:
        """Fetch all historical prices; latest last, delayed by one day."""
        url = f"https://eniu.com/chart/pricea/{path_code(secu_code)}/t/all"
        return HistoricalStockPrice.from_dict(self.http.get_json(url) or {})