"""Historical price-earnings ratios."""

from __future__ import annotations

import logging
import statistics
from dataclasses import dataclass
from typing import Any, Mapping

from investool.transport import ApiError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoricalPE:
    """PE value at one date."""

    value: float
    date: str


class HistoricalPEList(list):
    """A sequence of historical PE values."""

    def mid_value(self) -> float:
        """Median of the PE values."""
        values = [item.value for item in self]
        if not values:
            raise ValueError("no values to compute median")
        return statistics.median(values)


def parse_historical_pe(payload: Mapping[str, Any]) -> HistoricalPEList:
    """Extract PE history from the valuation analysis response."""
    data = (payload or {}).get("data") or []
    if not data:
        raise ApiError("no historical pe data")
    result = HistoricalPEList()
    for item in data[0] or []:
        raw = item.get("VALUE")
        try:
            value = float("" if raw is None else raw)
        except (TypeError, ValueError):
            logger.error("historical pe value %r is not a number", raw)
            continue
        result.append(HistoricalPE(value=value, date=str(item.get("ENDATE") or "")))
    return result