"""Stock screening by quality indicators.

Indicator values come from the latest report, which may be an annual or a
quarterly one, so compare like with like.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from investool.transport import ApiError, HttpClient

logger = logging.getLogger(__name__)

SELECTION_URL = "https://datacenter.eastmoney.com/stock/selection/api/data/get/"

_SELECT_COLUMNS = (
    "SECUCODE,SECURITY_CODE,SECURITY_NAME_ABBR,INDUSTRY,ROE_WEIGHT,NETPROFIT_YOY_RATIO,"
    "TOI_YOY_RATIO,ZXGXL,NETPROFIT_GROWTHRATE_3Y,INCOME_GROWTHRATE_3Y,LISTING_YIELD_YEAR,"
    "PBNEWMRQ,PREDICT_NETPROFIT_RATIO,PREDICT_INCOME_RATIO,TOTAL_MARKET_CAP,NEW_PRICE,"
    "LISTING_VOLATILITY_YEAR,LISTING_DATE,DEBT_ASSET_RATIO,JROA,PE9"
)


def _quoted(values: Iterable[str]) -> str:
    return ",".join(f'"{v}"' for v in values)


@dataclass(frozen=True)
class StockFilter:
    """Screening thresholds; percentages in %, market cap in hundred millions."""

    min_roe: float = 0.0
    min_netprofit_yoy_ratio: float = 0.0
    min_toi_yoy_ratio: float = 0.0
    min_zxgxl: float = 0.0
    min_netprofit_growthrate_3y: float = 0.0
    min_income_growthrate_3y: float = 0.0
    min_listing_yield_year: float = 0.0
    min_pb_new_mrq: float = 0.0
    max_debt_asset_ratio: float = 0.0
    min_predict_netprofit_ratio: float = 0.0
    min_predict_income_ratio: float = 0.0
    min_total_market_cap: float = 0.0
    industry_list: tuple[str, ...] = ()
    min_price: float = 0.0
    max_price: float = 0.0
    listing_over_5y: bool = False
    min_listing_volatility_year: float = 0.0
    exclude_cyb: bool = False
    exclude_kcb: bool = False
    special_security_name_abbr_list: tuple[str, ...] = ()
    special_security_code_list: tuple[str, ...] = ()
    min_roa: float = 0.0

    def to_query(self) -> str:
        """Render the filter expression sent to the screener."""
        if self.special_security_name_abbr_list:
            return f"(SECURITY_NAME_ABBR in ({_quoted(self.special_security_name_abbr_list)}))"
        if self.special_security_code_list:
            return f"(SECURITY_CODE in ({_quoted(self.special_security_code_list)}))"
        parts = [
            f"(ROE_WEIGHT>={self.min_roe:f})",
            f"(NETPROFIT_YOY_RATIO>={self.min_netprofit_yoy_ratio:f})",
            f"(TOI_YOY_RATIO>={self.min_toi_yoy_ratio:f})",
            f"(ZXGXL>={self.min_zxgxl:f})",
            f"(NETPROFIT_GROWTHRATE_3Y>={self.min_netprofit_growthrate_3y:f})",
            f"(INCOME_GROWTHRATE_3Y>={self.min_income_growthrate_3y:f})",
            f"(LISTING_YIELD_YEAR>={self.min_listing_yield_year:f})",
            f"(PBNEWMRQ>={self.min_pb_new_mrq:f})",
        ]
        if self.max_debt_asset_ratio:
            parts.append(f"(DEBT_ASSET_RATIO<={self.max_debt_asset_ratio:f})")
        if self.min_predict_netprofit_ratio:
            parts.append(f"(PREDICT_NETPROFIT_RATIO>={self.min_predict_netprofit_ratio:f})")
        if self.min_predict_income_ratio:
            parts.append(f"(PREDICT_INCOME_RATIO>={self.min_predict_income_ratio:f})")
        if self.min_total_market_cap:
            parts.append(f"(TOTAL_MARKET_CAP>={self.min_total_market_cap * 100000000:f})")
        if self.industry_list:
            parts.append(f"(INDUSTRY in ({_quoted(self.industry_list)}))")
        if self.min_price:
            parts.append(f"(NEW_PRICE>={self.min_price:f}))")
        if self.max_price:
            parts.append(f"(NEW_PRICE<={self.max_price:f}))")
        if self.listing_over_5y:
            parts.append('(@LISTING_DATE="OVER5Y")')
        if self.min_listing_volatility_year:
            parts.append(f"(LISTING_VOLATILITY_YEAR>={self.min_listing_volatility_year:f}))")
        if self.min_roa:
            parts.append(f"(JROA>={self.min_roa:f})")
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_query()


# Annual ROE above 8 with a quarterly ROE below it will not be selected.
DEFAULT_FILTER = StockFilter(
    min_roe=8.0,
    min_total_market_cap=100.0,
    min_pb_new_mrq=1.0,
    exclude_cyb=True,
    exclude_kcb=True,
)


def _float(value: Any) -> float:
    return 0.0 if value is None else float(value)


def _str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class StockInfo:
    """A stock returned by the screener; new_price is '-' before market open."""

    secucode: str = ""
    security_code: str = ""
    security_name_abbr: str = ""
    industry: str = ""
    roe_weight: float = 0.0
    netprofit_yoy_ratio: float = 0.0
    toi_yoy_ratio: float = 0.0
    zxgxl: float = 0.0
    netprofit_growthrate_3y: float = 0.0
    income_growthrate_3y: float = 0.0
    listing_yield_year: float = 0.0
    pb_new_mrq: float = 0.0
    predict_netprofit_ratio: float = 0.0
    predict_income_ratio: float = 0.0
    total_market_cap: float = 0.0
    new_price: Any = None
    listing_volatility_year: float = 0.0
    listing_date: str = ""
    debt_asset_ratio: float = 0.0
    roa: float = 0.0
    pe: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StockInfo":
        data = data or {}
        return cls(
            secucode=_str(data.get("SECUCODE")),
            security_code=_str(data.get("SECURITY_CODE")),
            security_name_abbr=_str(data.get("SECURITY_NAME_ABBR")),
            industry=_str(data.get("INDUSTRY")),
            roe_weight=_float(data.get("ROE_WEIGHT")),
            netprofit_yoy_ratio=_float(data.get("NETPROFIT_YOY_RATIO")),
            toi_yoy_ratio=_float(data.get("TOI_YOY_RATIO")),
            zxgxl=_float(data.get("ZXGXL")),
            netprofit_growthrate_3y=_float(data.get("NETPROFIT_GROWTHRATE_3Y")),
            income_growthrate_3y=_float(data.get("INCOME_GROWTHRATE_3Y")),
            listing_yield_year=_float(data.get("LISTING_YIELD_YEAR")),
            pb_new_mrq=_float(data.get("PBNEWMRQ")),
            predict_netprofit_ratio=_float(data.get("PREDICT_NETPROFIT_RATIO")),
            predict_income_ratio=_float(data.get("PREDICT_INCOME_RATIO")),
            total_market_cap=_float(data.get("TOTAL_MARKET_CAP")),
            new_price=data.get("NEW_PRICE"),
            listing_volatility_year=_float(data.get("LISTING_VOLATILITY_YEAR")),
            listing_date=_str(data.get("LISTING_DATE")),
            debt_asset_ratio=_float(data.get("DEBT_ASSET_RATIO")),
            roa=_float(data.get("JROA")),
            pe=_float(data.get("PE9")),
        )


def sort_by_roe(stocks: Iterable[StockInfo]) -> list[StockInfo]:
    """Stocks ordered by ROE, highest first."""
    return sorted(stocks, key=lambda s: s.roe_weight, reverse=True)


def query_selected_stocks(
    http: HttpClient, stock_filter: StockFilter | None = None
) -> list[StockInfo]:
    """Screen stocks with the given filter, or the default one."""
    stock_filter = stock_filter if stock_filter is not None else DEFAULT_FILTER
    query = stock_filter.to_query()
    form = {
        "source": "SELECT_SECURITIES",
        "client": "APP",
        "type": "RPTA_APP_STOCKSELECT",
        "sty": _SELECT_COLUMNS,
        "filter": query,
        "p": "1",
        "ps": "100000",
    }
    logger.info("query_selected_stocks filter=%s", query)
    resp = http.post_form(SELECTION_URL, form) or {}
    if resp.get("code", 0) != 0:
        raise ApiError(f"{query} {resp!r}")
    result = []
    for item in (resp.get("result") or {}).get("data") or []:
        stock = StockInfo.from_dict(item)
        if stock_filter.exclude_cyb and stock.secucode.startswith("300"):
            logger.debug("exclude CYB %s %s", stock.security_name_abbr, stock.secucode)
            continue
        if stock_filter.exclude_kcb and stock.secucode.startswith("688"):
            logger.debug("exclude KCB %s %s", stock.security_name_abbr, stock.secucode)
            continue
        result.append(stock)
    return result