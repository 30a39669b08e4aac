"""Main financial report indicators and report publication dates."""

from __future__ import annotations

import enum
import logging
import math
import statistics
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Iterable, Mapping

from investool.transport import ApiError, HttpClient

logger = logging.getLogger(__name__)

DATACENTER_URL = "https://datacenter.eastmoney.com/securities/api/data/get"
PUBLISH_DATE_URL = "https://datacenter.eastmoney.com/api/data/get"

# Average standard deviation measured over 37 banks, used as the stability bound.
STABILITY_THRESHOLD = 2.51


class FinaReportType(str, enum.Enum):
    """Kind of periodic report."""

    Q1 = "一季报"
    MID = "中报"
    Q3 = "三季报"
    YEAR = "年报"


class ValueListType(str, enum.Enum):
    """Indicator that can be extracted as a history of values."""

    NET_PROFIT = "NETPROFIT"
    GROSS_PROFIT = "GROSSPROFIT"
    REVENUE = "REVENUE"
    ROE = "ROE"
    EPS = "EPS"
    ROA = "ROA"
    MLL = "MLL"
    JLL = "JLL"


_VALUE_ATTRS = {
    ValueListType.NET_PROFIT: "parentnetprofit",
    ValueListType.GROSS_PROFIT: "mlr",
    ValueListType.REVENUE: "totaloperatereve",
    ValueListType.EPS: "epsjb",
    ValueListType.ROA: "zzcjll",
    ValueListType.ROE: "roejq",
    ValueListType.MLL: "xsmll",
    ValueListType.JLL: "xsjll",
}


def _to_float(value: Any) -> float:
    return 0.0 if value is None else float(value)


def _to_str(value: Any) -> str:
    return "" if value is None else str(value)


def _from_upper_keys(cls, data: Mapping[str, Any]):
    """Build a dataclass whose JSON keys are its field names in upper case."""
    kwargs = {}
    for f in fields(cls):
        raw = data.get(f.name.upper())
        if f.type == "float":
            kwargs[f.name] = _to_float(raw)
        elif f.type == "str":
            kwargs[f.name] = _to_str(raw)
        else:
            kwargs[f.name] = raw
    return cls(**kwargs)


@dataclass
class FinaMainData:
    """Main indicators of one financial report."""

    secucode: str = ""
    security_code: str = ""
    security_name_abbr: str = ""
    org_code: str = ""
    org_type: str = ""
    report_date: str = ""
    report_type: str = ""
    report_date_name: str = ""
    report_year: str = ""
    security_type_code: str = ""
    notice_date: str = ""
    update_date: str = ""
    currency: str = ""
    # per-share indicators
    epsjb: float = 0.0
    epsjbtz: float = 0.0
    epskcjb: float = 0.0
    epsxs: float = 0.0
    bps: float = 0.0
    bpstz: float = 0.0
    mgzbgj: float = 0.0
    mgzbgjtz: float = 0.0
    mgwfplr: float = 0.0
    mgwfplrtz: float = 0.0
    mgjyxjje: float = 0.0
    mgjyxjjetz: float = 0.0
    # growth
    totaloperatereve: float = 0.0
    totaloperaterevetz: float = 0.0
    mlr: float = 0.0
    parentnetprofit: float = 0.0
    parentnetprofittz: float = 0.0
    kcfjcxsyjlr: float = 0.0
    kcfjcxsyjlrtz: float = 0.0
    yyzsrgdhbzc: float = 0.0
    netprofitrphbzc: float = 0.0
    kfjlrgdhbzc: float = 0.0
    # profitability
    roejq: float = 0.0
    roekcjq: float = 0.0
    roejqtz: float = 0.0
    zzcjll: float = 0.0
    zzcjlltz: float = 0.0
    roic: float = 0.0
    roictz: float = 0.0
    xsmll: float = 0.0
    xsjll: float = 0.0
    # earnings quality
    yszkyysr: Any = None
    xsjxlyysr: float = 0.0
    jyxjlyysr: float = 0.0
    taxrate: float = 0.0
    # financial risk
    ld: float = 0.0
    sd: float = 0.0
    xjllb: float = 0.0
    zcfzl: float = 0.0
    zcfzltz: float = 0.0
    qycs: float = 0.0
    cqbl: float = 0.0
    # operating capability
    zzczzts: float = 0.0
    chzzts: float = 0.0
    yszkzzts: float = 0.0
    toazzl: float = 0.0
    chzzl: float = 0.0
    yszkzzl: float = 0.0
    # banks
    totaldeposits: float = 0.0
    grossloans: float = 0.0
    ltdrr: float = 0.0
    newcapitalader: float = 0.0
    hxyjbczl: float = 0.0
    nonperloan: float = 0.0
    bldkbbl: float = 0.0
    nzbje: float = 0.0
    # insurers
    total_roi: float = 0.0
    net_roi: float = 0.0
    earned_premium: float = 0.0
    compensate_expense: float = 0.0
    surrender_rate_life: float = 0.0
    solvency_ar: float = 0.0
    nbv_life: float = 0.0
    nbv_rate: float = 0.0
    nhjz_current_amt: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FinaMainData":
        return _from_upper_keys(cls, data)


def _format_float(value: float) -> str:
    """Shortest representation, plain notation for exponents in [-4, 21)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = repr(float(value))
    number = Decimal(text)
    if not -4 <= number.adjusted() < 21:
        return text
    plain = format(number, "f")
    if "." in plain:
        plain = plain.rstrip("0").rstrip(".")
    return plain


def format_value_list(values: Iterable[float]) -> str:
    """Render values joined by <br/>."""
    return "<br/>".join(_format_float(v) for v in values)


class HistoricalFinaMainData(list):
    """Report history, latest first."""

    def filter_by_report_type(self, report_type: str) -> "HistoricalFinaMainData":
        return HistoricalFinaMainData(r for r in self if r.report_type == report_type)

    def filter_by_report_year(self, year: int) -> "HistoricalFinaMainData":
        wanted = str(year)
        return HistoricalFinaMainData(r for r in self if r.report_year == wanted)

    def get_report(self, year: int, report_type: str) -> FinaMainData | None:
        wanted = str(year)
        return next(
            (r for r in self if r.report_year == wanted and r.report_type == report_type),
            None,
        )

    def current_report(self) -> FinaMainData | None:
        return self[0] if self else None

    def previous_report(self) -> FinaMainData | None:
        return self[1] if len(self) > 1 else None

    def value_list(self, value_type: str, count: int, report_type: str) -> list[float]:
        """Values of one indicator, latest first; count <= 0 means all."""
        data = self.filter_by_report_type(report_type)
        if count > 0:
            data = data[:count]
        attr = _VALUE_ATTRS.get(value_type)
        return [getattr(r, attr) if attr else -1.0 for r in data]

    def is_increasing_by_years(self, value_type: str, years_count: int, report_type: str) -> bool:
        values = self.value_list(value_type, years_count, report_type)
        return all(newer > older for newer, older in zip(values, values[1:]))

    def is_stability(self, value_type: str, years_count: int, report_type: str) -> bool:
        """True when the standard deviation stays within the stability bound."""
        values = self.value_list(value_type, years_count, report_type)
        if not values:
            logger.error("is_stability: no values to compute standard deviation")
            return False
        sd = statistics.pstdev(values)
        logger.debug("standard deviation: %s", sd)
        return sd <= STABILITY_THRESHOLD

    def mid_value(self, value_type: str, years_count: int, report_type: str) -> float:
        values = self.value_list(value_type, years_count, report_type)
        if not values:
            raise ValueError("no values to compute median")
        return statistics.median(values)

    def _avg_by_year(self, year: int, attr: str) -> float:
        data = self.filter_by_report_year(year)
        if not data:
            return 0.0
        return sum(getattr(r, attr) for r in data) / len(data)

    def avg_revenue_increasing_ratio(self, year: int) -> float:
        return self._avg_by_year(year, "totaloperaterevetz")

    def avg_eps_increasing_ratio(self, year: int) -> float:
        return self._avg_by_year(year, "epsjbtz")

    def avg_parent_netprofit_increasing_ratio(self, year: int) -> float:
        return self._avg_by_year(year, "parentnetprofittz")


@dataclass(frozen=True)
class FinaPublishDate:
    """Planned and actual publication date of a report."""

    security_code: str = ""
    security_name_abbr: str = ""
    appoint_publish_date: str = ""
    report_date: str = ""
    actual_publish_date: str = ""
    report_type_name: str = ""
    is_publish: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FinaPublishDate":
        return _from_upper_keys(cls, data)


def _result_data(resp: Any, code: str) -> list:
    resp = resp or {}
    if resp.get("code", 0) != 0:
        raise ApiError(f"{code} {resp!r}")
    return (resp.get("result") or {}).get("data") or []


def query_historical_fina_main_data(http: HttpClient, secu_code: str) -> HistoricalFinaMainData:
    """Fetch main report indicators, latest first."""
    params = {
        "filter": f'(SECUCODE="{secu_code.upper()}")',
        "client": "APP",
        "source": "HSF10",
        "type": "RPT_F10_FINANCE_MAINFINADATA",
        "sty": "APP_F10_MAINFINADATA",
        "st": "REPORT_DATE",
        "ps": "100",
        "sr": "-1",
    }
    data = _result_data(http.get_json(DATACENTER_URL, params=params), secu_code)
    return HistoricalFinaMainData(FinaMainData.from_dict(item) for item in data)


def query_fina_publish_date_list(http: HttpClient, security_code: str) -> list[FinaPublishDate]:
    """Fetch the latest report publication dates."""
    params = {
        "filter": f'(SECURITY_CODE="{security_code.upper()}")',
        "client": "APP",
        "source": "DataCenter",
        "type": "RPT_PUBLIC_BS_APPOIN",
        "sty": "SECURITY_CODE,SECURITY_NAME_ABBR,APPOINT_PUBLISH_DATE,REPORT_DATE,"
        "ACTUAL_PUBLISH_DATE,REPORT_TYPE_NAME,IS_PUBLISH",
        "st": "SECURITY_CODE,EITIME",
        "ps": "20",
        "p": "1",
        "sr": "-1,-1",
    }
    data = _result_data(http.get_json(PUBLISH_DATE_URL, params=params), security_code)
    return [FinaPublishDate.from_dict(item) for item in data]