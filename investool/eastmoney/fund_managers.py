"""Fund manager listing from the web fund portfolio service."""

from __future__ import annotations

import logging
import math
import re
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from investool.eastmoney.fund_manager_base_list import (
    MFTYPE_DESC,
    FundManagerMsnInfo,
    query_fund_msn_manager_info,
)
from investool.transport import ApiError, HttpClient, random_user_agent

logger = logging.getLogger(__name__)

MANAGERS_URL = "http://fund.eastmoney.com/Data/FundDataPortfolio_Interface.aspx"
PAGE_SIZE = 20
DEFAULT_WORKERS = PAGE_SIZE

_ROW = re.compile(r'\[(".+?")\]')
_FIELD = re.compile(r'"(.*?)"')
_ROW_FIELDS = 12


@dataclass
class FundManagerInfo:
    """A fund manager with current funds, returns and profile."""

    id: str = ""
    name: str = ""
    fund_company_id: str = ""
    fund_company_name: str = ""
    fund_codes: list[str] = field(default_factory=list)
    fund_names: list[str] = field(default_factory=list)
    working_years: float = 0.0
    current_best_return: float = 0.0
    current_best_fund_code: str = ""
    current_best_fund_name: str = ""
    current_fund_scale: float = 0.0
    working_best_return: float = 0.0
    yieldse: float = 0.0
    current_best_fund_type: str = ""
    score: float = 0.0
    resume: str = ""
    award_num: int = 0


@dataclass(frozen=True)
class ManagerFilter:
    """Conditions a manager must meet; empty strings match any value."""

    name: str = ""
    min_working_years: int = 0
    min_yieldse: float = 0.0
    max_current_fund_count: int = 0
    min_scale: float = 0.0
    fund_type: str = ""


class FundManagerInfoList(list):
    """A list of fund managers with filtering and descending sorts."""

    def filter(self, params: ManagerFilter) -> "FundManagerInfoList":
        """Managers meeting every condition of params."""
        return FundManagerInfoList(m for m in self if _matches(m, params))

    def sort_by_fund_count(self) -> None:
        self.sort(key=lambda m: len(m.fund_codes), reverse=True)

    def sort_by_award_num(self) -> None:
        self.sort(key=lambda m: m.award_num, reverse=True)

    def sort_by_score(self) -> None:
        self.sort(key=lambda m: m.score, reverse=True)

    def sort_by_scale(self) -> None:
        self.sort(key=lambda m: m.current_fund_scale, reverse=True)

    def sort_by_current_best_return(self) -> None:
        self.sort(key=lambda m: m.current_best_return, reverse=True)

    def sort_by_working_best_return(self) -> None:
        self.sort(key=lambda m: m.working_best_return, reverse=True)

    def sort_by_yieldse(self) -> None:
        self.sort(key=lambda m: m.yieldse, reverse=True)


def _matches(manager: FundManagerInfo, p: ManagerFilter) -> bool:
    if p.name and p.name != manager.name:
        return False
    if p.fund_type and p.fund_type != manager.current_best_fund_type:
        return False
    return (
        manager.working_years >= p.min_working_years
        and manager.yieldse >= p.min_yieldse
        and len(manager.fund_codes) <= p.max_current_fund_count
        and manager.current_fund_scale >= p.min_scale
    )


def _present(text: str) -> bool:
    return text not in ("", "--")


def _parse_float(text: str, what: str) -> float:
    try:
        return float(text)
    except ValueError:
        logger.warning("parse %s:%r to float error", what, text)
        return 0.0


def _parse_int(text: str, what: str) -> int:
    try:
        return int(text)
    except ValueError:
        logger.warning("parse %s:%r to int error", what, text)
        return 0


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def parse_manager_row(row: str) -> FundManagerInfo:
    """Build a manager from one quoted, comma separated row of twelve fields."""
    values = _FIELD.findall(row)
    if len(values) != _ROW_FIELDS:
        raise ValueError(f"invalid fields len:{len(values)} {row}")
    totaldays = _parse_int(values[6], "totaldays") if _present(values[6]) else 0
    best_return = (
        _parse_float(values[7].removesuffix("%"), "bestReturn") if _present(values[7]) else 0.0
    )
    scale = _parse_float(values[10].removesuffix("亿元"), "scale") if _present(values[10]) else 0.0
    working_best = (
        _parse_float(values[11].removesuffix("%"), "workingBestReturn")
        if _present(values[11])
        else 0.0
    )
    return FundManagerInfo(
        id=values[0],
        name=values[1],
        fund_company_id=values[2],
        fund_company_name=values[3],
        fund_codes=values[4].split(","),
        fund_names=values[5].split(","),
        working_years=_round_half_away(totaldays / 365.0),
        current_best_return=best_return,
        current_best_fund_code=values[8],
        current_best_fund_name=values[9],
        current_fund_scale=scale,
        working_best_return=working_best,
    )


def _enrich(manager: FundManagerInfo, msn: FundManagerMsnInfo) -> None:
    manager.resume = (
        f"{msn.resume}\n投资方法:{msn.investmentmethod}\n投资理念:{msn.investmentidear}"
    ).strip()
    manager.current_best_fund_type = MFTYPE_DESC.get(msn.mftype, "")
    if _present(msn.yieldse):
        manager.yieldse = _parse_float(msn.yieldse, "yieldse")
    # The profile's representative fund takes precedence over the listing's.
    if _present(msn.precode):
        manager.current_best_fund_code = msn.precode
        manager.current_best_fund_name = msn.prename
    if _present(msn.mgold):
        manager.score = _parse_float(msn.mgold, "mgold")
    if _present(msn.awardnum):
        manager.award_num = _parse_int(msn.awardnum, "awardnum")


def _build_manager(http: HttpClient, row: str) -> FundManagerInfo | None:
    try:
        manager = parse_manager_row(row)
    except ValueError as exc:
        logger.warning("%s", exc)
        return None
    try:
        msn = query_fund_msn_manager_info(http, manager.id)
    except ApiError as exc:
        logger.error("query_fund_msn_manager_info err: %s", exc)
    else:
        _enrich(manager, msn)
    return manager


def fund_managers(
    http: HttpClient,
    ft: str = "all",
    sc: str = "penavgrowth",
    st: str = "desc",
    workers: int = DEFAULT_WORKERS,
) -> FundManagerInfoList:
    """Fetch every manager, enriched with their profile.

    ft: all, gp (stock), hh (mixed), zq (bond), sy (income).
    sc: abbname, jjgspy, totaldays, netnav or penavgrowth.
    st: asc or desc.
    """
    headers = {"user-agent": random_user_agent()}
    started = time.monotonic()
    result = FundManagerInfoList()
    index = 1
    while True:
        params = {
            "dt": "14",
            "mc": "returnjson",
            "ft": ft,
            "pn": str(PAGE_SIZE),
            "pi": str(index),
            "sc": sc,
            "st": st,
        }
        raw = http.get_raw(MANAGERS_URL, params=params, headers=headers)
        rows = _ROW.findall(raw.decode("utf-8", errors="replace"))
        if not rows:
            break
        # Finish one page before starting the next to bound concurrent work.
        with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
            managers = list(pool.map(lambda row: _build_manager(http, row), rows))
        result.extend(m for m in managers if m is not None)
        index += 1
    logger.debug(
        "fund_managers end latency(ms)=%d resultCount=%d",
        (time.monotonic() - started) * 1000,
        len(result),
    )
    return result