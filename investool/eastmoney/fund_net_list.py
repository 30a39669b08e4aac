"""Fund net value listing from the mobile API."""

from __future__ import annotations

import enum
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from investool.transport import ApiError, HttpClient, random_user_agent

logger = logging.getLogger(__name__)

FUND_LIST_URL = "http://fundmobapi.eastmoney.com/FundMNewApi/FundMNNetNewList"
PAGE_SIZE = 30
DEFAULT_WORKERS = 8
RETRY_ATTEMPTS = 3
RETRY_DELAY = 0.3


class FundType(enum.IntEnum):
    """Fund category codes used by the listing."""

    ALL = 0
    STOCK = 25
    MIX = 27
    INDEX = 26
    BOND = 31
    CURRENCY = 35
    FOF = 15
    QDII = 6
    ETF = 3
    ETF_LINK = 33
    LOF = 4
    DEAL_MONEY = 2949


@dataclass(frozen=True)
class FundListItem:
    """One fund of the listing.

    fundtype: 001 stock/index/ETF/LOF, 002 mixed/FOF, 003 bond, 005 money, 007 QDII.
    """

    fcode: str = ""
    shortname: str = ""
    fundtype: str = ""
    bfundtype: str = ""
    feature: str = ""
    fsrq: str = ""
    gpsj: str = ""
    zjl: str = ""
    opendate: str = ""
    targetyield: str = ""
    dwjz: str = ""
    hldwjz: str = ""
    ljjz: str = ""
    rzdf: str = ""
    cycle1: str = ""
    isbuy: str = ""
    bagtype: str = ""
    sgzt: str = ""
    buy: bool = False
    listtexch: str = ""
    islisttrade: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FundListItem":
        data = data or {}
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = data.get(f.name.upper())
            if f.name == "buy":
                values[f.name] = bool(raw)
            else:
                values[f.name] = "" if raw is None else str(raw)
        return cls(**values)


@dataclass(frozen=True)
class FundListPage:
    """One page of the listing with the total number of funds."""

    items: list[FundListItem] = field(default_factory=list)
    total_count: int = 0
    expansion: list[str] = field(default_factory=list)


def query_fund_list_by_page(
    http: HttpClient, fund_type: FundType, page_index: int
) -> FundListPage:
    """Fetch one page of at most 30 funds, sorted by daily change descending."""
    params = {
        "FundType": str(int(fund_type)),
        "SortColumn": "RZDF",
        "Sort": "desc",
        "pageIndex": str(page_index),
        "pageSize": str(PAGE_SIZE),
        "plat": "Iphone",
        "deviceid": str(time.time_ns()),
        "product": "EFund",
        "version": "6.4.5",
    }
    resp = http.get_json(
        FUND_LIST_URL, params=params, headers={"user-agent": random_user_agent()}
    ) or {}
    if int(resp.get("ErrCode") or 0) != 0:
        raise ApiError(f"query_fund_list_by_page ErrCode != 0: {resp!r}")
    datas = resp.get("Datas") or []
    if not datas:
        raise ApiError(f"query_fund_list_by_page ErrCode == 0 but not data: {resp!r}")
    return FundListPage(
        items=[FundListItem.from_dict(item) for item in datas[0] or []],
        total_count=int(resp.get("TotalCount") or 0),
        expansion=[str(e) for e in resp.get("Expansion") or []],
    )


def _fetch_with_retry(http: HttpClient, fund_type: FundType, index: int) -> FundListPage | None:
    for attempt in range(1, RETRY_ATTEMPTS + 1):
        try:
            return query_fund_list_by_page(http, fund_type, index)
        except ApiError as exc:
            logger.debug("retry#%d: page:%d %s", attempt, index, exc)
            if attempt < RETRY_ATTEMPTS:
                time.sleep(RETRY_DELAY)
    logger.error("query_all_fund_list page:%d failed after %d attempts", index, RETRY_ATTEMPTS)
    return None


def query_all_fund_list(
    http: HttpClient, fund_type: FundType, workers: int = DEFAULT_WORKERS
) -> list[FundListItem]:
    """Fetch the whole listing; pages that keep failing are left out."""
    first = query_fund_list_by_page(http, fund_type, 1)
    result = list(first.items)
    total = first.total_count
    page_count = (total + PAGE_SIZE - 1) // PAGE_SIZE
    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        pages = list(
            pool.map(
                lambda i: _fetch_with_retry(http, fund_type, i), range(2, page_count + 1)
            )
        )
    seen: set[str] = set()
    for page in pages:
        if page is None:
            continue
        for item in page.items:
            if item.fcode in seen:
                logger.debug("code:%s is already exist", item.fcode)
                continue
            seen.add(item.fcode)
            result.append(item)
    if len(result) != total:
        logger.error("query_all_fund_list result count:%d != total:%d", len(result), total)
    return result