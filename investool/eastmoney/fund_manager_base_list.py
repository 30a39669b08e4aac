"""Fund manager listings and manager profiles from the mobile API."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from investool.transport import ApiError, HttpClient, random_user_agent

logger = logging.getLogger(__name__)

BASE_LIST_URL = "https://fundmapi.eastmoney.com/fundmobapi/FundMApi/FundMangerBaseList.ashx"
MSN_INFO_URL = "https://fundztapi.eastmoney.com/FundSpecialApiNew/FundMSNMangerInfo"
PAGE_SIZE = 300

MFTYPE_DESC = {
    "1": "偏债类",
    "2": "偏股类",
    "3": "指数类",
    "4": "货币类",
    "5": "QDII",
}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _text_fields(cls, data: Mapping[str, Any], skip: tuple[str, ...] = ()) -> dict:
    return {
        f.name: _text(data.get(f.name.upper()))
        for f in fields(cls)
        if f.name not in skip
    }


@dataclass(frozen=True)
class FundManagerBaseInfo:
    """Summary of a fund manager; mftype is a key of MFTYPE_DESC, sex '0' male '1' female."""

    mgrid: str = ""
    mgrname: str = ""
    mftype: str = ""
    jjgs: str = ""
    jjgsid: str = ""
    yieldse: str = ""
    w: str = ""
    m: str = ""
    q: str = ""
    hy: str = ""
    y: str = ""
    netnav: str = ""
    mgold: str = ""
    precode: str = ""
    shortname: str = ""
    newphotourl: str = ""
    sex: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FundManagerBaseInfo":
        return cls(**_text_fields(cls, data or {}))


@dataclass(frozen=True)
class FundManagerMsnInfo:
    """Detailed profile of a fund manager."""

    mgrid: str = ""
    mgrname: str = ""
    resume: str = ""
    investmentmethod: str = ""
    investmentidear: str = ""
    totaldays: str = ""
    netnav: str = ""
    fcount: str = ""
    tcount: str = ""
    precode: str = ""
    prename: str = ""
    awardnum: str = ""
    iswxpj: str = ""
    pf_3: str = ""
    yj_3: str = ""
    maxpenavgrowth: str = ""
    yieldse: str = ""
    jjgs: str = ""
    jjgsid: str = ""
    newphotourl: str = ""
    mftype: str = ""
    awardnum_jn: str = ""
    awardnum_mx: str = ""
    awardfnum: str = ""
    fcode: str = ""
    shortname: str = ""
    maxretra1: str = ""
    maxearn1: str = ""
    fmaxearn1: str = ""
    fmaxretra1: str = ""
    sex: str = ""
    wins: tuple = field(default_factory=tuple)
    mgold: str = ""
    sday: str = ""
    sct1: str = ""
    sstd1: str = ""
    srt1: str = ""
    sy1: str = ""
    sinfo1: str = ""
    strk1: str = ""
    snav: str = ""
    sgr: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FundManagerMsnInfo":
        data = data or {}
        values = _text_fields(cls, data, skip=("wins",))
        values["wins"] = tuple(dict(w) for w in data.get("WINS") or [])
        return cls(**values)


def fund_manager_base_list(
    http: HttpClient, mftype: str = "", sort_column: str = "YIELDSE"
) -> list[FundManagerBaseInfo]:
    """Fetch every manager, page by page.

    mftype: '' all, 1 bond, 2 stock, 3 index, 4 money market, 5 QDII.
    sort_column: W, M, Q, HY, Y, NETNAV, MGOLD or YIELDSE.
    """
    headers = {"user-agent": random_user_agent()}
    started = time.monotonic()
    result: list[FundManagerBaseInfo] = []
    total = 0
    index = 1
    while True:
        params = {
            "COMPANYCODES": "",
            "MFTYPE": mftype,
            "Sort": "desc",
            "SortColumn": sort_column,
            "deviceid": "fundmanager2016",
            "pageIndex": str(index),
            "pageSize": str(PAGE_SIZE),
            "plat": "Iphone",
            "product": "EFund",
            "version": "4.3.0",
        }
        resp = http.get_json(BASE_LIST_URL, params=params, headers=headers) or {}
        total = int(resp.get("TotalCount") or 0)
        datas = resp.get("Datas") or []
        if not datas:
            break
        result.extend(FundManagerBaseInfo.from_dict(item) for item in datas)
        index += 1
    logger.debug(
        "fund_manager_base_list end latency(ms)=%d totalCount=%d resultCount=%d",
        (time.monotonic() - started) * 1000,
        total,
        len(result),
    )
    return result


def query_fund_msn_manager_info(http: HttpClient, mgrid: str) -> FundManagerMsnInfo:
    """Fetch the profile of one manager."""
    params = {
        "FCODE": mgrid,
        "plat": "Iphone",
        "deviceid": "123",
        "product": "EFund",
        "version": "6.4.7",
    }
    resp = http.get_json(
        MSN_INFO_URL, params=params, headers={"user-agent": random_user_agent()}
    ) or {}
    if int(resp.get("ErrCode") or 0) != 0:
        raise ApiError(_text(resp.get("ErrMsg")))
    return FundManagerMsnInfo.from_dict(resp.get("Datas") or {})