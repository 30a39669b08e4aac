"""Constituents of the CSI 300, CSI 500 and other indexes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from investool.transport import ApiError, HttpClient, random_user_agent

_COMPONENT_URL = (
    "https://datacenter-web.eastmoney.com/api/data/v1/get?sortColumns=ROE&sortTypes=-1"
    "&pageSize={size}&pageNumber=1&reportName=RPT_INDEX_TS_COMPONENT"
    "&columns=SECUCODE%2CSECURITY_CODE%2CTYPE%2CSECURITY_NAME_ABBR%2CCLOSE_PRICE"
    "%2CINDUSTRY%2CREGION%2CWEIGHT%2CEPS%2CBPS%2CROE%2CTOTAL_SHARES%2CFREE_SHARES"
    "%2CFREE_CAP&quoteColumns=f2%2Cf3&quoteType=0&source=WEB&client=WEB"
    "&filter=(TYPE%3D%22{type}%22)"
)
HS300_URL = _COMPONENT_URL.format(size=300, type=1)
ZZ500_URL = _COMPONENT_URL.format(size=500, type=3)
ZSCFG_URL = "https://fundztapi.eastmoney.com/FundSpecialApiNew/FundSpecialZSB30ZSCFG"


def _float(value: Any) -> float:
    return 0.0 if value is None else float(value)


def _str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class IndexComponent:
    """A constituent of CSI 300 or CSI 500.

    weight in %, shares in hundred millions, free_cap in hundred million yuan.
    """

    secucode: str = ""
    security_code: str = ""
    security_name_abbr: str = ""
    close_price: float = 0.0
    industry: str = ""
    region: str = ""
    weight: float = 0.0
    eps: float = 0.0
    bps: float = 0.0
    roe: float = 0.0
    total_shares: float = 0.0
    free_shares: float = 0.0
    free_cap: float = 0.0
    type: str = ""
    f2: Any = None
    f3: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IndexComponent":
        data = data or {}
        return cls(
            secucode=_str(data.get("SECUCODE")),
            security_code=_str(data.get("SECURITY_CODE")),
            security_name_abbr=_str(data.get("SECURITY_NAME_ABBR")),
            close_price=_float(data.get("CLOSE_PRICE")),
            industry=_str(data.get("INDUSTRY")),
            region=_str(data.get("REGION")),
            weight=_float(data.get("WEIGHT")),
            eps=_float(data.get("EPS")),
            bps=_float(data.get("BPS")),
            roe=_float(data.get("ROE")),
            total_shares=_float(data.get("TOTAL_SHARES")),
            free_shares=_float(data.get("FREE_SHARES")),
            free_cap=_float(data.get("FREE_CAP")),
            type=_str(data.get("TYPE")),
            f2=data.get("f2"),
            f3=data.get("f3"),
        )


@dataclass(frozen=True)
class IndexConstituent:
    """A constituent of an arbitrary index; marketcappct is the weight in %."""

    index_code: str = ""
    index_name: str = ""
    stock_code: str = ""
    stock_name: str = ""
    snewprice: str = ""
    snewchg: str = ""
    marketcappct: str = ""
    stock_texch: str = ""
    dctexch: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IndexConstituent":
        data = data or {}
        return cls(
            index_code=_str(data.get("IndexCode")),
            index_name=_str(data.get("IndexName")),
            stock_code=_str(data.get("StockCode")),
            stock_name=_str(data.get("StockName")),
            snewprice=_str(data.get("SNEWPRICE")),
            snewchg=_str(data.get("SNEWCHG")),
            marketcappct=_str(data.get("MARKETCAPPCT")),
            stock_texch=_str(data.get("StockTEXCH")),
            dctexch=_str(data.get("DCTEXCH")),
        )


def _components(http: HttpClient, url: str, expected: int, name: str) -> list[IndexComponent]:
    resp = http.get_json(url, headers={"user-agent": random_user_agent()}) or {}
    if resp.get("code", 0) != 0:
        raise ApiError(f"{name} rsp code error, rsp:{resp!r}")
    data = (resp.get("result") or {}).get("data") or []
    if len(data) != expected:
        raise ApiError(f"{name} rsp data len != {expected}, len={len(data)}")
    return [IndexComponent.from_dict(item) for item in data]


def hs300(http: HttpClient) -> list[IndexComponent]:
    """The 300 constituents of CSI 300, highest ROE first."""
    return _components(http, HS300_URL, 300, "HS300")


def zz500(http: HttpClient) -> list[IndexComponent]:
    """The 500 constituents of CSI 500, highest ROE first."""
    return _components(http, ZZ500_URL, 500, "ZZ500")


def zscfg(http: HttpClient, index_code: str) -> list[IndexConstituent]:
    """Constituents of the given index."""
    params = {
        "IndexCode": index_code,
        "Version": "6.5.5",
        "deviceid": "-",
        "pageIndex": "1",
        "pageSize": "10000",
        "plat": "Iphone",
        "product": "EFund",
    }
    resp = http.get_json(
        ZSCFG_URL, params=params, headers={"user-agent": random_user_agent()}
    ) or {}
    if int(resp.get("ErrCode") or 0) != 0:
        raise ApiError(f"ZSCFG rsp code error, rsp:{resp!r}")
    datas = resp.get("Datas") or []
    total = int(resp.get("TotalCount") or 0)
    if len(datas) != total:
        raise ApiError(f"ZSCFG rsp data len:{len(datas)} != TotalCount:{total}")
    return [IndexConstituent.from_dict(item) for item in datas]