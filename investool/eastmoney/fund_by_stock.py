"""Funds holding a given stock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from investool.transport import HttpClient, random_user_agent

FUNDS_BY_STOCK_URL = (
    "https://fundztapi.eastmoney.com/FundSpecialApiNew/FundSpecialApiGpGetFunds"
)


def _float(value: Any) -> float:
    return 0.0 if value is None else float(value)


def _str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class HoldStockFund:
    """A fund holding the stock, with the position's share of net value."""

    fcode: str = ""
    shortname: str = ""
    holdstock: str = ""
    stockname: str = ""
    zjzbl: float = 0.0
    tsrq: str = ""
    chgtype: str = ""
    chgnum: float = 0.0
    syl_y: float = 0.0
    syl_6y: float = 0.0
    isbuy: str = ""
    stocktexch: str = ""
    newtexch: str = ""
    zjzblchg: float = 0.0
    zjzblchgtype: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HoldStockFund":
        data = data or {}
        return cls(
            fcode=_str(data.get("FCODE")),
            shortname=_str(data.get("SHORTNAME")),
            holdstock=_str(data.get("HOLDSTOCK")),
            stockname=_str(data.get("STOCKNAME")),
            zjzbl=_float(data.get("ZJZBL")),
            tsrq=_str(data.get("TSRQ")),
            chgtype=_str(data.get("CHGTYPE")),
            chgnum=_float(data.get("CHGNUM")),
            syl_y=_float(data.get("SYL_Y")),
            syl_6y=_float(data.get("SYL_6Y")),
            isbuy=_str(data.get("ISBUY")),
            stocktexch=_str(data.get("STOCKTEXCH")),
            newtexch=_str(data.get("NEWTEXCH")),
            zjzblchg=_float(data.get("ZJZBLCHG")),
            zjzblchgtype=_str(data.get("ZJZBLCHGTYPE")),
        )


def query_fund_by_stock(http: HttpClient, stock_name: str, stock_code: str) -> list[HoldStockFund]:
    """Fetch buyable funds holding a stock, largest position first."""
    params = {
        "pageIndex": "1",
        "pageSize": "10000",
        "isBuy": "1",
        "sortName": "ZJZBL",
        "sortType": "DESC",
        "deviceid": "1",
        "version": "6.9.9",
        "product": "EFund",
        "plat": "Iphone",
        "name": stock_name,
        "code": stock_code,
    }
    resp = http.get_json(
        FUNDS_BY_STOCK_URL, params=params, headers={"user-agent": random_user_agent()}
    ) or {}
    datas = (resp.get("Datas") or {}).get("Datas") or []
    return [HoldStockFund.from_dict(item) for item in datas]