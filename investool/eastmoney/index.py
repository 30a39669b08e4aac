"""Index quotes and valuation from the fund special API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from investool.transport import ApiError, HttpClient, random_user_agent

INDEX_URL = "https://fundztapi.eastmoney.com/FundSpecialApiNew/FundSpecialZSB30ZSIndex"

_VALUATION_CN = {
    "-2": "低估",
    "-1": "较为低估",
    "0": "适中",
    "1": "较为高估",
    "2": "高估",
}

# attribute name -> JSON key, for every text field
_TEXT_KEYS = {
    "index_code": "IndexCode",
    "index_name": "IndexName",
    "newindextexch": "NEWINDEXTEXCH",
    "full_index_name": "FullIndexName",
    "new_price": "NewPrice",
    "new_price_date": "NewPriceDate",
    "new_chg": "NewCHG",
    "reaprofile": "reaprofile",
    "maker_name": "MakerName",
    "bkid": "BKID",
    "bk_name": "BKName",
    "indexvalua_cn": "IndexvaluaCN",
    "petim": "Petim",
    "pep100": "PEP100",
    "pb": "PB",
    "pbp100": "PBP100",
    "w": "W",
    "m": "M",
    "q": "Q",
    "hy": "HY",
    "y": "Y",
    "twy": "TWY",
    "try_": "TRY",
    "fy": "FY",
    "sy": "SY",
    "stddev_w": "STDDEV_W",
    "stddev_m": "STDDEV_M",
    "stddev_q": "STDDEV_Q",
    "stddev_hy": "STDDEV_HY",
    "stddev_y": "STDDEV_Y",
    "stddev_twy": "STDDEV_TWY",
    "p_date": "PDate",
    "isstatic": "ISSTATIC",
}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class IndexData:
    """An index: price, valuation (PE/PB and percentiles) and period returns.

    indexvalua_cn encodes the valuation: -2 low ... 2 high.
    w, m, q, hy, y, twy, try_, fy, sy are returns over one week, one month,
    three months, six months, one, two, three and five years and this year.
    """

    index_code: str = ""
    index_name: str = ""
    newindextexch: str = ""
    full_index_name: str = ""
    new_price: str = ""
    new_price_date: str = ""
    new_chg: str = ""
    reaprofile: str = ""
    maker_name: str = ""
    bkid: str = ""
    bk_name: str = ""
    is_guess: bool = False
    indexvalua_cn: str = ""
    petim: str = ""
    pep100: str = ""
    pb: str = ""
    pbp100: str = ""
    w: str = ""
    m: str = ""
    q: str = ""
    hy: str = ""
    y: str = ""
    twy: str = ""
    try_: str = ""
    fy: str = ""
    sy: str = ""
    stddev_w: str = ""
    stddev_m: str = ""
    stddev_q: str = ""
    stddev_hy: str = ""
    stddev_y: str = ""
    stddev_twy: str = ""
    p_date: str = ""
    topic_jjbid: Any = None
    isstatic: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IndexData":
        data = data or {}
        values: dict[str, Any] = {
            attr: _text(data.get(key)) for attr, key in _TEXT_KEYS.items()
        }
        values["is_guess"] = bool(data.get("IsGuess"))
        values["topic_jjbid"] = data.get("TopicJJBId")
        return cls(**values)

    def valuation_cn(self) -> str:
        """Valuation in words, or '--' when unknown."""
        return _VALUATION_CN.get(self.indexvalua_cn, "--")


def query_index(http: HttpClient, index_code: str) -> IndexData:
    """Fetch quote and valuation of an index."""
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
        INDEX_URL, params=params, headers={"user-agent": random_user_agent()}
    ) or {}
    if int(resp.get("ErrCode") or 0) != 0:
        raise ApiError(f"Index rsp code error, rsp:{resp!r}")
    return IndexData.from_dict(resp.get("Datas") or {})