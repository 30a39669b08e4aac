"""Fund details from the fund data service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from investool.transport import ApiError, HttpClient, random_user_agent

FUND_INFO_URL = "http://j5.dfcfw.com/sc/tfs/qt/v2.0.1/{code}.json"


def _datas(data: Mapping[str, Any], key: str, default: Any) -> Any:
    section = data.get(key) or {}
    value = section.get("Datas")
    return default if value is None else value


@dataclass
class FundInfo:
    """All sections describing a fund, each as returned by the service.

    detail: basic facts (FCODE, SHORTNAME, FTYPE, DWJZ, RISKLEVEL, ...)
    stage_returns: returns over periods (title Z, Y, 3Y, 6Y, 1N, 2N, 3N, 5N, JN, LN)
    managers: entries holding a MANGER list of manager records
    scale: net asset history (FSRQ, NETNAV, CHANGE, ISSUM)
    dividends: FHINFO and FCINFO lists
    positions: InverstPosition, AssetAllocation and SectorAllocation
    features: sharpe ratios, drawdowns, volatility and profit odds
    """

    detail: dict = field(default_factory=dict)
    stage_returns: list = field(default_factory=list)
    managers: list = field(default_factory=list)
    scale: list = field(default_factory=list)
    dividends: dict = field(default_factory=dict)
    positions: dict = field(default_factory=dict)
    features: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FundInfo":
        data = data or {}
        return cls(
            detail=dict(_datas(data, "JJXQ", {})),
            stage_returns=list(_datas(data, "JDZF", [])),
            managers=list(_datas(data, "JJJLNEW", [])),
            scale=list(_datas(data, "JJGM", [])),
            dividends=dict(_datas(data, "FHSP", {})),
            positions=dict(_datas(data, "JJCC", {})),
            features=dict(_datas(data, "TSSJ", {})),
        )

    @property
    def code(self) -> str:
        return str(self.detail.get("FCODE") or "")

    @property
    def name(self) -> str:
        return str(self.detail.get("SHORTNAME") or "")


def query_fund_info(http: HttpClient, fund_code: str) -> FundInfo:
    """Fetch the details of one fund."""
    url = FUND_INFO_URL.format(code=fund_code)
    resp = http.get_json(url, headers={"user-agent": random_user_agent()})
    info = FundInfo.from_dict(resp or {})
    if not info.code:
        raise ApiError(f"无法获取基金信息({fund_code})")
    return info