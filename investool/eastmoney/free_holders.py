"""Top ten free-float shareholders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from investool.transport import ApiError, HttpClient

FREE_HOLDERS_URL = "https://datacenter.eastmoney.com/securities/api/data/v1/get"


@dataclass(frozen=True)
class FreeHolder:
    """A free-float shareholder; is_holdorg is '1' for institutions, '0' for persons."""

    end_date: str = ""
    holder_name: str = ""
    holder_code: str = ""
    hold_num: int = 0
    free_holdnum_ratio: float = 0.0
    free_ratio_qoq: str = ""
    is_holdorg: str = ""
    holder_rank: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FreeHolder":
        return cls(
            end_date=str(data.get("END_DATE") or ""),
            holder_name=str(data.get("HOLDER_NAME") or ""),
            holder_code=str(data.get("HOLDER_CODE") or ""),
            hold_num=int(data.get("HOLD_NUM") or 0),
            free_holdnum_ratio=float(data.get("FREE_HOLDNUM_RATIO") or 0.0),
            free_ratio_qoq=str(data.get("FREE_RATIO_QOQ") or ""),
            is_holdorg=str(data.get("IS_HOLDORG") or ""),
            holder_rank=int(data.get("HOLDER_RANK") or 0),
        )


def format_free_holders(holders: list[FreeHolder]) -> str:
    """Render holders as numbered lines joined by <br/>."""
    return "<br/>".join(
        f"{n}.{h.holder_name}|{h.free_holdnum_ratio:.2f}%|{h.free_ratio_qoq}"
        for n, h in enumerate(holders, 1)
    )


def query_free_holders(http: HttpClient, secu_code: str) -> list[FreeHolder]:
    """Fetch the top ten free-float shareholders of a security."""
    params = {
        "reportName": "RPT_F10_EH_FREEHOLDERS",
        "columns": "END_DATE,HOLDER_NAME,HOLDER_CODE,HOLD_NUM,FREE_HOLDNUM_RATIO,"
        "FREE_RATIO_QOQ,IS_HOLDORG,HOLDER_RANK",
        "filter": f'(SECUCODE="{secu_code.upper()}")',
        "pageSize": "10",
    }
    resp = http.get_json(FREE_HOLDERS_URL, params=params) or {}
    if resp.get("code", 0) != 0:
        raise ApiError(f"{secu_code} {resp!r}")
    result = resp.get("result") or {}
    return [FreeHolder.from_dict(item) for item in result.get("data") or []]