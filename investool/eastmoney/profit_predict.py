"""Analyst profit forecasts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from investool.transport import ApiError, HttpClient

DATACENTER_URL = "https://datacenter.eastmoney.com/securities/api/data/get"


@dataclass(frozen=True)
class ProfitPredict:
    """Forecast EPS and PE for one year."""

    predict_year: int = 0
    eps: float = 0.0
    pe: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProfitPredict":
        return cls(
            predict_year=int(data.get("PREDICT_YEAR") or 0),
            eps=float(data.get("EPS") or 0.0),
            pe=float(data.get("PE") or 0.0),
        )


def format_profit_predicts(predicts: list[ProfitPredict]) -> str:
    """Render forecasts one per line, joined by <br/>."""
    return "<br/>".join(
        f"{p.predict_year} | 预测每股收益:{p.eps:f} 预测市盈率:{p.pe:f}" for p in predicts
    )


def query_profit_predict(http: HttpClient, secu_code: str) -> list[ProfitPredict]:
    """Fetch profit forecasts for a security."""
    params = {
        "source": "SECURITIES",
        "client": "APP",
        "type": "RPT_RES_PROFITPREDICT",
        "sty": "PREDICT_YEAR,EPS,PE",
        "filter": f'(SECUCODE="{secu_code.upper()}")',
        "sr": "1",
        "st": "PREDICT_YEAR",
    }
    resp = http.get_json(DATACENTER_URL, params=params) or {}
    if resp.get("code", 0) != 0:
        raise ApiError(f"{secu_code} {resp!r}")
    result = resp.get("result") or {}
    return [ProfitPredict.from_dict(item) for item in result.get("data") or []]