"""Valuation status of a security by PE, PB, PS and PCF."""

from __future__ import annotations

from investool.transport import ApiError, HttpClient

DATACENTER_URL = "https://datacenter.eastmoney.com/securities/api/data/get"

_INDICATORS = (
    ("1", "市盈率"),
    ("2", "市净率"),
    ("3", "市销率"),
    ("4", "市现率"),
)


def query_valuation_status(http: HttpClient, secu_code: str) -> dict[str, str]:
    """Map each valuation indicator name to its status text."""
    secu_code = secu_code.upper()
    valuations: dict[str, str] = {}
    for indicator_type, name in _INDICATORS:
        params = {
            "type": "RPT_VALUATIONSTATUS",
            "sty": "VALATION_STATUS",
            "p": "1",
            "ps": "1",
            "var": "source=DataCenter",
            "client": "APP",
            "filter": f'(SECUCODE="{secu_code}")(INDICATOR_TYPE="{indicator_type}")',
        }
        resp = http.get_json(DATACENTER_URL, params=params) or {}
        if resp.get("code", 0) != 0:
            raise ApiError(f"{secu_code} {resp!r}")
        data = (resp.get("result") or {}).get("data") or []
        if data:
            valuations[name] = str(data[0].get("VALATION_STATUS") or "")
    return valuations