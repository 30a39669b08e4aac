"""Industry names offered by the stock screener."""

from __future__ import annotations

from investool.transport import ApiError, HttpClient

INDUSTRY_URL = "https://datacenter.eastmoney.com/stock/selection/api/data/get/"


def query_industry_list(http: HttpClient) -> list[str]:
    """Fetch the list of industry names."""
    form = {
        "source": "SELECT_SECURITIES",
        "client": "APP",
        "type": "RPTA_APP_INDUSTRY",
        "sty": "ALL",
    }
    resp = http.post_form(INDUSTRY_URL, form) or {}
    if resp.get("code", 0) != 0:
        raise ApiError(repr(resp))
    result = resp.get("result") or {}
    return [str(item.get("INDUSTRY") or "") for item in result.get("data") or []]