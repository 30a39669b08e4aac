"""Institutional rating statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from investool.transport import ApiError, HttpClient

DATACENTER_URL = "https://datacenter.eastmoney.com/securities/api/data/get"


@dataclass(frozen=True)
class OrgRating:
    """Composite rating over one period."""

    date_type: str = ""
    compre_rating: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrgRating":
        return cls(
            date_type=str(data.get("DATE_TYPE") or ""),
            compre_rating=str(data.get("COMPRE_RATING") or ""),
        )


def format_org_ratings(ratings: list[OrgRating]) -> str:
    """Render ratings as 'period:rating' joined by <br/>."""
    return "<br/>".join(f"{r.date_type}:{r.compre_rating}" for r in ratings)


def query_org_rating(http: HttpClient, secu_code: str) -> list[OrgRating]:
    """Fetch rating statistics for a security."""
    params = {
        "source": "SECURITIES",
        "client": "APP",
        "type": "RPT_RES_ORGRATING",
        "sty": "DATE_TYPE,COMPRE_RATING",
        "filter": f'(SECUCODE="{secu_code.upper()}")',
        "sr": "1",
        "st": "DATE_TYPE_CODE",
    }
    resp = http.get_json(DATACENTER_URL, params=params) or {}
    if resp.get("code", 0) != 0:
        raise ApiError(f"{secu_code} {resp!r}")
    result = resp.get("result") or {}
    return [OrgRating.from_dict(item) for item in result.get("data") or []]