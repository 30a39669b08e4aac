"""Keyword search for funds."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from investool.transport import ApiError, HttpClient, random_user_agent

logger = logging.getLogger(__name__)

SEARCH_URL = "https://fundsuggest.eastmoney.com/FundCodeNew.aspx"
SEARCH_COUNT = 10

_ENTRY = re.compile(r'"(?P<code>\d{6}),.+?,(?P<name>.+?),(?P<type>.+?),"')


@dataclass(frozen=True)
class SearchFundInfo:
    """A fund found by keyword."""

    code: str
    name: str
    type: str


def parse_fund_search(text: str) -> list[SearchFundInfo]:
    """Extract matched funds from the suggestion body."""
    if len(text) < 6:
        logger.warning("search fund invalid resp: %s", text)
        raise ApiError("无法找到相关基金")
    return [
        SearchFundInfo(code=m["code"], name=m["name"], type=m["type"])
        for m in _ENTRY.finditer(text)
    ]


def search_fund(http: HttpClient, keyword: str) -> list[SearchFundInfo]:
    """Search funds by name, code or pinyin."""
    raw = http.get_raw(
        SEARCH_URL,
        params={"input": keyword, "count": str(SEARCH_COUNT), "cb": "x"},
        headers={"user-agent": random_user_agent()},
    )
    return parse_fund_search(raw.decode("utf-8", errors="replace"))