"""Keyword search against the Sina finance service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote

from investool.transport import ApiError, HttpClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """One matched security; market 11=A share, 31=HK, 41=US, 103=UK."""

    security_code: str
    secucode: str
    name: str
    market: int


def parse_search_response(raw: bytes) -> list[SearchResult]:
    """Parse the GBK-encoded suggestion body, A shares first."""
    text = raw.decode("gbk", errors="replace")
    parts = text.split("=")
    if len(parts) != 2:
        raise ApiError("search resp invalid:" + text)
    results = []
    for line in parts[1].strip('"').split(";"):
        items = line.split(",")
        if len(items) < 9:
            continue
        try:
            market = int(items[1])
        except ValueError:
            logger.error("market:%s is not an integer", items[1])
            market = 0
        tagged = items[3]
        results.append(
            SearchResult(
                security_code=items[2],
                secucode=f"{tagged[2:]}.{tagged[:2]}",
                name=items[6],
                market=market,
            )
        )
    return sorted(results, key=lambda r: r.market)


class Sina:
    """Client for the Sina finance service."""

    def __init__(self, http: HttpClient | None = None):
        self.http = http if http is not None else HttpClient()

    def keyword_search(self, keyword: str) -> list[SearchResult]:
        """Search by name, code or pinyin."""
        url = f"https://suggest3.sinajs.cn/suggest/key={quote(keyword)}"
        return parse_search_response(self.http.get_raw(url))