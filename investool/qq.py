"""Keyword search against the QQ securities service."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from investool.transport import HttpClient

logger = logging.getLogger(__name__)

_SEARCH_URL = "https://smartbox.gtimg.cn/s3/"
_UNICODE_ESCAPE = re.compile(r"\\u(?P<hex>[0-9a-fA-F]{4})?")


@dataclass(frozen=True)
class SearchResult:
    """One matched security."""

    security_code: str
    secucode: str
    name: str


def _unescape(text: str) -> str:
    def replace(match: re.Match) -> str:
        digits = match.group("hex")
        if digits is None:
            raise ValueError(f"invalid unicode escape in {text!r}")
        return chr(int(digits, 16))

    return _UNICODE_ESCAPE.sub(replace, text)


def parse_search_response(text: str) -> list[SearchResult]:
    """Parse the `v_hint="..."` body returned by the search service."""
    values: dict[str, str] = {}
    for line in text.split(";"):
        items = line.split("=")
        if len(items) != 2:
            continue
        values[items[0].strip()] = items[1].strip().strip('"')
    results = []
    for entry in values.get("v_hint", "").split("^"):
        fields = entry.split("~")
        if len(fields) < 3:
            logger.debug("invalid search entry: %r", fields)
            continue
        market, security_code, name = fields[0], fields[1], fields[2]
        results.append(
            SearchResult(
                security_code=security_code,
                secucode=f"{security_code}.{market}",
                name=_unescape(name),
            )
        )
    return results


class QQ:
    """Client for the QQ securities service."""

    def __init__(self, http: HttpClient | None = None):
        self.http = http if http is not None else HttpClient()

    def keyword_search(self, keyword: str) -> list[SearchResult]:
        """Search by name, code or pinyin."""
        raw = self.http.get_raw(
            _SEARCH_URL, params={"v": "2", "q": keyword, "t": "all", "c": "1"}
        )
        return parse_search_response(raw.decode("utf-8", errors="replace"))