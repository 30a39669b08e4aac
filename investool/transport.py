"""HTTP access shared by every data source."""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Mapping

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60 * 5

_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/96.0.4664.45 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/15.1 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64; rv:94.0) Gecko/20100101 Firefox/94.0",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 15_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/15.1 Mobile/15E148 Safari/604.1",
    "Mozilla/5.0 (Linux; Android 11; Pixel 5) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/96.0.4664.45 Mobile Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/96.0.4664.45 Safari/537.36 Edg/96.0.1054.29",
)


class ApiError(Exception):
    """A remote call failed or returned something unusable."""


def random_user_agent() -> str:
    """Return a browser user-agent string picked at random."""
    return random.choice(_USER_AGENTS)


class HttpClient:
    """Thin wrapper around a requests session with a fixed timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s begin", method, url)
        started = time.monotonic()
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ApiError(f"{method} {url} failed: {exc}") from exc
        finally:
            latency = (time.monotonic() - started) * 1000
            logger.debug("%s %s end latency(ms)=%d", method, url, latency)
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"invalid JSON from {response.url}: {exc}") from exc

    def get_json(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET a URL and decode the JSON body."""
        return self._decode(self._request("GET", url, params=params, headers=headers))

    def get_raw(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        """GET a URL and return the undecoded body."""
        return self._request("GET", url, params=params, headers=headers).content

    def post_form(self, url: str, data: Mapping[str, str]) -> Any:
        """POST fields as multipart/form-data and decode the JSON body."""
        files = {key: (None, value) for key, value in data.items()}
        return self._decode(self._request("POST", url, files=files))

    def post_json(self, url: str, payload: Any) -> Any:
        """POST a JSON payload and decode the JSON body."""
        return self._decode(self._request("POST", url, json=payload))