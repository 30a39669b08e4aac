from urllib.parse import parse_qs, urlsplit

import pytest
import requests
import responses
from responses import matchers

from investool.transport import ApiError, HttpClient, random_user_agent

URL = "https://api.example.com/data"


def test_default_timeout_is_five_minutes():
    assert HttpClient().timeout == 300


def test_get_json_sends_params_and_headers():
    client = HttpClient()
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            URL,
            json={"code": 0, "items": [1, 2]},
            match=[matchers.header_matcher({"user-agent": "agent-x"})],
        )
        result = client.get_json(URL, params={"ps": "10", "sr": "-1"}, headers={"user-agent": "agent-x"})
        query = parse_qs(urlsplit(rsps.calls[0].request.url).query)
    assert result == {"code": 0, "items": [1, 2]}
    assert query == {"ps": ["10"], "sr": ["-1"]}


def test_get_raw_returns_bytes():
    client = HttpClient()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL, body=b"v_hint=\"x\"")
        assert client.get_raw(URL) == b"v_hint=\"x\""


def test_post_form_sends_multipart_fields():
    client = HttpClient()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, json={"code": 0})
        result = client.post_form(URL, {"source": "SELECT_SECURITIES", "sty": "ALL"})
        request = rsps.calls[0].request
    body = request.body if isinstance(request.body, bytes) else request.body.encode()
    assert result == {"code": 0}
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="source"' in body
    assert b"SELECT_SECURITIES" in body
    assert b'name="sty"' in body


def test_post_json_sends_payload():
    client = HttpClient()
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST,
            URL,
            json={"Status": 0},
            match=[matchers.json_params_matcher({"fc": "60080901"})],
        )
        assert client.post_json(URL, {"fc": "60080901"}) == {"Status": 0}


def test_http_error_status_raises_api_error():
    client = HttpClient()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL, status=500)
        with pytest.raises(ApiError):
            client.get_json(URL)


def test_invalid_json_raises_api_error():
    client = HttpClient()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL, body="not json")
        with pytest.raises(ApiError):
            client.get_json(URL)


def test_connection_error_raises_api_error():
    client = HttpClient()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL, body=requests.ConnectionError("down"))
        with pytest.raises(ApiError):
            client.get_raw(URL)


def test_custom_session_is_used():
    session = requests.Session()
    session.headers["x-marker"] = "marked"
    client = HttpClient(timeout=5, session=session)
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            URL,
            json=[],
            match=[matchers.header_matcher({"x-marker": "marked"})],
        )
        assert client.get_json(URL) == []
    assert client.timeout == 5


def test_random_user_agent_looks_like_browser():
    agents = {random_user_agent() for _ in range(20)}
    assert all(agent.startswith("Mozilla/5.0") for agent in agents)