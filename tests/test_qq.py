from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from investool.qq import QQ, SearchResult, parse_search_response
from investool.transport import HttpClient

BODY = (
    r'v_hint="sh~600036~\u62db\u5546\u94f6\u884c~zsyh~GP-A'
    r'^hk~03968~\u62db\u5546\u94f6\u884c~zsyh~GP"'
)


def test_parse_search_response():
    results = parse_search_response(BODY)
    assert results == [
        SearchResult(security_code="600036", secucode="600036.sh", name="招商银行"),
        SearchResult(security_code="03968", secucode="03968.hk", name="招商银行"),
    ]


def test_parse_skips_short_entries_and_empty_hint():
    assert parse_search_response('v_hint="N";') == []
    assert parse_search_response("garbage") == []


def test_parse_plain_name_kept():
    results = parse_search_response('v_hint="sz~000001~PINGAN~payh~GP-A"')
    assert results[0].name == "PINGAN"
    assert results[0].secucode == "000001.sz"


def test_parse_invalid_escape_raises():
    with pytest.raises(ValueError):
        parse_search_response(r'v_hint="sh~600036~\uZZ~x~GP"')


def test_keyword_search():
    client = QQ(HttpClient())
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "https://smartbox.gtimg.cn/s3/", body=BODY.encode())
        results = client.keyword_search("招商银行")
        query = parse_qs(urlsplit(rsps.calls[0].request.url).query)
    assert query["q"] == ["招商银行"]
    assert [r.secucode for r in results] == ["600036.sh", "03968.hk"]