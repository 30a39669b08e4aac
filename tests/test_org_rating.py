from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from investool.eastmoney.org_rating import (
    DATACENTER_URL,
    OrgRating,
    format_org_ratings,
    query_org_rating,
)
from investool.transport import ApiError, HttpClient

ROWS = [
    {"DATE_TYPE": "近一月", "COMPRE_RATING": "买入"},
    {"DATE_TYPE": "近三月", "COMPRE_RATING": "买入"},
    {"DATE_TYPE": "近六月", "COMPRE_RATING": "增持"},
]


def test_query_org_rating():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, DATACENTER_URL, json={"code": 0, "result": {"data": ROWS}})
        data = query_org_rating(HttpClient(), "002459.sz")
        query = parse_qs(urlsplit(rsps.calls[0].request.url).query)
    assert len(data) == 3
    assert data[2] == OrgRating(date_type="近六月", compre_rating="增持")
    assert query["filter"] == ['(SECUCODE="002459.SZ")']
    assert query["type"] == ["RPT_RES_ORGRATING"]


def test_query_org_rating_error_code():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, DATACENTER_URL, json={"code": 1, "message": "bad"})
        with pytest.raises(ApiError):
            query_org_rating(HttpClient(), "002459.sz")


def test_format_org_ratings():
    ratings = [OrgRating.from_dict(row) for row in ROWS[:2]]
    assert format_org_ratings(ratings) == "近一月:买入<br/>近三月:买入"