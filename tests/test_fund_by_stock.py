from urllib.parse import parse_qs, urlparse

import pytest
import responses

from investool.eastmoney.fund_by_stock import (
    FUNDS_BY_STOCK_URL,
    HoldStockFund,
    query_fund_by_stock,
)
from investool.transport import HttpClient


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_from_dict():
    f = HoldStockFund.from_dict({"FCODE": "000001", "ZJZBL": 9.5, "SYL_6Y": -3.2, "CHGTYPE": "增持"})
    assert f.fcode == "000001"
    assert f.zjzbl == 9.5
    assert f.syl_6y == -3.2
    assert f.chgtype == "增持"
    assert f.chgnum == 0.0


def test_query_fund_by_stock(mocked):
    mocked.add(
        responses.GET,
        FUNDS_BY_STOCK_URL,
        json={
            "Datas": {
                "Datas": [
                    {"FCODE": "001", "STOCKNAME": "金域医学", "ZJZBL": 8.1},
                    {"FCODE": "002", "STOCKNAME": "金域医学", "ZJZBL": 5.0},
                ],
                "STOCKTEXCH": "1",
            },
            "ErrCode": 0,
        },
    )
    data = query_fund_by_stock(HttpClient(), "金域医学", "603882")
    assert [f.fcode for f in data] == ["001", "002"]
    query = parse_qs(urlparse(mocked.calls[0].request.url).query)
    assert query["name"] == ["金域医学"]
    assert query["code"] == ["603882"]
    assert query["sortName"] == ["ZJZBL"]


def test_query_without_data_is_empty(mocked):
    mocked.add(responses.GET, FUNDS_BY_STOCK_URL, json={"Datas": None, "ErrCode": 0})
    assert query_fund_by_stock(HttpClient(), "x", "000000") == []