import json
from urllib.parse import parse_qs, urlparse

import pytest
import responses

from investool.eastmoney.fund_manager_base_list import (
    BASE_LIST_URL,
    MSN_INFO_URL,
    FundManagerBaseInfo,
    FundManagerMsnInfo,
    fund_manager_base_list,
    query_fund_msn_manager_info,
)
from investool.transport import ApiError, HttpClient

PAGES = {
    "1": [
        {"MGRID": "1", "MGRNAME": "甲", "MFTYPE": "2", "YIELDSE": "20.5"},
        {"MGRID": "2", "MGRNAME": "乙", "MFTYPE": "1", "YIELDSE": "8.1"},
    ],
    "2": [{"MGRID": "3", "MGRNAME": "丙", "MFTYPE": "3", "YIELDSE": None}],
}


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _page_callback(request):
    query = parse_qs(urlparse(request.url).query)
    index = query["pageIndex"][0]
    body = {"Datas": PAGES.get(index, []), "ErrCode": 0, "TotalCount": 3}
    return 200, {}, json.dumps(body)


def test_base_info_from_dict():
    info = FundManagerBaseInfo.from_dict({"MGRID": "30040544", "NETNAV": 123.4, "SEX": "1"})
    assert info.mgrid == "30040544"
    assert info.netnav == "123.4"
    assert info.sex == "1"
    assert info.jjgs == ""


def test_fund_manager_base_list_pages(mocked):
    mocked.add_callback(responses.GET, BASE_LIST_URL, callback=_page_callback)
    data = fund_manager_base_list(HttpClient(), "", "YIELDSE")
    assert [m.mgrid for m in data] == ["1", "2", "3"]
    assert data[2].yieldse == ""
    assert len(mocked.calls) == 3
    query = parse_qs(urlparse(mocked.calls[0].request.url).query)
    assert query["SortColumn"] == ["YIELDSE"]
    assert query["pageSize"] == ["300"]


def test_fund_manager_base_list_http_error(mocked):
    mocked.add(responses.GET, BASE_LIST_URL, status=502)
    with pytest.raises(ApiError):
        fund_manager_base_list(HttpClient(), "", "YIELDSE")


def test_query_fund_msn_manager_info(mocked):
    body = {
        "Datas": {
            "MGRID": "30040544",
            "MGRNAME": "张三",
            "RESUME": "简历",
            "MFTYPE": "2",
            "AWARDNUM": "3",
            "PF_3": "80",
            "WINS": [{"FCODE": "000001", "AWARDNAME": "金牛奖"}],
        },
        "ErrCode": 0,
        "Success": True,
    }
    mocked.add(responses.GET, MSN_INFO_URL, json=body)
    info = query_fund_msn_manager_info(HttpClient(), "30040544")
    assert info.mgrname == "张三"
    assert info.awardnum == "3"
    assert info.pf_3 == "80"
    assert info.wins[0]["AWARDNAME"] == "金牛奖"
    query = parse_qs(urlparse(mocked.calls[0].request.url).query)
    assert query["FCODE"] == ["30040544"]


def test_query_fund_msn_manager_info_error_code(mocked):
    mocked.add(responses.GET, MSN_INFO_URL, json={"ErrCode": 1, "ErrMsg": "bad id"})
    with pytest.raises(ApiError, match="bad id"):
        query_fund_msn_manager_info(HttpClient(), "x")


def test_msn_info_from_empty():
    info = FundManagerMsnInfo.from_dict({})
    assert info.wins == ()
    assert info.resume == ""