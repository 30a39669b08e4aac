import dataclasses
import json

import pytest
import responses

from investool.eastmoney.fund_info import FundInfo, query_fund_info
from investool.transport import ApiError, HttpClient

URL = "http://j5.dfcfw.com/sc/tfs/qt/v2.0.1/013781.json"

SAMPLE = {
    "JJXQ": {"Datas": {"FCODE": "013781", "SHORTNAME": "示例基金A", "RISKLEVEL": "4"}},
    "JDZF": {"Datas": [{"title": "Z", "syl": "1.2"}, {"title": "1N", "syl": "10.5"}]},
    "JJGM": {"Datas": [{"FSRQ": "2021-09-30", "NETNAV": "100000000", "CHANGE": "5.1"}]},
    "FHSP": {"Datas": {"FHINFO": [], "FCINFO": []}},
    "JJCC": {"Datas": {"InverstPosition": {"fundStocks": [{"GPDM": "600000"}]}}},
    "TSSJ": {"Datas": {"SHARP1": "1.5", "PROFIT_1N": "80"}},
    "JJJLNEW": {"Datas": [{"MANGER": [{"MGRID": "1", "MGRNAME": "张三"}]}]},
}


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_from_dict_sections():
    info = FundInfo.from_dict(SAMPLE)
    assert info.code == "013781"
    assert info.name == "示例基金A"
    assert [s["title"] for s in info.stage_returns] == ["Z", "1N"]
    assert info.managers[0]["MANGER"][0]["MGRNAME"] == "张三"
    assert info.scale[0]["FSRQ"] == "2021-09-30"
    assert info.positions["InverstPosition"]["fundStocks"][0]["GPDM"] == "600000"
    assert info.features["SHARP1"] == "1.5"


def test_from_dict_missing_sections():
    info = FundInfo.from_dict({"JJXQ": {"Datas": None}})
    assert info.detail == {}
    assert info.stage_returns == []
    assert info.code == ""


def test_query_fund_info(mocked):
    mocked.add(responses.GET, URL, json=SAMPLE)
    info = query_fund_info(HttpClient(), "013781")
    assert info.code == "013781"
    encoded = json.dumps(dataclasses.asdict(info), ensure_ascii=False)
    assert "013781" in encoded
    assert mocked.calls[0].request.headers["user-agent"].startswith("Mozilla/5.0")


def test_query_fund_info_unknown_fund(mocked):
    mocked.add(responses.GET, URL, json={"JJXQ": {"Datas": {"FCODE": ""}}})
    with pytest.raises(ApiError, match="013781"):
        query_fund_info(HttpClient(), "013781")


def test_query_fund_info_http_error(mocked):
    mocked.add(responses.GET, URL, status=500)
    with pytest.raises(ApiError):
        query_fund_info(HttpClient(), "013781")