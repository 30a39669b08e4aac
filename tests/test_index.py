import pytest
import responses

from investool.eastmoney.index import INDEX_URL, IndexData, query_index
from investool.transport import ApiError, HttpClient


SAMPLE = {
    "IndexCode": "000905",
    "IndexName": "中证500",
    "NewPrice": "7000.12",
    "IndexvaluaCN": "-1",
    "Petim": "18.5",
    "PEP100": "20.3",
    "IsGuess": True,
    "TRY": "30.1",
    "TopicJJBId": None,
    "BKName": "中证500",
}


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_from_dict_maps_keys():
    data = IndexData.from_dict(SAMPLE)
    assert data.index_code == "000905"
    assert data.index_name == "中证500"
    assert data.new_price == "7000.12"
    assert data.petim == "18.5"
    assert data.pep100 == "20.3"
    assert data.try_ == "30.1"
    assert data.bk_name == "中证500"
    assert data.is_guess is True


def test_from_dict_missing_keys_default_to_empty():
    data = IndexData.from_dict({})
    assert data.index_code == ""
    assert data.is_guess is False
    assert data.topic_jjbid is None


@pytest.mark.parametrize(
    "code, expected",
    [
        ("-2", "低估"),
        ("-1", "较为低估"),
        ("0", "适中"),
        ("1", "较为高估"),
        ("2", "高估"),
        ("", "--"),
        ("3", "--"),
    ],
)
def test_valuation_cn(code, expected):
    assert IndexData(indexvalua_cn=code).valuation_cn() == expected


def test_query_index(mocked):
    mocked.add(responses.GET, INDEX_URL, json={"Datas": SAMPLE, "ErrCode": 0})
    data = query_index(HttpClient(), "000905")
    assert data.index_code == "000905"
    assert data.valuation_cn() == "较为低估"
    assert "IndexCode=000905" in mocked.calls[0].request.url


def test_query_index_error_code(mocked):
    mocked.add(responses.GET, INDEX_URL, json={"Datas": {}, "ErrCode": 1})
    with pytest.raises(ApiError):
        query_index(HttpClient(), "000905")