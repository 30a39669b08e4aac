import pytest

from investool.eastmoney.historical_pe import (
    HistoricalPE,
    HistoricalPEList,
    parse_historical_pe,
)
from investool.transport import ApiError


def test_mid_value_even_count():
    d = HistoricalPEList(
        [
            HistoricalPE(date="1", value=6.0),
            HistoricalPE(date="1", value=1.0),
            HistoricalPE(date="1", value=5.0),
            HistoricalPE(date="1", value=2.0),
            HistoricalPE(date="1", value=4.0),
            HistoricalPE(date="1", value=3.0),
        ]
    )
    assert d.mid_value() == 3.5


def test_mid_value_odd_count():
    d = HistoricalPEList([HistoricalPE(2.0, "a"), HistoricalPE(9.0, "b"), HistoricalPE(4.0, "c")])
    assert d.mid_value() == 4.0


def test_mid_value_empty_raises():
    with pytest.raises(ValueError):
        HistoricalPEList().mid_value()


def test_parse_historical_pe_skips_invalid_values():
    payload = {
        "data": [
            [
                {"SECURITYCODE": "600149", "ENDATE": "2021-01-04", "VALUE": "12.5"},
                {"SECURITYCODE": "600149", "ENDATE": "2021-01-05", "VALUE": "--"},
                {"SECURITYCODE": "600149", "ENDATE": "2021-01-06", "VALUE": "13"},
            ]
        ],
        "pe": [],
    }
    result = parse_historical_pe(payload)
    assert result == [
        HistoricalPE(value=12.5, date="2021-01-04"),
        HistoricalPE(value=13.0, date="2021-01-06"),
    ]
    assert result.mid_value() == 12.75


def test_parse_historical_pe_without_data_raises():
    with pytest.raises(ApiError):
        parse_historical_pe({"data": [], "pe": []})
    with pytest.raises(ApiError):
        parse_historical_pe({})