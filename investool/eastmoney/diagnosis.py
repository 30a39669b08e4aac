"""Stock diagnosis results: value assessment and comprehensive rating."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _head(value: str) -> str:
    return value.split("|")[0]


_ASSESSMENT_KEYS = {
    "secname": "SecName",
    "industryname": "IndustryName",
    "type": "Type",
    "valueranking": "ValueRanking",
    "total": "Total",
    "valuetotalscore": "ValueTotalScore",
    "reportdate": "ReportDate",
    "reporttype": "ReportType",
    "profitabilityscore": "ProfitabilityScore",
    "growupscore": "GrowUpScore",
    "operationscore": "OperationScore",
    "cashflowscore": "CashFlowScore",
    "valuationscore": "ValuationScore",
}


@dataclass(frozen=True)
class ValueAssessment:
    """Value assessment; score fields hold 'value|extra' strings."""

    secname: str = ""
    industryname: str = ""
    type: str = ""
    valueranking: str = ""
    total: str = ""
    valuetotalscore: str = ""
    reportdate: str = ""
    reporttype: str = ""
    profitabilityscore: str = ""
    growupscore: str = ""
    operationscore: str = ""
    cashflowscore: str = ""
    valuationscore: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValueAssessment":
        data = data or {}
        return cls(**{attr: _text(data.get(key)) for attr, key in _ASSESSMENT_KEYS.items()})

    def value_ranking(self) -> str:
        """Current ranking."""
        return _head(self.valueranking)

    def profitability_score(self) -> str:
        return _head(self.profitabilityscore)

    def grow_up_score(self) -> str:
        return _head(self.growupscore)

    def operation_score(self) -> str:
        """Operation and solvency score."""
        return _head(self.operationscore)

    def cash_flow_score(self) -> str:
        return _head(self.cashflowscore)

    def valuation_score(self) -> str:
        return _head(self.valuationscore)

    def value_total_score(self) -> str:
        """Overall quality."""
        return _head(self.valuetotalscore)

    def __str__(self) -> str:
        return (
            f"{self.secname}属于{self.industryname}行业，排名{self.value_ranking()}/{self.total}。\n"
            f"盈利能力{self.profitability_score()}，成长能力{self.grow_up_score()}，"
            f"营运偿债能力{self.operation_score()}，现金流{self.cash_flow_score()}，"
            f"估值{self.valuation_score()}，整体质地{self.value_total_score()}。"
        )


_RATING_TEXT_KEYS = {
    "securitycode": "SecurityCode",
    "updatetime": "UpdateTime",
    "totalscore": "TotalScore",
    "totalscorechg": "TotalScoreCHG",
    "msgcount": "MsgCount",
    "capitalscore": "CapitalScore",
    "d1": "D1",
    "valuescore": "ValueScore",
    "marketscorechg": "MarketScoreCHG",
    "status": "Status",
    "pingfennum": "PingFenNum",
    "dabaishichangnum": "DaBaiShiChangNum",
    "shangzhanggailvnum": "ShangZhangGaiLvNum",
}


@dataclass(frozen=True)
class ComprehensiveRating:
    """Comprehensive rating of a stock.

    msgcount: news sentiment; capitalscore: main capital flow; d1: short term
    trend; valuescore: company quality; marketscorechg: market attention;
    pingfennum: score; dabaishichangnum: share of stocks beaten;
    shangzhanggailvnum: probability of rising the next day.
    """

    securitycode: str = ""
    updatetime: str = ""
    totalscore: str = ""
    totalscorechg: str = ""
    leadpre: Any = None
    risepro: Any = None
    msgcount: str = ""
    capitalscore: str = ""
    d1: str = ""
    valuescore: str = ""
    marketscorechg: str = ""
    status: str = ""
    pingfennum: str = ""
    dabaishichangnum: str = ""
    shangzhanggailvnum: str = ""
    checkzhengustatus: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ComprehensiveRating":
        data = data or {}
        values: dict[str, Any] = {
            attr: _text(data.get(key)) for attr, key in _RATING_TEXT_KEYS.items()
        }
        values["leadpre"] = data.get("LeadPre")
        values["risepro"] = data.get("RisePro")
        values["checkzhengustatus"] = bool(data.get("CheckZhenGuStatus"))
        return cls(**values)