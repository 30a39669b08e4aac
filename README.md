# investool

Python clients for public Chinese market-data services. They cover stock screening, financial report indicators, shareholder and rating data, fund and fund-manager information, index quotes and constituents, and keyword search for quotes.

## Install

```
pip install investool
```

To run the test suite, install the test extra:

```
pip install "investool[test]"
pytest
```

## Shared HTTP client

Every query takes an `investool.transport.HttpClient`. It wraps a `requests` session and a timeout (five minutes by default). It offers `get_json`, `get_raw`, `post_form` and `post_json`. A failed request, an HTTP error status or a body that is not valid JSON raises `investool.transport.ApiError`. The query functions also raise `ApiError` when a service returns an error code or an unusable answer.

```python
from investool.transport import HttpClient

http = HttpClient()
```

## Stocks

```python
from investool.eastmoney.select_stocks import StockFilter, query_selected_stocks, sort_by_roe
from investool.eastmoney.fina_main import (
    FinaReportType, ValueListType, query_historical_fina_main_data,
)

stocks = query_selected_stocks(http, StockFilter(min_roe=10.0))
ranked = sort_by_roe(stocks)  # new list, highest ROE first

history = query_historical_fina_main_data(http, "600188.SH")
yearly = history.filter_by_report_type(FinaReportType.YEAR)
eps_median = history.mid_value(ValueListType.EPS, 10, FinaReportType.YEAR)
growing = history.is_increasing_by_years(ValueListType.ROE, 5, FinaReportType.YEAR)
```

If you call `query_selected_stocks` without a filter, it uses `DEFAULT_FILTER`. That filter sets a minimum ROE of 8, a market cap of at least 100 hundred-million yuan, a PB of at least 1, and leaves out the 300xxx and 688xxx boards.

Other stock data:

- `investool.eastmoney.free_holders.query_free_holders`: the top ten free-float holders. `format_free_holders` renders them as text.
- `investool.eastmoney.org_rating.query_org_rating`: aggregated broker ratings.
- `investool.eastmoney.profit_predict.query_profit_predict`: earnings forecasts.
- `investool.eastmoney.valuation_status.query_valuation_status`: the PE, PB, PS and PCF valuation status, as a dict keyed by indicator name.
- `investool.eastmoney.fina_main.query_fina_publish_date_list`: planned and actual report publication dates.
- `investool.eastmoney.industry_list.query_industry_list`: the industry names that the screener accepts.
- `investool.eastmoney.historical_pe.parse_historical_pe`: turns a valuation-analysis JSON payload into a `HistoricalPEList`, whose `mid_value()` gives the median PE.
- `investool.eastmoney.diagnosis`: `ValueAssessment` and `ComprehensiveRating`, built with `from_dict` from stock-diagnosis JSON records.
- `investool.eniu.Eniu`: historical prices. `HistoricalStockPrice.historical_volatility(period)` accepts `DAY`, `WEEK`, `MONTH` or `YEAR` and raises `ValueError` when there is no usable data.

```python
from investool.eniu import Eniu

prices = Eniu(http).query_historical_stock_price("002312.SZ")
print(prices.historical_volatility("YEAR"))
```

## Funds

```python
from investool.eastmoney.fund_info import query_fund_info
from investool.eastmoney.fund_search import search_fund
from investool.eastmoney.fund_net_list import FundType, query_fund_list_by_page, query_all_fund_list
from investool.eastmoney.fund_managers import ManagerFilter, fund_managers

info = query_fund_info(http, "013781")
hits = search_fund(http, "半导体")
page = query_fund_list_by_page(http, FundType.ALL, 1)

managers = fund_managers(http, "all", "penavgrowth", "desc", 4)
picked = managers.filter(
    ManagerFilter(min_working_years=8, min_yieldse=15.0, max_current_fund_count=10)
)
picked.sort_by_yieldse()
```

`query_all_fund_list` fetches every page concurrently and retries each page up to three times. It drops any page that still fails. `fund_managers` enriches each manager with the profile that `investool.eastmoney.fund_manager_base_list.query_fund_msn_manager_info` returns. `fund_manager_base_list` lists every manager from the mobile API.

`investool.eastmoney.fund_by_stock.query_fund_by_stock` lists the funds that hold a given stock.

## Indexes

```python
from investool.eastmoney.index import query_index
from investool.eastmoney.index_components import hs300, zz500, zscfg

index = query_index(http, "000905")
print(index.valuation_cn())
constituents = zscfg(http, "000905")
```

`hs300` and `zz500` raise `ApiError` when the service returns anything other than exactly 300 or 500 constituents.

## Quote search

```python
from investool.qq import QQ
from investool.sina import Sina

print(QQ(http).keyword_search("招商银行"))
print(Sina(http).keyword_search("比亚迪"))
```

Sina results are ordered by market code, so A shares come first.

## What it does not do

This is a library only. It has no command-line tool, no web server and no storage. It cannot fetch the stock-diagnosis or PE-history data itself; for those it only parses responses you already have. It does not provide income-statement data.