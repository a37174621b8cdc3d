"""Tests for the yfinance stock data adapter."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pandas as pd
import pytest

from src.infrastructure.stock_data.yfinance_adapter import YFinanceStockDataProvider

TICKER_PATH = "src.infrastructure.stock_data.yfinance_adapter.yf.Ticker"


def make_ticker(fast_info=None, info=None, history=None):
    ticker = Mock()
    ticker.fast_info = fast_info or SimpleNamespace()
    ticker.info = info if info is not None else {}
    ticker.history.return_value = history if history is not None else pd.DataFrame()
    return ticker


class TestGetQuote:
    """Test quote mapping."""

    @patch(TICKER_PATH)
    def test_maps_fast_info_and_info(self, mock_ticker):
        mock_ticker.return_value = make_ticker(
            fast_info=SimpleNamespace(
                last_price=189.123456, year_high=199.62, year_low=164.08, market_cap=2.9e12
            ),
            info={"currency": "USD", "trailingPE": 29.5, "priceToBook": 45.1, "returnOnEquity": 1.47},
        )

        quote = YFinanceStockDataProvider().get_quote("AAPL")

        mock_ticker.assert_called_once_with("AAPL")
        assert quote.symbol == "AAPL"
        assert quote.current_price == 189.1235
        assert quote.fifty_two_week_high == 199.62
        assert quote.fifty_two_week_low == 164.08
        assert quote.market_cap == 2.9e12
        assert quote.pe_ratio == 29.5
        assert quote.pb_ratio == 45.1
        assert quote.return_on_equity == 1.47

    @patch(TICKER_PATH)
    def test_falls_back_to_info(self, mock_ticker):
        mock_ticker.return_value = make_ticker(
            info={
                "currentPrice": 410.5,
                "fiftyTwoWeekHigh": 430.0,
                "fiftyTwoWeekLow": 309.4,
                "marketCap": 3.05e12,
            },
        )

        quote = YFinanceStockDataProvider().get_quote("MSFT")

        assert quote.current_price == 410.5
        assert quote.fifty_two_week_high == 430.0
        assert quote.market_cap == 3.05e12
        assert quote.currency == "USD"
        assert quote.pe_ratio is None

    @patch(TICKER_PATH)
    def test_missing_price_raises(self, mock_ticker):
        mock_ticker.return_value = make_ticker(fast_info=SimpleNamespace(last_price=None))

        with pytest.raises(ValueError, match="No price data"):
            YFinanceStockDataProvider().get_quote("ZZZZ")


class TestGetHistoricalPrices:
    """Test history mapping."""

    @patch(TICKER_PATH)
    def test_returns_closes_oldest_first(self, mock_ticker):
        index = pd.to_datetime(["2024-01-03", "2024-01-02", "2024-01-04"])
        frame = pd.DataFrame({"Close": [101.123456, 100.0, 102.5]}, index=index)
        mock_ticker.return_value = make_ticker(history=frame)

        prices = YFinanceStockDataProvider().get_historical_prices("AAPL", period="2y")

        mock_ticker.return_value.history.assert_called_once_with(period="2y", interval="1d")
        assert prices.closes == [100.0, 101.1235, 102.5]
        assert [r.date for r in prices.records] == ["2024-01-02", "2024-01-03", "2024-01-04"]
        assert prices.period == "2y"

    @patch(TICKER_PATH)
    def test_empty_history_raises(self, mock_ticker):
        mock_ticker.return_value = make_ticker()

        with pytest.raises(ValueError, match="No historical data"):
            YFinanceStockDataProvider().get_historical_prices("ZZZZ")

    @patch(TICKER_PATH)
    def test_nan_closes_are_dropped(self, mock_ticker):
        index = pd.to_datetime(["2024-01-02", "2024-01-03", "2024-01-04"])
        frame = pd.DataFrame({"Close": [100.0, float("nan"), 102.5]}, index=index)
        mock_ticker.return_value = make_ticker(history=frame)

        prices = YFinanceStockDataProvider().get_historical_prices("AAPL")

        assert prices.closes == [100.0, 102.5]
        assert [r.date for r in prices.records] == ["2024-01-02", "2024-01-04"]

    @patch(TICKER_PATH)
    def test_all_nan_closes_raise(self, mock_ticker):
        index = pd.to_datetime(["2024-01-02", "2024-01-03"])
        frame = pd.DataFrame({"Close": [float("nan"), float("nan")]}, index=index)
        mock_ticker.return_value = make_ticker(history=frame)

        with pytest.raises(ValueError, match="No closing prices"):
            YFinanceStockDataProvider().get_historical_prices("AAPL")
