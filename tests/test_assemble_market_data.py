"""Tests for the US market data assembler."""

from unittest.mock import Mock

import pytest

from src.application.use_cases.assemble_market_data import AssembleUSMarketDataUseCase
from src.domain.entities.stock_price import HistoricalPrices, HistoricalRecord, StockQuote
from src.domain.errors import DataUnavailable
from src.domain.ports.stock_data_port import IStockDataProvider


def make_history(symbol, closes):
    return HistoricalPrices(
        symbol=symbol,
        period="2y",
        interval="1d",
        records=[HistoricalRecord(date=f"day-{i}", close=c) for i, c in enumerate(closes)],
    )


@pytest.fixture
def quote():
    return StockQuote(
        symbol="MSFT",
        current_price=300.0,
        fifty_two_week_high=320.0,
        fifty_two_week_low=210.0,
        market_cap=2.2e12,
    )


@pytest.fixture
def provider(quote):
    provider = Mock(spec=IStockDataProvider)
    provider.get_quote.return_value = quote
    provider.get_historical_prices.return_value = make_history(
        "MSFT", [float(x) for x in range(1, 301)]
    )
    return provider


class TestAssembleUSMarketData:
    """Test orchestration of quote and history calls."""

    def test_builds_analysis_from_quote_and_history(self, provider, quote):
        analysis = AssembleUSMarketDataUseCase(provider).execute("MSFT")

        assert analysis.quote is quote
        assert analysis.indicators.rsi == 100.0
        assert analysis.indicators.sma_long == pytest.approx(sum(range(101, 301)) / 200)
        assert analysis.indicators.return_1y is not None

    def test_requests_long_enough_history(self, provider):
        AssembleUSMarketDataUseCase(provider).execute("MSFT")

        provider.get_historical_prices.assert_called_once_with(
            "MSFT",
            period=AssembleUSMarketDataUseCase.HISTORY_PERIOD,
            interval=AssembleUSMarketDataUseCase.HISTORY_INTERVAL,
        )

    def test_symbol_is_passed_through_unchanged(self, provider):
        AssembleUSMarketDataUseCase(provider).execute("brk.b")

        provider.get_quote.assert_called_once_with("brk.b")

    def test_short_history_gives_absent_indicators(self, provider):
        provider.get_historical_prices.return_value = make_history("MSFT", [1.0, 2.0, 3.0])

        analysis = AssembleUSMarketDataUseCase(provider).execute("MSFT")

        assert analysis.indicators.sma_short is None
        assert analysis.indicators.rsi is None
        assert analysis.indicators.return_1m is None

    def test_history_failure_is_data_unavailable(self, provider):
        provider.get_historical_prices.side_effect = ValueError("No historical data")

        with pytest.raises(DataUnavailable) as excinfo:
            AssembleUSMarketDataUseCase(provider).execute("MSFT")

        assert excinfo.value.symbol == "MSFT"
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_quote_failure_is_data_unavailable_even_when_history_succeeds(self, provider):
        provider.get_quote.side_effect = ConnectionError("network down")

        with pytest.raises(DataUnavailable, match="network down"):
            AssembleUSMarketDataUseCase(provider).execute("MSFT")

    def test_malformed_payload_is_data_unavailable(self, provider):
        provider.get_historical_prices.return_value = None

        with pytest.raises(DataUnavailable):
            AssembleUSMarketDataUseCase(provider).execute("MSFT")
