"""
Port (interface) for stock data providers.
Infrastructure adapters (e.g. YFinanceStockDataProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.stock_price import HistoricalPrices, StockQuote


class IStockDataProvider(ABC):
    @abstractmethod
    def get_quote(self, symbol: str) -> StockQuote:
        """Return the latest price, 52-week range and market cap for *symbol*."""
        ...

    @abstractmethod
    def get_historical_prices(
        self,
        symbol: str,
        period: str = "2y",
        interval: str = "1d",
    ) -> HistoricalPrices:
        """Return daily closes for *symbol*, oldest first."""
        ...
