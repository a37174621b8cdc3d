"""
Use-case: build the US-market analysis record (quote plus technical indicators) for one symbol.
Depends only on Domain ports and entities and the indicator service - no infrastructure imports.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from src.application.services.indicator_engine import compute_indicator_set
from src.domain.entities.analysis import USStockAnalysis
from src.domain.errors import DataUnavailable
from src.domain.ports.stock_data_port import IStockDataProvider

logger = logging.getLogger(__name__)


class AssembleUSMarketDataUseCase:
    # Two years of daily bars covers the 252-day return and SMA(200).
    HISTORY_PERIOD: str = "2y"
    HISTORY_INTERVAL: str = "1d"

    def __init__(self, provider: IStockDataProvider) -> None:
        self._provider = provider

    def execute(self, symbol: str) -> USStockAnalysis:
        """Fetch quote and history for *symbol* concurrently and compute indicators.

        The symbol is passed to the provider exactly as received.

        Raises:
            DataUnavailable: if either remote call fails for any reason. No
                partial analysis is ever returned.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            quote_future = pool.submit(self._provider.get_quote, symbol)
            history_future = pool.submit(
                self._provider.get_historical_prices,
                symbol,
                period=self.HISTORY_PERIOD,
                interval=self.HISTORY_INTERVAL,
            )
            try:
                quote = quote_future.result()
                history = history_future.result()
                indicators = compute_indicator_set(history.closes)
            except Exception as exc:
                logger.warning("Market data fetch failed for %r: %s", symbol, exc)
                raise DataUnavailable(symbol, str(exc)) from exc

        return USStockAnalysis(quote=quote, indicators=indicators)
