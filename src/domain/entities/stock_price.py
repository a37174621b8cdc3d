"""
Domain entities for US market data returned by the stock data provider.
Zero external dependencies - pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StockQuote:
    symbol: str
    current_price: Optional[float]
    fifty_two_week_high: Optional[float]
    fifty_two_week_low: Optional[float]
    market_cap: Optional[float]
    currency: str = "USD"
    pe_ratio: Optional[float] = None
    pb_ratio: Optional[float] = None
    return_on_equity: Optional[float] = None


@dataclass(frozen=True)
class HistoricalRecord:
    date: str
    close: float


@dataclass(frozen=True)
class HistoricalPrices:
    symbol: str
    period: str
    interval: str
    records: list[HistoricalRecord]

    @property
    def closes(self) -> list[float]:
        """Closing prices, oldest first."""
        return [record.close for record in self.records]
