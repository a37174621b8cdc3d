"""
Domain entities for computed technical indicators and the assembled US analysis.
Zero external dependencies - pure Python dataclasses only.
"""

from dataclasses import asdict, dataclass
from typing import Optional

from src.domain.entities.stock_price import StockQuote


@dataclass(frozen=True)
class IndicatorSet:
    """Technical indicators for one price series.

    A None field means the series was too short for that indicator; it is
    never used to mean zero.
    """

    sma_short: Optional[float] = None
    sma_long: Optional[float] = None
    rsi: Optional[float] = None
    return_1m: Optional[float] = None
    return_6m: Optional[float] = None
    return_1y: Optional[float] = None


@dataclass(frozen=True)
class USStockAnalysis:
    quote: StockQuote
    indicators: IndicatorSet

    @property
    def symbol(self) -> str:
        return self.quote.symbol

    def to_dict(self) -> dict:
        """Flatten quote fields and indicators into a single JSON-friendly dict."""
        return {**asdict(self.quote), **asdict(self.indicators)}
