"""
Infrastructure adapter: yfinance -> IStockDataProvider.
All yfinance-specific details (ticker.info, fast_info, history()) are confined here;
the rest of the codebase depends only on IStockDataProvider.
"""

from typing import Any, Optional

import yfinance as yf

from src.domain.entities.stock_price import HistoricalPrices, HistoricalRecord, StockQuote
from src.domain.ports.stock_data_port import IStockDataProvider


def _first_number(*candidates: Any) -> Optional[float]:
    """Return the first candidate that converts to a float, else None."""
    for value in candidates:
        if value is None:
            continue
        try:
            return float(value)
        except (TypeError, ValueError):
            continue
    return None


class YFinanceStockDataProvider(IStockDataProvider):
    """Fetches US stock market data from Yahoo Finance via the yfinance library."""

    def get_quote(self, symbol: str) -> StockQuote:
        ticker = yf.Ticker(symbol)
        info = ticker.info or {}
        fast_info = ticker.fast_info

        current_price = _first_number(
            getattr(fast_info, "last_price", None), info.get("currentPrice")
        )
        if current_price is None:
            raise ValueError(f"No price data available for symbol: {symbol!r}")

        return StockQuote(
            symbol=symbol,
            current_price=round(current_price, 4),
            fifty_two_week_high=_first_number(
                getattr(fast_info, "year_high", None), info.get("fiftyTwoWeekHigh")
            ),
            fifty_two_week_low=_first_number(
                getattr(fast_info, "year_low", None), info.get("fiftyTwoWeekLow")
            ),
            market_cap=_first_number(
                getattr(fast_info, "market_cap", None), info.get("marketCap")
            ),
            currency=info.get("currency", "USD"),
            pe_ratio=_first_number(info.get("trailingPE")),
            pb_ratio=_first_number(info.get("priceToBook")),
            return_on_equity=_first_number(info.get("returnOnEquity")),
        )

    def get_historical_prices(
        self,
        symbol: str,
        period: str = "2y",
        interval: str = "1d",
    ) -> HistoricalPrices:
        ticker = yf.Ticker(symbol)
        history = ticker.history(period=period, interval=interval)

        if history.empty:
            raise ValueError(f"No historical data available for symbol: {symbol!r}")

        # Partial sessions and provider gaps come back as NaN closes.
        closes = history["Close"].dropna().sort_index()
        if closes.empty:
            raise ValueError(f"No closing prices available for symbol: {symbol!r}")

        records = [
            HistoricalRecord(date=date.strftime("%Y-%m-%d"), close=round(float(close), 4))
            for date, close in closes.items()
        ]

        return HistoricalPrices(
            symbol=symbol,
            period=period,
            interval=interval,
            records=records,
        )
