"""
Domain errors raised at collaborator boundaries.

Short price history and directory misses are not errors: they are expressed
as None values. Only failures of external collaborators are exceptions, and
each is caught by the component that owns the boundary.
"""


class DataUnavailable(Exception):
    """Market data for a symbol could not be fetched or parsed."""

    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(f"No market data for {symbol!r}: {reason}")
        self.symbol = symbol
        self.reason = reason


class MalformedSource(Exception):
    """The reference table could not be read or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Reference table {source!r} is unreadable: {reason}")
        self.source = source
        self.reason = reason
