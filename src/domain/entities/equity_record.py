"""
Domain entity for one row of the NIFTY 500 reference table.
Zero external dependencies - pure Python dataclass only.
"""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class EquityRecord:
    symbol: str
    company_name: str
    market_capitalization: Optional[float] = None
    current_price: Optional[float] = None
    pe: Optional[float] = None
    pb: Optional[float] = None
    roe: Optional[float] = None
    roce: Optional[float] = None
    return_1m: Optional[float] = None
    return_6m: Optional[float] = None
    return_1y: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)
