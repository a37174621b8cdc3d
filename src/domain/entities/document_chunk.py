"""
Domain entity for one indexed passage of an equity research document
(annual report, earnings release, exchange filing).
Zero external dependencies - pure Python dataclass only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DocumentChunk:
    """A passage of a research document.

    market is the MarketMode value ("US" or "IN") the document covers, or None
    for material that applies to both markets.
    """

    content: str
    source_file: str
    page: int
    chunk_id: int
    market: Optional[str] = None
