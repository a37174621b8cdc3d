"""
Application service: the in-memory NIFTY 500 equity directory.

Business decisions owned here:
  - Which reference-table headers map to which EquityRecord fields.
  - How a free-text query is matched: exact symbol, then exact company name,
    then the first company name containing the query in table order. The first
    tier that matches wins; later tiers are not consulted for a better match.
  - Duplicate symbols or names keep their first row.

The reference table reader is injected; no pandas or file access appears here.
"""

import logging
import math
import threading
from typing import Iterable, Mapping, Optional

from src.domain.entities.equity_record import EquityRecord
from src.domain.errors import MalformedSource
from src.domain.ports.reference_table_port import IReferenceTableReader

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS: dict[str, str] = {
    "symbol": "Symbol",
    "company_name": "Company Name",
    "market_capitalization": "Market Cap",
    "current_price": "Current Price",
    "pe": "P/E",
    "pb": "P/B",
    "roe": "ROE",
    "roce": "ROCE",
    "return_1m": "1M Return",
    "return_6m": "6M Return",
    "return_1y": "1Y Return",
}

_NUMERIC_FIELDS = (
    "market_capitalization",
    "current_price",
    "pe",
    "pb",
    "roe",
    "roce",
    "return_1m",
    "return_6m",
    "return_1y",
)


def _normalize(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def _parse_number(raw: object) -> Optional[float]:
    """Parse a cell as a plain float; anything else (blank, '1,234', 'NA') is None."""
    if raw is None:
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


class EquityDirectory:
    """Immutable lookup structure over the reference table.

    Representation Invariants:
    - _by_symbol and _by_name keys are trimmed, lowercased
    - each key maps to the first record that produced it
    - _records keeps table order and is never mutated after __init__
    """

    def __init__(self, records: Iterable[EquityRecord]) -> None:
        self._records: tuple[EquityRecord, ...] = tuple(records)
        self._by_symbol: dict[str, EquityRecord] = {}
        self._by_name: dict[str, EquityRecord] = {}
        for record in self._records:
            symbol_key = _normalize(record.symbol)
            name_key = _normalize(record.company_name)
            if symbol_key in self._by_symbol:
                logger.debug("Duplicate symbol %r ignored; keeping first row", record.symbol)
            else:
                self._by_symbol[symbol_key] = record
            if name_key not in self._by_name:
                self._by_name[name_key] = record

    @classmethod
    def empty(cls) -> "EquityDirectory":
        return cls(())

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Mapping[str, object]],
        columns: Mapping[str, str] = DEFAULT_COLUMNS,
    ) -> "EquityDirectory":
        """Build a directory from raw table rows.

        Rows without a symbol or company name are dropped. Numeric cells that do
        not parse as a plain number become None rather than failing the load.
        """
        records: list[EquityRecord] = []
        dropped = 0
        for row in rows:
            symbol = str(row.get(columns["symbol"]) or "").strip()
            name = str(row.get(columns["company_name"]) or "").strip()
            if not symbol or not name:
                dropped += 1
                continue
            numbers = {
                field: _parse_number(row.get(columns[field]))
                for field in _NUMERIC_FIELDS
                if field in columns
            }
            records.append(EquityRecord(symbol=symbol, company_name=name, **numbers))
        if dropped:
            logger.info("Dropped %d reference rows without a symbol or company name", dropped)
        return cls(records)

    @property
    def records(self) -> tuple[EquityRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def resolve(self, query: str) -> Optional[EquityRecord]:
        """Return the single record matching *query*, or None on a miss."""
        needle = _normalize(query)
        if not needle:
            return None

        record = self._by_symbol.get(needle)
        if record is not None:
            return record

        record = self._by_name.get(needle)
        if record is not None:
            return record

        # First containing name in table order, not the closest one.
        for record in self._records:
            if needle in _normalize(record.company_name):
                return record
        return None


class LazyEquityDirectory:
    """Process-wide holder that builds the EquityDirectory once, on first use.

    Construct one per process in the composition root and inject it. The load
    runs under a lock so concurrent first callers parse the table once and all
    read the same snapshot. An unreadable source yields an empty directory
    (every lookup misses) instead of failing the turn.
    """

    def __init__(
        self,
        reader: IReferenceTableReader,
        columns: Mapping[str, str] = DEFAULT_COLUMNS,
    ) -> None:
        self._reader = reader
        self._columns = dict(columns)
        self._directory: Optional[EquityDirectory] = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._directory is not None

    def load(self) -> EquityDirectory:
        directory = self._directory
        if directory is not None:
            return directory
        with self._lock:
            if self._directory is None:
                self._directory = self._build()
            return self._directory

    def resolve(self, query: str) -> Optional[EquityRecord]:
        return self.load().resolve(query)

    def _build(self) -> EquityDirectory:
        try:
            rows = self._reader.read_rows()
        except MalformedSource as exc:
            logger.error("Equity directory unavailable, serving empty snapshot: %s", exc)
            return EquityDirectory.empty()
        directory = EquityDirectory.from_rows(rows, self._columns)
        logger.info("Loaded %d equities from %s", len(directory), self._reader.source)
        return directory
