"""
Port (interface) for the NIFTY 500 reference table source.
Infrastructure adapters (e.g. CSVReferenceTableReader) must implement this interface.
"""

from abc import ABC, abstractmethod


class IReferenceTableReader(ABC):
    @property
    @abstractmethod
    def source(self) -> str:
        """Human-readable name of the underlying source, for logs."""
        ...

    @abstractmethod
    def read_rows(self) -> list[dict[str, str]]:
        """Return every row as a header -> raw cell text mapping.

        Raises:
            MalformedSource: if the source cannot be read or parsed.
        """
        ...
