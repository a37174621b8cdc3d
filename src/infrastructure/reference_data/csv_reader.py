"""
Infrastructure adapter: NIFTY 500 CSV file -> IReferenceTableReader.
All pandas and file-system details are confined here. Every cell is read as
text; numeric parsing policy belongs to the EquityDirectory service.
"""

import os

import pandas as pd

from src.domain.errors import MalformedSource
from src.domain.ports.reference_table_port import IReferenceTableReader


class CSVReferenceTableReader(IReferenceTableReader):
    """Reads the reference table from a local CSV file with a header row."""

    def __init__(self, path: str, encoding: str = "utf-8") -> None:
        self._path = path
        self._encoding = encoding

    @property
    def source(self) -> str:
        return self._path

    def read_rows(self) -> list[dict[str, str]]:
        if not os.path.isfile(self._path):
            raise MalformedSource(self._path, "file not found")
        try:
            frame = pd.read_csv(
                self._path,
                dtype=str,
                keep_default_na=False,
                encoding=self._encoding,
                skipinitialspace=True,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as exc:
            raise MalformedSource(self._path, str(exc)) from exc

        frame.columns = [str(column).strip() for column in frame.columns]
        return frame.to_dict(orient="records")
