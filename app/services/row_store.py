"""
Row store interface and the in-process backend used for development and tests.

Rows are lists of strings and indexes are 0-based and absolute within a sheet,
header rows included. Every read returns a fresh copy; nothing is cached.
"""

from __future__ import annotations

import copy
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from app.core.errors import Conflict, NotFound

Row = List[str]


class RowStore(ABC):
    """Operations the table layer needs from a spreadsheet document"""

    @abstractmethod
    def read_sheet(self, name: str) -> List[Row]:
        """Return every row of the sheet. Raises NotFound for a missing sheet."""

    @abstractmethod
    def append_rows(self, name: str, rows: List[Row]) -> None:
        """Write rows after the last populated row of the sheet."""

    @abstractmethod
    def insert_rows(self, name: str, index: int, rows: List[Row]) -> None:
        """Insert rows at `index`, shifting the rows below it down."""

    @abstractmethod
    def update_row(self, name: str, index: int, row: Row) -> None:
        """Overwrite the row at `index` with `row`."""

    @abstractmethod
    def create_sheet(self, name: str) -> None:
        """Add an empty sheet. Raises Conflict if the title is taken."""

    @abstractmethod
    def rename_sheet(self, old_name: str, new_name: str) -> None:
        pass

    @abstractmethod
    def delete_row_range(self, name: str, start: int, end: int) -> None:
        """Delete rows in [start, end)."""

    def sheet_exists(self, name: str) -> bool:
        try:
            self.read_sheet(name)
        except NotFound:
            return False
        return True


class InMemoryRowStore(RowStore):
    """Dict-of-lists backend with the same contract as the Google Sheets one"""

    def __init__(self, sheets: Optional[Dict[str, List[Row]]] = None):
        self._sheets: Dict[str, List[Row]] = copy.deepcopy(sheets) if sheets else {}
        self._lock = threading.Lock()

    def _get(self, name: str) -> List[Row]:
        if name not in self._sheets:
            raise NotFound(f"Sheet {name} not found")
        return self._sheets[name]

    def read_sheet(self, name: str) -> List[Row]:
        with self._lock:
            return copy.deepcopy(self._get(name))

    def append_rows(self, name: str, rows: List[Row]) -> None:
        with self._lock:
            data = self._get(name)
            # Trailing blank rows are not "populated", the same as in Sheets
            while data and not any(cell for cell in data[-1]):
                data.pop()
            data.extend([str(cell) for cell in row] for row in rows)

    def insert_rows(self, name: str, index: int, rows: List[Row]) -> None:
        with self._lock:
            data = self._get(name)
            data[index:index] = [[str(cell) for cell in row] for row in rows]

    def update_row(self, name: str, index: int, row: Row) -> None:
        with self._lock:
            data = self._get(name)
            while len(data) <= index:
                data.append([])
            data[index] = [str(cell) for cell in row]

    def create_sheet(self, name: str) -> None:
        with self._lock:
            if name in self._sheets:
                raise Conflict(f"Sheet {name} already exists")
            self._sheets[name] = []

    def rename_sheet(self, old_name: str, new_name: str) -> None:
        with self._lock:
            data = self._get(old_name)
            if new_name in self._sheets:
                raise Conflict(f"Sheet {new_name} already exists")
            self._sheets[new_name] = data
            del self._sheets[old_name]

    def delete_row_range(self, name: str, start: int, end: int) -> None:
        with self._lock:
            del self._get(name)[start:end]
