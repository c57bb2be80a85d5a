"""
In-memory view of the tables stored inside one company sheet.

A sheet is a flat list of rows. Each table starts with a marker row holding
only the table name in its first cell, followed by a header row, a settings
row and registrant rows, up to the next marker or the end of the sheet.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from app.models.event import COL_EVENT_STATUS, METADATA_COLUMNS, STATUS_ENABLED


def cell_at(row: List[str], index: int) -> str:
    """Cell value or "" when the row is shorter than `index` (Sheets trims trailing blanks)."""
    if index < 0 or index >= len(row) or row[index] is None:
        return ""
    return str(row[index])


def is_marker_row(row: List[str]) -> bool:
    filled = [cell for cell in row if str(cell).strip()]
    return len(filled) == 1 and bool(str(row[0]).strip())


def normalize_name(name: str) -> str:
    return (name or "").strip().lower()


@dataclass
class TableRange:
    """Absolute row span of one table: marker at `start`, rows up to `end` (exclusive)"""
    name: str
    start: int
    end: int

    @property
    def header_index(self) -> int:
        return self.start + 1


@dataclass
class SheetLayout:
    """Tables of one sheet in sheet order"""
    rows: List[List[str]]
    tables: List[TableRange] = field(default_factory=list)

    @classmethod
    def parse(cls, rows: List[List[str]]) -> "SheetLayout":
        markers = [i for i, row in enumerate(rows) if is_marker_row(row)]
        tables = []
        for position, start in enumerate(markers):
            end = markers[position + 1] if position + 1 < len(markers) else len(rows)
            tables.append(TableRange(name=str(rows[start][0]), start=start, end=end))
        return cls(rows=rows, tables=tables)

    def find_exact(self, name: str) -> Optional[TableRange]:
        return next((t for t in self.tables if t.name == name), None)

    def find_normalized(self, name: str) -> Optional[TableRange]:
        key = normalize_name(name)
        return next((t for t in self.tables if normalize_name(t.name) == key), None)

    def find(self, name: str) -> Optional[TableRange]:
        """Exact match first, then trimmed case-insensitive"""
        return self.find_exact(name) or self.find_normalized(name)

    def is_last(self, table: TableRange) -> bool:
        return bool(self.tables) and self.tables[-1] is table

    def table_rows(self, table: TableRange) -> List[List[str]]:
        return self.rows[table.header_index:table.end]


@dataclass
class EventTable:
    """Header row plus every data row of one table"""
    name: str
    header: List[str]
    rows: List[List[str]] = field(default_factory=list)

    @classmethod
    def from_rows(cls, name: str, rows: List[List[str]]) -> "EventTable":
        header = [str(h) for h in rows[0]] if rows else []
        return cls(name=name, header=header, rows=[list(r) for r in rows[1:]])

    def column(self, name: str) -> int:
        try:
            return self.header.index(name)
        except ValueError:
            return -1

    def value(self, row: List[str], column_name: str) -> str:
        return cell_at(row, self.column(column_name))

    def is_settings_row(self, row: List[str]) -> bool:
        """True when every filled cell sits in a metadata column"""
        for index, cell in enumerate(row):
            if not str(cell).strip():
                continue
            if index >= len(self.header) or self.header[index] not in METADATA_COLUMNS:
                return False
        return True

    def settings_row_offset(self) -> Optional[int]:
        """Index into `rows` of the first settings row, if any"""
        return next((i for i, row in enumerate(self.rows) if self.is_settings_row(row)), None)

    def settings_row(self) -> Optional[List[str]]:
        offset = self.settings_row_offset()
        return self.rows[offset] if offset is not None else None

    def setting(self, column_name: str, default: str = "") -> str:
        row = self.settings_row()
        if row is None:
            return default
        return self.value(row, column_name) or default

    def registrant_rows(self) -> List[List[str]]:
        return [row for row in self.rows if not self.is_settings_row(row)]

    @property
    def status(self) -> str:
        return self.setting(COL_EVENT_STATUS, STATUS_ENABLED)
