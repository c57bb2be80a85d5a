"""
Named tables inside a single sheet, delimited by marker rows
"""

import logging
from typing import List

from app.core.errors import Conflict, NotFound
from app.models.table import EventTable, SheetLayout, TableRange
from app.services.row_store import Row, RowStore

logger = logging.getLogger(__name__)


class TableService:
    """Create, find, read, append to and delete marker-delimited tables"""

    @staticmethod
    def layout(store: RowStore, sheet: str) -> SheetLayout:
        """Fresh read of the sheet, split into tables"""
        return SheetLayout.parse(store.read_sheet(sheet))

    @staticmethod
    def list_tables(store: RowStore, sheet: str) -> List[TableRange]:
        return TableService.layout(store, sheet).tables

    @staticmethod
    def create_table(store: RowStore, sheet: str, table_name: str, headers: List[str]) -> TableRange:
        """Append a marker row and a header row for a new table.

        Names must be unique within the sheet, compared both exactly and
        trimmed/case-insensitively.
        """
        layout = TableService.layout(store, sheet)
        existing = layout.find_exact(table_name) or layout.find_normalized(table_name)
        if existing:
            raise Conflict(f"Table {table_name} already exists in sheet {sheet}")

        store.append_rows(sheet, [[table_name], list(headers)])
        logger.info(f"Created table {table_name} in sheet {sheet}")
        return TableService.find_table(store, sheet, table_name)

    @staticmethod
    def find_table(store: RowStore, sheet: str, table_name: str) -> TableRange:
        layout = TableService.layout(store, sheet)
        table = layout.find(table_name)
        if table is None:
            logger.warning(
                f"Table {table_name} not found in sheet {sheet}; "
                f"available: {[t.name for t in layout.tables]}"
            )
            raise NotFound(f"Table {table_name} not found in sheet {sheet}")
        return table

    @staticmethod
    def read_table(store: RowStore, sheet: str, table_name: str) -> EventTable:
        """Header, settings and registrant rows of a table, marker excluded"""
        layout = TableService.layout(store, sheet)
        table = layout.find(table_name)
        if table is None:
            raise NotFound(f"Table {table_name} not found in sheet {sheet}")
        return EventTable.from_rows(table.name, layout.table_rows(table))

    @staticmethod
    def append_to_table(store: RowStore, sheet: str, table_name: str, row: Row) -> int:
        """Place `row` directly after the last row of the table and return its absolute index.

        The boundary comes from a fresh read. When the table is the last one in
        the sheet this is a plain append; otherwise the row is inserted before
        the next table's marker.
        """
        layout = TableService.layout(store, sheet)
        table = layout.find(table_name)
        if table is None:
            raise NotFound(f"Table {table_name} not found in sheet {sheet}")

        if layout.is_last(table):
            store.append_rows(sheet, [row])
        else:
            store.insert_rows(sheet, table.end, [row])
        return table.end

    @staticmethod
    def delete_table(store: RowStore, sheet: str, table_name: str) -> TableRange:
        """Delete the marker row through the last table row. Exact name match only."""
        layout = TableService.layout(store, sheet)
        table = layout.find_exact(table_name)
        if table is None:
            raise NotFound(f"Table {table_name} not found in sheet {sheet}")

        store.delete_row_range(sheet, table.start, table.end)
        logger.info(f"Deleted table {table_name} (rows {table.start}-{table.end - 1}) from sheet {sheet}")
        return table

    @staticmethod
    def rename_sheet(store: RowStore, old_name: str, new_name: str) -> None:
        store.rename_sheet(old_name, new_name)
        logger.info(f"Renamed sheet {old_name} to {new_name}")
