"""
Registrant exports for organizers
"""

import io
from typing import Any, Dict, List
from urllib.parse import quote

import pandas as pd


class ExportService:
    """Turns a registrations listing into downloadable files"""

    SHEET_NAME = "Registrations"

    @staticmethod
    def to_dataframe(headers: List[str], rows: List[Dict[str, Any]]) -> pd.DataFrame:
        """Frame with columns in header order, missing cells as empty strings"""
        df = pd.DataFrame(rows, columns=headers)
        return df.fillna("")

    @staticmethod
    def to_excel(headers: List[str], rows: List[Dict[str, Any]], sheet_name: str = SHEET_NAME) -> bytes:
        df = ExportService.to_dataframe(headers, rows)

        # Excel caps sheet titles at 31 characters and rejects []:*?/\
        title = "".join(" " if ch in "[]:*?/\\" else ch for ch in sheet_name).strip()[:31]

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=title or ExportService.SHEET_NAME)

        return buffer.getvalue()

    @staticmethod
    def to_csv(headers: List[str], rows: List[Dict[str, Any]]) -> bytes:
        df = ExportService.to_dataframe(headers, rows)
        return df.to_csv(index=False).encode("utf-8")

    @staticmethod
    def file_name(company_name: str, event_name: str, extension: str) -> str:
        """ASCII-only download name; header values are latin-1 on the wire"""
        safe = "".join(
            ch if ch.isascii() and (ch.isalnum() or ch in "-_") else "_"
            for ch in f"{company_name}_{event_name}"
        )
        return f"registrations_{safe}.{extension}"

    @staticmethod
    def content_disposition(company_name: str, event_name: str, extension: str) -> str:
        """Attachment header with an ASCII fallback and the UTF-8 name (RFC 5987)"""
        fallback = ExportService.file_name(company_name, event_name, extension)
        full_name = f"registrations_{company_name}_{event_name}.{extension}"
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(full_name, safe='')}"
