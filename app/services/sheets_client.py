"""
Google Sheets initialization and the row store backed by it
"""

from __future__ import annotations

import base64
import json
import logging
import os
from functools import lru_cache
from typing import Any, List, Optional

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.core.config import settings
from app.core.errors import Conflict, NotFound, StoreUnavailable
from app.services.row_store import Row, RowStore

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def _load_service_account_info() -> dict[str, Any] | None:
    if settings.GOOGLE_CREDENTIALS_JSON:
        return json.loads(settings.GOOGLE_CREDENTIALS_JSON)
    if settings.GOOGLE_CREDENTIALS_B64:
        decoded = base64.b64decode(settings.GOOGLE_CREDENTIALS_B64).decode("utf-8")
        return json.loads(decoded)
    if settings.GOOGLE_CREDENTIALS_FILE and os.path.exists(settings.GOOGLE_CREDENTIALS_FILE):
        with open(settings.GOOGLE_CREDENTIALS_FILE, "r", encoding="utf-8") as f:
            return json.load(f)
    if settings.GOOGLE_SERVICE_ACCOUNT_EMAIL and settings.GOOGLE_PRIVATE_KEY:
        # Keys pasted into env files usually carry literal "\n" sequences
        return {
            "type": "service_account",
            "client_email": settings.GOOGLE_SERVICE_ACCOUNT_EMAIL,
            "private_key": settings.GOOGLE_PRIVATE_KEY.replace("\\n", "\n"),
            "token_uri": TOKEN_URI,
        }
    return None


@lru_cache(maxsize=1)
def get_sheets_service():
    """Build and cache the Sheets v4 discovery client.

    Expects credentials via one of: GOOGLE_CREDENTIALS_JSON, GOOGLE_CREDENTIALS_B64,
    GOOGLE_CREDENTIALS_FILE, or GOOGLE_SERVICE_ACCOUNT_EMAIL + GOOGLE_PRIVATE_KEY.
    """
    info = _load_service_account_info()
    if not info:
        raise RuntimeError(
            "Google credentials not provided. Set GOOGLE_CREDENTIALS_FILE, GOOGLE_CREDENTIALS_JSON, "
            "GOOGLE_CREDENTIALS_B64 or GOOGLE_SERVICE_ACCOUNT_EMAIL and GOOGLE_PRIVATE_KEY"
        )
    if not settings.GOOGLE_SHEET_ID:
        raise RuntimeError("GOOGLE_SHEET_ID is not set")

    creds = service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


def quote_sheet(name: str) -> str:
    """A1 notation sheet reference, quoted so spaces and apostrophes survive."""
    return "'" + name.replace("'", "''") + "'"


def row_range(name: str, index: int) -> str:
    return f"{quote_sheet(name)}!A{index + 1}"


class GoogleSheetsRowStore(RowStore):
    """Row store over one spreadsheet document"""

    def __init__(self, service=None, spreadsheet_id: Optional[str] = None):
        self._service = service
        self.spreadsheet_id = spreadsheet_id or settings.GOOGLE_SHEET_ID

    @property
    def service(self):
        if self._service is None:
            self._service = get_sheets_service()
        return self._service

    def _call(self, action: str, sheet: str, request):
        try:
            return request.execute()
        except HttpError as e:
            status_code = getattr(e.resp, "status", None)
            if status_code == 400 and "Unable to parse range" in str(e):
                raise NotFound(f"Sheet {sheet} not found") from e
            if status_code == 400 and "already exists" in str(e):
                raise Conflict(f"Sheet {sheet} already exists") from e
            logger.exception(f"Sheets API error while {action} on sheet {sheet}")
            raise StoreUnavailable(f"Spreadsheet service failed while {action}") from e
        except (GoogleAuthError, OSError) as e:
            logger.exception(f"Could not reach the Sheets API while {action} on sheet {sheet}")
            raise StoreUnavailable(f"Spreadsheet service failed while {action}") from e

    def _sheet_id(self, name: str) -> int:
        metadata = self._call(
            "reading spreadsheet metadata",
            name,
            self.service.spreadsheets().get(
                spreadsheetId=self.spreadsheet_id,
                fields="sheets.properties(sheetId,title)",
            ),
        )
        for sheet in metadata.get("sheets", []):
            properties = sheet.get("properties", {})
            if properties.get("title") == name:
                return properties["sheetId"]
        raise NotFound(f"Sheet {name} not found")

    def _batch_update(self, action: str, sheet: str, requests: List[dict]):
        return self._call(
            action,
            sheet,
            self.service.spreadsheets().batchUpdate(
                spreadsheetId=self.spreadsheet_id,
                body={"requests": requests},
            ),
        )

    def read_sheet(self, name: str) -> List[Row]:
        response = self._call(
            "reading rows",
            name,
            self.service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id,
                range=quote_sheet(name),
            ),
        )
        return [[str(cell) for cell in row] for row in response.get("values", [])]

    def append_rows(self, name: str, rows: List[Row]) -> None:
        self._call(
            "appending rows",
            name,
            self.service.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=row_range(name, 0),
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body={"values": rows},
            ),
        )

    def insert_rows(self, name: str, index: int, rows: List[Row]) -> None:
        sheet_id = self._sheet_id(name)
        self._batch_update("inserting rows", name, [{
            "insertDimension": {
                "range": {
                    "sheetId": sheet_id,
                    "dimension": "ROWS",
                    "startIndex": index,
                    "endIndex": index + len(rows),
                },
                "inheritFromBefore": index > 0,
            }
        }])
        self._call(
            "writing inserted rows",
            name,
            self.service.spreadsheets().values().update(
                spreadsheetId=self.spreadsheet_id,
                range=row_range(name, index),
                valueInputOption="RAW",
                body={"values": rows},
            ),
        )

    def update_row(self, name: str, index: int, row: Row) -> None:
        self._call(
            "updating a row",
            name,
            self.service.spreadsheets().values().update(
                spreadsheetId=self.spreadsheet_id,
                range=row_range(name, index),
                valueInputOption="RAW",
                body={"values": [row]},
            ),
        )

    def create_sheet(self, name: str) -> None:
        self._batch_update("creating a sheet", name, [{
            "addSheet": {"properties": {"title": name}}
        }])

    def rename_sheet(self, old_name: str, new_name: str) -> None:
        sheet_id = self._sheet_id(old_name)
        self._batch_update("renaming a sheet", old_name, [{
            "updateSheetProperties": {
                "properties": {"sheetId": sheet_id, "title": new_name},
                "fields": "title",
            }
        }])

    def delete_row_range(self, name: str, start: int, end: int) -> None:
        sheet_id = self._sheet_id(name)
        self._batch_update("deleting rows", name, [{
            "deleteDimension": {
                "range": {
                    "sheetId": sheet_id,
                    "dimension": "ROWS",
                    "startIndex": start,
                    "endIndex": end,
                }
            }
        }])
