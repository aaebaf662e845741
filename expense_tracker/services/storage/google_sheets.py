"""
Google Sheets Key-Value Store

An optional backend for users who want their ledger in a spreadsheet they
can open, share and back up without running anything else.

Layout: one worksheet (``Storage`` by default) with a header row and one row
per slot:

    key      | value
    expenses | [{"id": 1, ...}]
    budgets  | {"Travel": 500.0}

TRADEOFFS:
- A cell holds at most 50,000 characters, which caps the ledger size
  (a few hundred expenses); larger values are rejected, never truncated
- No transactions (each slot is written with a single cell update)
- Every API call is retried with exponential backoff, since quota errors
  from the Sheets API are transient
"""

from typing import Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from expense_tracker.config import get_settings
from expense_tracker.services.storage.interface import (
    ConnectionError,
    KeyValueStore,
    NotFoundError,
    StorageError,
)


SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]
STORAGE_COLUMNS = ["key", "value"]

# Hard limit imposed by Google Sheets on a single cell
MAX_CELL_CHARS = 50000

sheets_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    reraise=True,
)


class GoogleSheetsClient:
    """Authenticates once and hands out the storage worksheet."""

    def __init__(self):
        self._settings = get_settings().google_sheets
        self._gc: Optional[gspread.Client] = None
        self._book: Optional[gspread.Spreadsheet] = None

    @sheets_retry
    def connect(self) -> gspread.Client:
        """Authorize with the service account key (only on first call)."""
        if self._gc is not None:
            return self._gc

        key_file = self._settings.credentials_path
        try:
            credentials = Credentials.from_service_account_file(key_file, scopes=SCOPES)
            self._gc = gspread.authorize(credentials)
        except FileNotFoundError:
            raise ConnectionError(f"Service account key file not found: {key_file}")
        except Exception as e:
            raise ConnectionError(f"Could not authorize with Google Sheets: {e}")
        return self._gc

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        if self._book is None:
            try:
                self._book = self.connect().open_by_key(self._settings.spreadsheet_id)
            except gspread.SpreadsheetNotFound:
                raise NotFoundError(
                    f"No spreadsheet with key {self._settings.spreadsheet_id}"
                )
        return self._book

    def get_storage_sheet(self) -> gspread.Worksheet:
        """The key/value worksheet, created with its header row if missing."""
        book = self.get_spreadsheet()
        title = self._settings.storage_sheet_name
        try:
            return book.worksheet(title)
        except gspread.WorksheetNotFound:
            sheet = book.add_worksheet(title=title, rows=10, cols=len(STORAGE_COLUMNS))
            sheet.append_row(STORAGE_COLUMNS)
            return sheet


class GoogleSheetsStore(KeyValueStore):
    """Slots stored as rows of the storage worksheet."""

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    @sheets_retry
    def _read_rows(self) -> list[list[str]]:
        """Every row below the header."""
        try:
            return self._client.get_storage_sheet().get_all_values()[1:]
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to read storage sheet: {e}")

    def get(self, key: str) -> Optional[str]:
        for row in self._read_rows():
            if row and row[0] == key:
                return row[1] if len(row) > 1 else ""
        return None

    def set(self, key: str, value: str) -> None:
        if len(value) > MAX_CELL_CHARS:
            raise StorageError(
                f"Slot '{key}' is {len(value)} characters; "
                f"Google Sheets cells hold at most {MAX_CELL_CHARS}"
            )
        self._write(key, value)

    @sheets_retry
    def _write(self, key: str, value: str) -> None:
        try:
            sheet = self._client.get_storage_sheet()
            # Sheet rows are 1-based and row 1 is the header
            for row_number, row in enumerate(sheet.get_all_values()[1:], start=2):
                if row and row[0] == key:
                    sheet.update_cell(row_number, 2, value)
                    return
            sheet.append_row([key, value], value_input_option="RAW")
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to write slot '{key}': {e}")
