"""Google Sheets mirror — appends submission rows for human review."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import gspread
import requests
import structlog
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from geoform.errors import MirrorError

logger = structlog.get_logger()

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsMirror:
    """Append-only writer for one range of one spreadsheet.

    The gspread client is authorised lazily on first append, so a worker can
    start (and serve /addresses) before the credentials file is in place.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        sheet_range: str,
        credentials_file: str,
        timeout: float = 15.0,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_range = sheet_range
        self.credentials_file = credentials_file
        self.timeout = timeout
        self._spreadsheet: Optional[gspread.Spreadsheet] = None

    def _open(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            creds = Credentials.from_service_account_file(self.credentials_file, scopes=SCOPES)
            client = gspread.authorize(creds)
            # Bounds every Sheets API request made from the worker thread
            client.set_timeout(self.timeout)
            self._spreadsheet = client.open_by_key(self.spreadsheet_id)
        return self._spreadsheet

    def _append_sync(self, row: list[Any]) -> dict:
        return self._open().values_append(
            self.sheet_range,
            params={"valueInputOption": "RAW"},
            body={"values": [row]},
        )

    async def append_row(self, row: list[Any]) -> Optional[str]:
        """Append one row and return the range the API reports as updated.

        Raises:
            MirrorError: not configured, timed out, or rejected by the API
        """
        if not self.spreadsheet_id:
            raise MirrorError("Spreadsheet mirror is not configured (SPREADSHEET_ID)")

        try:
            # gspread is synchronous — run in thread pool
            result = await asyncio.to_thread(self._append_sync, row)
        except requests.Timeout as e:
            raise MirrorError(f"Spreadsheet append timed out after {self.timeout}s") from e
        except (gspread.exceptions.GSpreadException, GoogleAuthError, OSError, ValueError) as e:
            raise MirrorError(f"Spreadsheet append failed: {e}") from e

        updated_range = (result or {}).get("updates", {}).get("updatedRange")
        logger.info(
            "sheet_row_appended",
            spreadsheet_id=self.spreadsheet_id,
            updated_range=updated_range,
        )
        return updated_range
