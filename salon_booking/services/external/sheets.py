"""
Async wrapper around the Google Sheets values API.
"""

import asyncio
from typing import Any, Dict, List

import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ...core.exceptions import SheetsAPIError
from ...utils.logging import get_logger

logger = get_logger("sheets")


class SheetsClient:
    """Reads and appends rows in one spreadsheet."""

    def __init__(self, credentials, spreadsheet_id: str, timeout: float = 10.0):
        self.credentials = credentials
        self.spreadsheet_id = spreadsheet_id
        self.timeout = timeout

    def _values(self):
        # httplib2 connections are not thread-safe, so each call gets its own
        http = google_auth_httplib2.AuthorizedHttp(
            self.credentials, http=httplib2.Http(timeout=self.timeout)
        )
        service = build("sheets", "v4", http=http, cache_discovery=False)
        return service.spreadsheets().values()

    async def _run(self, description: str, fn) -> Dict[str, Any]:
        try:
            return await asyncio.to_thread(fn)
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            logger.error(f"{description} failed: HTTP {status}")
            raise SheetsAPIError(f"{description} failed: HTTP {status}") from e
        except (GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            logger.error(f"{description} failed: {e}")
            raise SheetsAPIError(f"{description} failed: {e}") from e

    async def get_values(self, range_: str) -> List[List[str]]:
        """Return the rows of ``range_`` (an empty list for an empty range)."""

        def _get() -> Dict[str, Any]:
            return self._values().get(
                spreadsheetId=self.spreadsheet_id, range=range_
            ).execute()

        result = await self._run(f"values.get {range_}", _get)
        return result.get("values", []) or []

    async def append_values(
        self, range_: str, rows: List[List[Any]], value_input_option: str = "RAW"
    ) -> Dict[str, Any]:
        """Append ``rows`` after the last row of ``range_``."""

        def _append() -> Dict[str, Any]:
            return self._values().append(
                spreadsheetId=self.spreadsheet_id,
                range=range_,
                valueInputOption=value_input_option,
                insertDataOption="INSERT_ROWS",
                body={"values": rows},
            ).execute()

        return await self._run(f"values.append {range_}", _append)
