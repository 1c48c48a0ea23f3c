"""Google Sheets client (service-account based).

Goals
- Provide a small, testable integration wrapper around the Sheets API.
- Keep all network calls here; keep row parsing and value layout deterministic
  and unit-testable.

This intentionally does not depend on FastAPI.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from dotenv import load_dotenv

load_dotenv(override=False)

# Convenience: allow local runs with only `.env.example` filled.
if not os.environ.get("SPREADSHEET_ID"):
    load_dotenv(dotenv_path=os.path.abspath(".env.example"), override=False)

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsError(RuntimeError):
    """Raised when a Sheets API call fails; the message is safe to return to callers."""


def col_to_a1(col_index_zero_based: int) -> str:
    """Convert 0-based column index to A1 column letters (0->A, 25->Z, 26->AA)."""

    if col_index_zero_based < 0:
        raise ValueError("col_index_zero_based must be >= 0")

    result = ""
    n = col_index_zero_based
    while True:
        n, rem = divmod(n, 26)
        result = chr(ord("A") + rem) + result
        if n == 0:
            break
        n -= 1

    return result


def quote_sheet_title(title: str) -> str:
    return "'" + title.replace("'", "''") + "'"


def a1_block_range(*, sheet_title: str, n_rows: int, n_cols: int) -> str:
    """Range covering `n_rows` x `n_cols` starting at A1, e.g. `'Employee Salaries'!A1:E4`."""

    if n_rows < 1 or n_cols < 1:
        raise ValueError("n_rows and n_cols must be >= 1")
    return f"{quote_sheet_title(sheet_title)}!A1:{col_to_a1(n_cols - 1)}{n_rows}"


def rows_to_records(rows: list[list[str]]) -> list[dict[str, str | None]]:
    """Map each data row onto the header row by position.

    The first row is the header. Cells missing from a short row map to None;
    cells beyond the header width are ignored.
    """

    if not rows:
        return []

    header = rows[0]
    records: list[dict[str, str | None]] = []
    for row in rows[1:]:
        records.append(
            {h: (row[j] if j < len(row) else None) for j, h in enumerate(header)}
        )
    return records


class GoogleSheetsClient:
    def __init__(
        self,
        *,
        spreadsheet_id: str,
        service_account_path: str,
    ) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._service_account_path = os.path.expanduser(service_account_path)

    @classmethod
    def from_env(cls) -> "GoogleSheetsClient":
        spreadsheet_id = os.environ.get("SPREADSHEET_ID")
        if not spreadsheet_id:
            raise ValueError("Missing SPREADSHEET_ID")

        service_account_path = os.environ.get("GOOGLE_SA_FILE") or os.path.abspath(
            "service-account.json"
        )

        return cls(
            spreadsheet_id=spreadsheet_id,
            service_account_path=service_account_path,
        )

    def _build_sheets_service(self) -> Any:
        # Lazy import so unit tests that only use the deterministic helpers
        # do not require Google client libs.
        from google.oauth2 import service_account
        from googleapiclient.discovery import build

        if not os.path.exists(self._service_account_path):
            raise FileNotFoundError(
                f"Service account file not found: {self._service_account_path}"
            )

        with open(self._service_account_path, "r", encoding="utf-8") as f:
            sa = json.load(f)
        creds = service_account.Credentials.from_service_account_info(
            sa,
            scopes=SCOPES,
        )

        return build(
            "sheets",
            "v4",
            credentials=creds,
            cache_discovery=False,
        )

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheet_id

    def list_sheets(self) -> list[dict[str, Any]]:
        """Return `[{"sheetId": ..., "title": ...}, ...]` for every tab."""

        sheets = self._build_sheets_service()
        meta = (
            sheets.spreadsheets()
            .get(
                spreadsheetId=self._spreadsheet_id,
                fields="sheets(properties(sheetId,title))",
            )
            .execute()
        )
        return [s.get("properties", {}) for s in meta.get("sheets", [])]

    def find_sheet_id(self, title: str) -> int | None:
        for props in self.list_sheets():
            if props.get("title") == title:
                # sheetId 0 may be omitted from the reply
                return props.get("sheetId", 0)
        return None

    def fetch_rows(self, *, a1_range: str) -> list[list[str]]:
        sheets = self._build_sheets_service()
        resp = (
            sheets.spreadsheets()
            .values()
            .get(spreadsheetId=self._spreadsheet_id, range=a1_range)
            .execute()
        )
        rows = resp.get("values", [])
        return rows if isinstance(rows, list) else []

    def read_records(self, *, a1_range: str) -> list[dict[str, str | None]]:
        """Read `a1_range` and return one header-keyed mapping per data row."""

        try:
            rows = self.fetch_rows(a1_range=a1_range)
        except Exception as e:
            logger.error(f"The Google Sheets API returned an error: {e}")
            raise SheetsError(
                "Failed to retrieve employee data from Google Sheet."
            ) from e

        if not rows:
            logger.info("No data found in Google Sheet.")
            return []

        records = rows_to_records(rows)
        logger.info(f"Read {len(records)} employee rows from {a1_range}")
        return records

    def _batch_update(self, requests: list[dict[str, Any]]) -> dict[str, Any]:
        sheets = self._build_sheets_service()
        return (
            sheets.spreadsheets()
            .batchUpdate(
                spreadsheetId=self._spreadsheet_id,
                body={"requests": requests},
            )
            .execute()
        )

    def recreate_sheet(self, title: str) -> int:
        """Delete the tab named `title` if present, then add a fresh one.

        Returns the new tab's sheetId.
        """

        try:
            existing_id = self.find_sheet_id(title)
            if existing_id is not None:
                logger.info(f"Existing sheet found: {title!r} (sheetId={existing_id})")
                self._batch_update([{"deleteSheet": {"sheetId": existing_id}}])

            resp = self._batch_update([{"addSheet": {"properties": {"title": title}}}])
            new_id = resp["replies"][0]["addSheet"]["properties"]["sheetId"]
        except Exception as e:
            logger.error(f"Error creating or deleting sheet {title!r}: {e}")
            raise SheetsError("Failed to create or delete sheet.") from e

        logger.info(f"Created sheet {title!r} (sheetId={new_id})")
        return new_id

    def update_values(self, *, a1_range: str, values: list[list[Any]]) -> dict[str, Any]:
        sheets = self._build_sheets_service()
        resp = (
            sheets.spreadsheets()
            .values()
            .update(
                spreadsheetId=self._spreadsheet_id,
                range=a1_range,
                valueInputOption="USER_ENTERED",
                body={"values": values},
            )
            .execute()
        )
        logger.info(f"Wrote {len(values)} rows to {a1_range}")
        return resp
