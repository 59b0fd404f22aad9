from __future__ import annotations

import logging

import gspread
from google.oauth2.service_account import Credentials

from ..errors import StorageWriteError, TableNotFoundError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsClient:
    """Google Sheets backed store: one worksheet per table."""

    backend = "google"

    def __init__(self, spreadsheet_id: str, service_account_file: str) -> None:
        credentials = Credentials.from_service_account_file(service_account_file, scopes=SCOPES)
        self._client = gspread.authorize(credentials)
        self._spreadsheet = self._client.open_by_key(spreadsheet_id)
        self.document_id = spreadsheet_id

    def get_table(self, name: str) -> gspread.Worksheet:
        try:
            return self._spreadsheet.worksheet(name)
        except gspread.WorksheetNotFound as exc:
            raise TableNotFoundError(
                f"Worksheet '{name}' not found. Please create it manually."
            ) from exc

    def read_header(self, worksheet: gspread.Worksheet) -> list[str]:
        try:
            return worksheet.row_values(1)
        except gspread.exceptions.APIError as exc:
            raise StorageWriteError(f"Could not read header of '{worksheet.title}': {exc}") from exc

    def row_count(self, worksheet: gspread.Worksheet) -> int:
        # Column A always holds the header or a timestamp.
        try:
            return len(worksheet.col_values(1))
        except gspread.exceptions.APIError as exc:
            raise StorageWriteError(f"Could not count rows of '{worksheet.title}': {exc}") from exc

    def append_row(self, worksheet: gspread.Worksheet, row_index: int, row: list[str]) -> None:
        self._ensure_grid(worksheet, rows=row_index, cols=len(row))
        # Submitted values are stored verbatim; only the timestamp is parsed as a date.
        self._write(worksheet, f"A{row_index}", row[:1], "USER_ENTERED")
        if len(row) > 1:
            self._write(worksheet, f"B{row_index}", row[1:], "RAW")

    def write_header(self, worksheet: gspread.Worksheet, header: list[str]) -> None:
        self._ensure_grid(worksheet, rows=1, cols=len(header))
        self._write(worksheet, "A1", header, "RAW")

    def _ensure_grid(self, worksheet: gspread.Worksheet, rows: int, cols: int) -> None:
        try:
            if rows > worksheet.row_count:
                worksheet.add_rows(rows - worksheet.row_count)
            if cols > worksheet.col_count:
                worksheet.add_cols(cols - worksheet.col_count)
        except gspread.exceptions.APIError as exc:
            raise StorageWriteError(f"Could not resize '{worksheet.title}': {exc}") from exc

    def _write(
        self,
        worksheet: gspread.Worksheet,
        start: str,
        values: list[str],
        value_input_option: str,
    ) -> None:
        try:
            worksheet.update(
                range_name=start,
                values=[values],
                value_input_option=value_input_option,
            )
        except gspread.exceptions.APIError as exc:
            raise StorageWriteError(f"Could not write {start} of '{worksheet.title}': {exc}") from exc
        logger.debug("Wrote %d cell(s) at %s!%s", len(values), worksheet.title, start)
