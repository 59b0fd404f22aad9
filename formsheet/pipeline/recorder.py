from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable

from ..errors import RecordError, StorageWriteError
from ..sheets.lock import DocumentLock
from ..sheets.store import TIMESTAMP_COLUMN, SheetStore
from ..submissions.models import Submission
from .timeframe import current_timestamp

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "responses"


@dataclass(slots=True)
class RecordResult:
    sheet_name: str
    row_index: int
    row: list[str]
    added_columns: list[str]


class RowRecorder:
    """Appends submissions to a sheet, growing its header as new fields appear.

    Every read-modify-write of the header and rows happens while holding the
    document lock, so concurrent submissions cannot misalign columns.
    """

    def __init__(
        self,
        store: SheetStore,
        lock: DocumentLock,
        default_sheet_name: str = DEFAULT_SHEET_NAME,
        clock: Callable[[], str] | None = None,
        timezone: str = "UTC",
    ) -> None:
        self.store = store
        self.lock = lock
        self.default_sheet_name = default_sheet_name
        self.clock = clock or partial(current_timestamp, timezone)

    def record(self, submission: Submission, sheet_name: str | None = None) -> RecordResult:
        target = sheet_name or submission.sheet_name or self.default_sheet_name

        with self.lock.hold():
            try:
                result = self._append(submission, target)
            except RecordError:
                logger.exception("Failed to record submission to sheet '%s'", target)
                raise
            except Exception as exc:
                logger.exception("Failed to record submission to sheet '%s'", target)
                raise StorageWriteError(f"Could not write to sheet '{target}': {exc}") from exc

        logger.info(
            "Recorded row %d in '%s' (%d new column(s)%s)",
            result.row_index,
            result.sheet_name,
            len(result.added_columns),
            f": {', '.join(result.added_columns)}" if result.added_columns else "",
        )
        return result

    def _append(self, submission: Submission, sheet_name: str) -> RecordResult:
        table = self.store.get_table(sheet_name)

        old_header = self.store.read_header(table)
        new_header = list(old_header) or [TIMESTAMP_COLUMN]
        # Column A is always the server timestamp; a submitted field of that name is dropped.
        unclaimed = [name for name in submission.data_columns() if name != new_header[0]]
        row = [self.clock()]

        for column in new_header[1:]:
            row.append(submission.value(column))
            if column in unclaimed:
                unclaimed.remove(column)

        for column in unclaimed:
            row.append(submission.value(column))
            new_header.append(column)

        # Row 1 belongs to the header even when the sheet is still empty.
        next_row = max(self.store.row_count(table), 1) + 1
        self.store.append_row(table, next_row, row)

        if new_header != old_header:
            self.store.write_header(table, new_header)

        return RecordResult(
            sheet_name=sheet_name,
            row_index=next_row,
            row=row,
            added_columns=new_header[max(len(old_header), 1):],
        )
