from __future__ import annotations

from typing import Any, Protocol

TIMESTAMP_COLUMN = "Timestamp"


class SheetStore(Protocol):
    """Grid store holding one table per worksheet of a single document.

    Row indexes are 1-based; row 1 holds the header.
    """

    backend: str
    document_id: str

    def get_table(self, name: str) -> Any: ...

    def read_header(self, table: Any) -> list[str]: ...

    def row_count(self, table: Any) -> int: ...

    def append_row(self, table: Any, row_index: int, row: list[str]) -> None: ...

    def write_header(self, table: Any, header: list[str]) -> None: ...
