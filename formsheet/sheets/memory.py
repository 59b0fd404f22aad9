from __future__ import annotations

import copy

from ..errors import TableNotFoundError


class MemorySheetStore:
    """In-process grid store, used for local runs and tests."""

    backend = "memory"

    def __init__(
        self,
        sheets: dict[str, list[list[str]]] | None = None,
        document_id: str = "memory",
    ) -> None:
        self.document_id = document_id
        self._sheets: dict[str, list[list[str]]] = {
            name: [list(row) for row in rows] for name, rows in (sheets or {}).items()
        }

    def add_sheet(self, name: str, header: list[str] | None = None) -> None:
        self._sheets[name] = [list(header)] if header else []

    def rows(self, name: str) -> list[list[str]]:
        return copy.deepcopy(self.get_table(name))

    def get_table(self, name: str) -> list[list[str]]:
        try:
            return self._sheets[name]
        except KeyError as exc:
            raise TableNotFoundError(f"Sheet '{name}' not found.") from exc

    def read_header(self, table: list[list[str]]) -> list[str]:
        return list(table[0]) if table else []

    def row_count(self, table: list[list[str]]) -> int:
        return len(table)

    def append_row(self, table: list[list[str]], row_index: int, row: list[str]) -> None:
        while len(table) < row_index - 1:
            table.append([])
        if row_index <= len(table):
            table[row_index - 1] = list(row)
        else:
            table.append(list(row))

    def write_header(self, table: list[list[str]], header: list[str]) -> None:
        if table:
            table[0] = list(header)
        else:
            table.append(list(header))
