from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence, Union

from .parsers import scrub

SHEET_NAME_FIELD = "formGoogleSheetName"
NAME_ORDER_FIELD = "formDataNameOrder"
SEND_EMAIL_FIELD = "formGoogleSendEmail"
RESERVED_FIELDS = frozenset({SHEET_NAME_FIELD, NAME_ORDER_FIELD, SEND_EMAIL_FIELD})

HONEYPOT_FIELDS = ("itsatrap", "submit")

VALUE_SEPARATOR = ", "

FieldValue = Union[str, Sequence[str]]


@dataclass(slots=True)
class Submission:
    """One form payload: field name -> values, in first-seen order."""

    fields: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "Submission":
        fields: dict[str, list[str]] = {}
        for name, value in pairs:
            fields.setdefault(name, []).append(value)
        return cls(fields=fields)

    @classmethod
    def from_mapping(cls, data: Mapping[str, FieldValue]) -> "Submission":
        fields: dict[str, list[str]] = {}
        for name, value in data.items():
            if isinstance(value, str):
                fields[name] = [value]
            else:
                fields[name] = [str(item) for item in value]
        return cls(fields=fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def value(self, name: str) -> str:
        """Flattened value of ``name``; missing fields read as an empty string."""
        return VALUE_SEPARATOR.join(self.fields.get(name, []))

    def first(self, name: str) -> str:
        values = self.fields.get(name)
        return scrub(values[0]) if values else ""

    def data_columns(self) -> list[str]:
        return [name for name in self.fields if name not in RESERVED_FIELDS]

    @property
    def sheet_name(self) -> str:
        return self.first(SHEET_NAME_FIELD)

    @property
    def name_order(self) -> str:
        return self.first(NAME_ORDER_FIELD)

    @property
    def send_email(self) -> str:
        return self.first(SEND_EMAIL_FIELD)

    def to_echo(self) -> dict[str, list[str]]:
        return {name: list(values) for name, values in self.fields.items()}
