from __future__ import annotations


class FormSheetError(Exception):
    """Base class for failures surfaced in the response envelope."""

    def to_dict(self) -> dict[str, str]:
        return {"name": type(self).__name__, "message": str(self)}


class ValidationRejected(FormSheetError):
    pass


class RecordError(FormSheetError):
    pass


class LockTimeoutError(RecordError):
    pass


class TableNotFoundError(RecordError):
    pass


class StorageWriteError(RecordError):
    pass


class MalformedOrderingError(FormSheetError):
    pass


class NotifyError(FormSheetError):
    pass


class InternalError(FormSheetError):
    pass


def serialize_exception(exc: BaseException) -> dict[str, str]:
    if isinstance(exc, FormSheetError):
        return exc.to_dict()
    return InternalError(f"{type(exc).__name__}: {exc}").to_dict()
