from __future__ import annotations

import pytest

from formsheet.pipeline.handler import SubmissionHandler
from formsheet.pipeline.recorder import RowRecorder
from formsheet.sheets.lock import DocumentLock
from formsheet.sheets.memory import MemorySheetStore

FIXED_TIMESTAMP = "2026-10-19 09:30:00"


class FakeNotifier:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[dict] = []
        self.error = error

    def notify(self, recipient, subject, html_body, text_body=None, reply_to=None) -> None:
        if not recipient:
            return
        self.calls.append(
            {
                "recipient": recipient,
                "subject": subject,
                "html": html_body,
                "text": text_body,
                "reply_to": reply_to,
            }
        )
        if self.error is not None:
            raise self.error


@pytest.fixture
def store() -> MemorySheetStore:
    store = MemorySheetStore()
    store.add_sheet("responses", ["Timestamp"])
    return store


@pytest.fixture
def lock() -> DocumentLock:
    return DocumentLock(timeout=2.0)


@pytest.fixture
def recorder(store: MemorySheetStore, lock: DocumentLock) -> RowRecorder:
    return RowRecorder(store=store, lock=lock, clock=lambda: FIXED_TIMESTAMP)


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def handler(recorder: RowRecorder, notifier: FakeNotifier) -> SubmissionHandler:
    return SubmissionHandler(recorder=recorder, notifier=notifier)
