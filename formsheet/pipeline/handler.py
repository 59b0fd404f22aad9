from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from ..config import Settings
from ..errors import FormSheetError, NotifyError, ValidationRejected, serialize_exception
from ..notifications.mailer import EmailNotifier
from ..notifications.reporting import format_mail_body
from ..sheets.client import SheetsClient
from ..sheets.lock import document_lock
from ..sheets.memory import MemorySheetStore
from ..sheets.store import SheetStore
from ..submissions.models import Submission
from ..submissions.parsers import parse_name_order
from ..validation.submission import ensure_human
from .recorder import RowRecorder

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(
        self,
        recipient: str | None,
        subject: str,
        html_body: str,
        text_body: str | None = None,
        reply_to: str | None = None,
    ) -> None: ...


def success_envelope(submission: Submission) -> dict[str, Any]:
    return {"result": "success", "data": json.dumps(submission.to_echo())}


def error_envelope(exc: BaseException) -> dict[str, Any]:
    return {"result": "error", "error": serialize_exception(exc)}


class SubmissionHandler:
    """Runs one submission through honeypot check, recording and notification."""

    def __init__(
        self,
        recorder: RowRecorder,
        notifier: Notifier,
        to_address: str = "",
        subject: str = "Contact form submitted",
        reply_to_field: str = "",
    ) -> None:
        self.recorder = recorder
        self.notifier = notifier
        self.to_address = to_address
        self.subject = subject
        self.reply_to_field = reply_to_field

    def handle(self, submission: Submission) -> dict[str, Any]:
        recorded = False
        try:
            ensure_human(submission)
            self.recorder.record(submission)
            recorded = True

            order = parse_name_order(submission.name_order)
            recipient = self.to_address or submission.send_email
            if recipient:
                body = format_mail_body(submission, order)
                reply_to = submission.first(self.reply_to_field) if self.reply_to_field else ""
                self.notifier.notify(
                    recipient,
                    self.subject,
                    body.html,
                    text_body=body.text,
                    reply_to=reply_to or None,
                )
        except ValidationRejected as exc:
            logger.warning("Rejected submission: %s", exc)
            return error_envelope(exc)
        except NotifyError as exc:
            logger.error("Submission stored but notification failed: %s", exc)
            return error_envelope(exc)
        except FormSheetError as exc:
            logger.error(
                "Submission failed (%s, recorded=%s): %s", type(exc).__name__, recorded, exc
            )
            return error_envelope(exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error while handling submission")
            return error_envelope(exc)

        return success_envelope(submission)


def build_store(settings: Settings) -> SheetStore:
    if settings.backend == "memory":
        store = MemorySheetStore()
        store.add_sheet(settings.default_sheet_name)
        return store
    return SheetsClient(
        spreadsheet_id=settings.spreadsheet_id,
        service_account_file=str(settings.service_account_file),
    )


def build_handler(settings: Settings, store: SheetStore | None = None) -> SubmissionHandler:
    if store is None:
        store = build_store(settings)
    recorder = RowRecorder(
        store=store,
        lock=document_lock(store.document_id, timeout=settings.lock_timeout),
        default_sheet_name=settings.default_sheet_name,
        timezone=settings.timezone,
    )
    return SubmissionHandler(
        recorder=recorder,
        notifier=EmailNotifier(settings.smtp),
        to_address=settings.to_address,
        subject=settings.mail_subject,
        reply_to_field=settings.reply_to_field,
    )
