"""
FastAPI app exposing the form endpoint.

Endpoints:
    POST /        Record a form submission, optionally email it
    POST /exec    Same as POST /, for forms pointed at a script-style URL
    GET  /health  Liveness probe

Usage:
    uvicorn --factory formsheet.web.app:create_app --port 8000
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import Settings
from ..pipeline.handler import SubmissionHandler, build_handler, error_envelope
from ..submissions.models import Submission

logger = logging.getLogger(__name__)


async def read_submission(request: Request) -> Submission:
    form = await request.form()
    pairs = []
    for name, value in form.multi_items():
        if not isinstance(value, str):
            # File parts are stored by name only.
            value = value.filename or ""
        pairs.append((name, value))
    return Submission.from_pairs(pairs)


def create_app(
    settings: Settings | None = None,
    handler: SubmissionHandler | None = None,
) -> FastAPI:
    if handler is None:
        if settings is None:
            settings = Settings.from_env()
        handler = build_handler(settings)
    elif settings is None:
        settings = Settings()

    app = FastAPI(
        title="formsheet",
        description="Form backend that appends submissions to Google Sheets.",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.handler = handler

    @app.post("/")
    @app.post("/exec")
    async def submit(request: Request) -> JSONResponse:
        try:
            submission = await read_submission(request)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Could not parse form body")
            return JSONResponse(error_envelope(exc))

        logger.info("Received submission with %d field(s)", len(submission.fields))
        envelope = await run_in_threadpool(handler.handle, submission)
        return JSONResponse(envelope)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "backend": handler.recorder.store.backend}

    return app
