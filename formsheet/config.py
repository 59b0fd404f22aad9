from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .notifications.mailer import SmtpConfig

BACKENDS = ("google", "memory")


def load_environment() -> None:
    """Load environment variables from a .env file if present."""
    env_file = os.getenv("ENV_FILE", ".env")
    env_path = Path(env_file)
    if env_path.is_file():
        load_dotenv(env_path)
    else:
        # Fallback: load .env in current working directory if ENV_FILE is missing
        default_path = Path(".env")
        if default_path.is_file():
            load_dotenv(default_path)


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    backend: str = "google"
    spreadsheet_id: str = ""
    service_account_file: Path | None = None
    default_sheet_name: str = "responses"
    lock_timeout: float = 30.0
    timezone: str = "UTC"
    to_address: str = ""
    mail_subject: str = "Contact form submitted"
    reply_to_field: str = ""
    smtp: SmtpConfig = SmtpConfig()
    allowed_origins: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> "Settings":
        load_environment()

        backend = os.getenv("SHEETS_BACKEND", "google").strip().lower()
        if backend not in BACKENDS:
            raise RuntimeError(
                f"Unsupported SHEETS_BACKEND {backend!r}; expected one of {', '.join(BACKENDS)}"
            )

        spreadsheet_id = os.getenv("SPREADSHEET_ID", "")
        service_account_file = os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE", "")

        if backend == "google":
            missing = [
                name
                for name, value in {
                    "SPREADSHEET_ID": spreadsheet_id,
                    "GOOGLE_SERVICE_ACCOUNT_FILE": service_account_file,
                }.items()
                if not value
            ]
            if missing:
                raise RuntimeError(
                    f"Missing required environment variable(s): {', '.join(missing)}"
                )

        try:
            lock_timeout = float(os.getenv("LOCK_TIMEOUT_SECONDS", "30"))
            smtp_port = int(os.getenv("SMTP_PORT", "587"))
        except ValueError as exc:
            raise RuntimeError(f"Invalid numeric setting: {exc}") from exc

        smtp_user = os.getenv("SMTP_USER", "")
        smtp = SmtpConfig(
            host=os.getenv("SMTP_HOST", ""),
            port=smtp_port,
            user=smtp_user,
            password=os.getenv("SMTP_PASS", ""),
            use_ssl=_flag("SMTP_SSL"),
            sender=os.getenv("MAIL_FROM", smtp_user),
        )

        origins_raw = os.getenv("ALLOWED_ORIGINS", "*")
        allowed_origins = tuple(
            origin.strip()
            for origin in origins_raw.split(",")
            if origin.strip()
        )

        return cls(
            backend=backend,
            spreadsheet_id=spreadsheet_id,
            service_account_file=(
                Path(service_account_file).expanduser().resolve()
                if service_account_file
                else None
            ),
            default_sheet_name=os.getenv("DEFAULT_SHEET_NAME", "responses"),
            lock_timeout=lock_timeout,
            timezone=os.getenv("TIMEZONE", "UTC"),
            to_address=os.getenv("TO_ADDRESS", "").strip(),
            mail_subject=os.getenv("MAIL_SUBJECT", "Contact form submitted"),
            reply_to_field=os.getenv("REPLY_TO_FIELD", "").strip(),
            smtp=smtp,
            allowed_origins=allowed_origins or ("*",),
        )
