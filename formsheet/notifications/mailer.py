from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid

from ..errors import NotifyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmtpConfig:
    host: str = ""
    port: int = 587
    user: str = ""
    password: str = ""
    use_ssl: bool = False
    sender: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.host and self.sender)


def build_message(
    sender: str,
    recipient: str,
    subject: str,
    html_body: str,
    text_body: str | None = None,
    reply_to: str | None = None,
) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["From"] = sender
    msg["To"] = recipient
    msg["Subject"] = subject
    msg["Date"] = formatdate(localtime=True)
    msg["Message-ID"] = make_msgid()
    if reply_to:
        msg["Reply-To"] = reply_to
    if text_body:
        msg.attach(MIMEText(text_body, "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    return msg


class EmailNotifier:
    def __init__(self, config: SmtpConfig) -> None:
        self.config = config

    def notify(
        self,
        recipient: str | None,
        subject: str,
        html_body: str,
        text_body: str | None = None,
        reply_to: str | None = None,
    ) -> None:
        if not recipient:
            return
        if not self.config.configured:
            raise NotifyError("SMTP is not configured; set SMTP_HOST and MAIL_FROM or SMTP_USER.")

        msg = build_message(
            sender=self.config.sender,
            recipient=recipient,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            reply_to=reply_to,
        )

        try:
            if self.config.use_ssl:
                with smtplib.SMTP_SSL(self.config.host, self.config.port) as server:
                    self._deliver(server, msg)
            else:
                with smtplib.SMTP(self.config.host, self.config.port) as server:
                    server.starttls()
                    self._deliver(server, msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send notification to %s: %s", recipient, exc)
            raise NotifyError(f"Could not send notification to {recipient}: {exc}") from exc

        logger.info("Sent notification to %s", recipient)

    def _deliver(self, server: smtplib.SMTP, msg: MIMEMultipart) -> None:
        if self.config.user:
            server.login(self.config.user, self.config.password)
        server.send_message(msg)
