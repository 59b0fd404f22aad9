from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..submissions.models import Submission
from ..validation.sanitize import escape

HTML_BLOCK = (
    "<h4 style='text-transform: capitalize; margin-bottom: 0'>{name}</h4>"
    "<div>{value}</div>"
)


@dataclass(slots=True)
class MailBody:
    html: str
    text: str


def capitalize_words(name: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in name.split(" "))


def format_mail_body(submission: Submission, order: Sequence[str] | None = None) -> MailBody:
    """Render one heading/value block per field.

    ``order`` comes from the form's ordering hint; without it the submission's
    own field order is used, minus the reserved control fields.
    """
    names = list(order) if order is not None else submission.data_columns()

    html_blocks: list[str] = []
    text_blocks: list[str] = []
    for name in names:
        value = submission.value(name)
        html_blocks.append(HTML_BLOCK.format(name=escape(name), value=escape(value)))
        text_blocks.append(f"{capitalize_words(name)}\n{value}")

    return MailBody(html="".join(html_blocks), text="\n\n".join(text_blocks))
