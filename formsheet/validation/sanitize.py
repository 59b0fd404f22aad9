from __future__ import annotations

import html


def escape(raw: str | None) -> str:
    """HTML-escape untrusted text for embedding in notification markup.

    Not idempotent: escaping ``&amp;`` again yields ``&amp;amp;``.
    """
    if raw is None:
        return ""
    return html.escape(str(raw), quote=True)
