from __future__ import annotations

import json
import logging
from typing import Optional

from ..errors import MalformedOrderingError

logger = logging.getLogger(__name__)


def parse_name_order(raw: Optional[str]) -> list[str] | None:
    if not raw:
        return None

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Could not parse field order %r: %s", raw, exc)
        raise MalformedOrderingError(f"formDataNameOrder is not valid JSON: {exc}") from exc

    if not isinstance(parsed, list) or not all(isinstance(name, str) for name in parsed):
        raise MalformedOrderingError("formDataNameOrder must be a JSON array of field names.")
    return parsed


def scrub(text: str | None) -> str:
    return text.strip() if text else ""
