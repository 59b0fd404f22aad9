from __future__ import annotations

import pendulum

TIMESTAMP_FORMAT = "YYYY-MM-DD HH:mm:ss"


def current_timestamp(timezone: str = "UTC") -> str:
    return pendulum.now(timezone).format(TIMESTAMP_FORMAT)
