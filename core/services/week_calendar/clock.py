from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """The one place the engine layer reads the wall clock."""
    return datetime.now(timezone.utc)


def fixed_clock(instant: datetime) -> Clock:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)

    def _now() -> datetime:
        return instant

    return _now


__all__ = ["Clock", "utc_now", "fixed_clock"]
