from __future__ import annotations

from uuid import uuid4

SHORT_ID_LENGTH = 8


def generate_id() -> str:
    return str(uuid4())


def short_id(value: str) -> str:
    """Leading characters of an id, enough to tell projects apart in logs."""
    return (value or "")[:SHORT_ID_LENGTH]


__all__ = ["generate_id", "short_id"]
