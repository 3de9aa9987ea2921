from __future__ import annotations

from contextlib import suppress
from typing import Any


def trace(log: Any, level: str, event: str, **context: Any) -> None:
    """Emit a diagnostic event; a failing log sink never aborts the caller."""
    with suppress(Exception):
        getattr(log, level)(event, **context)
