from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now(timezone.utc)


def now_iso() -> str:
    return now_utc().isoformat()
