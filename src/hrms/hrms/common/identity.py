from __future__ import annotations

import uuid


def new_identity() -> str:
    """Random UUID4 string; collisions are negligible without coordination."""
    return str(uuid.uuid4())
