from __future__ import annotations

import threading
from typing import List, Set


class SubscriptionRegistry:
    """Connected realtime clients, keyed by socket session id.

    Connect and disconnect are the only transitions; nothing is kept about a
    client once it disconnects.
    """

    def __init__(self):
        self._subscribers: Set[str] = set()
        self._lock = threading.Lock()

    def connect(self, sid: str) -> None:
        with self._lock:
            self._subscribers.add(sid)

    def disconnect(self, sid: str) -> None:
        with self._lock:
            self._subscribers.discard(sid)

    def snapshot(self) -> List[str]:
        with self._lock:
            return list(self._subscribers)

    def __contains__(self, sid: object) -> bool:
        with self._lock:
            return sid in self._subscribers

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)
