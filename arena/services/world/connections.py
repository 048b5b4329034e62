import threading
from typing import List


class ConnectionRegistry:
    """Session ids currently connected to the game namespace."""

    def __init__(self):
        self._sids = set()
        self._lock = threading.Lock()

    def add(self, sid: str) -> None:
        with self._lock:
            self._sids.add(sid)

    def discard(self, sid: str) -> None:
        with self._lock:
            self._sids.discard(sid)

    def sids(self) -> List[str]:
        with self._lock:
            return sorted(self._sids)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sids)

    def __contains__(self, sid) -> bool:
        with self._lock:
            return sid in self._sids
