"""In-process cache of recently emitted notification fingerprints."""

from __future__ import annotations

import hashlib
import json
import threading
from datetime import datetime, timedelta
from typing import Any, Mapping


def notification_fingerprint(alert_id: int, metadata: Mapping[str, Any]) -> str:
    """Return ``sha256(alert_id + canonical metadata)`` as a hex digest."""

    canonical = json.dumps(metadata, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(f"{alert_id}:{canonical}".encode("utf-8")).hexdigest()


class FingerprintCache:
    """Remember fingerprints for ``window`` so identical content is not re-sent.

    A zero window disables the cache entirely.
    """

    def __init__(self, window: timedelta) -> None:
        self.window = window
        self._entries: dict[str, datetime] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.window > timedelta(0)

    def seen(self, fingerprint: str, now: datetime) -> bool:
        if not self.enabled:
            return False
        with self._lock:
            self._purge(now)
            return fingerprint in self._entries

    def remember(self, fingerprint: str, now: datetime) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._entries[fingerprint] = now + self.window

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _purge(self, now: datetime) -> None:
        expired = [key for key, expires_at in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]


__all__ = ["FingerprintCache", "notification_fingerprint"]
