"""Fixed-window inactivity check. Not a security boundary."""

import time
from typing import Optional

from ..core.config import settings
from ..core.logging import logger
from .kv_store import KeyValueStore


class SessionActivity:
    def __init__(self, kv: KeyValueStore, timeout_seconds: Optional[int] = None):
        self.kv = kv
        self.key = settings.session_key
        if timeout_seconds is None:
            timeout_seconds = settings.session_timeout_seconds
        self.timeout_ms = int(timeout_seconds * 1000)

    def check(self, now_ms: Optional[int] = None) -> bool:
        """Record activity and report whether the session is still alive."""
        now_ms = int(time.time() * 1000) if now_ms is None else now_ms
        last_activity = self._last_activity()

        if last_activity is not None and now_ms - last_activity > self.timeout_ms:
            logger.info(f"[session] expired after {now_ms - last_activity} ms of inactivity")
            self.kv.remove(self.key)
            return False

        self.kv.set(self.key, str(now_ms))
        return True

    def _last_activity(self) -> Optional[int]:
        raw = self.kv.get(self.key)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"[session] ignoring unparseable timestamp '{raw}'")
            return None
