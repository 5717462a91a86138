# portal/core/session.py
from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional

from portal.core.logger import get_logger

logger = get_logger("session")


@dataclass
class PortalSession:
    """
    Credentials for one signed-in portal user.
    Passed explicitly to the ApiClient instead of living in global storage.
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def store_tokens(self, payload: dict) -> None:
        # login responses carry the tokens either at the top level or under "data"
        data = payload.get("data") if isinstance(payload.get("data"), dict) else payload
        self.access_token = data.get("accessToken") or self.access_token
        self.refresh_token = data.get("refreshToken") or self.refresh_token

    def clear(self) -> None:
        self.access_token = None
        self.refresh_token = None


@dataclass
class RequestTracker:
    """
    Hands out increasing tokens per key so a slow response for an old
    selection cannot overwrite the result of a newer one.

    Tokens come from one counter shared by all keys, so a key can be dropped
    once its newest result is delivered. At most `max_keys` keys are kept;
    the least recently used one is evicted first and its pending result
    counts as stale.
    """

    max_keys: int = 1024
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _latest: OrderedDict[str, int] = field(default_factory=OrderedDict)
    _counter: int = field(default=0, repr=False)

    def begin(self, key: str) -> int:
        with self._lock:
            self._counter += 1
            self._latest[key] = self._counter
            self._latest.move_to_end(key)
            while len(self._latest) > self.max_keys:
                evicted, _ = self._latest.popitem(last=False)
                logger.debug("Evicted request key %s", evicted)
            return self._counter

    def is_current(self, key: str, token: int) -> bool:
        with self._lock:
            return self._latest.get(key) == token

    def apply_if_current(self, key: str, token: int, result):
        """Return `result` if `token` is still the newest for `key`, else None."""
        with self._lock:
            current = self._latest.get(key) == token
            if current:
                del self._latest[key]
        if current:
            return result
        logger.debug("Discarding stale result for %s (token %s)", key, token)
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)
