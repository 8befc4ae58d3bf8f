# featurepulse/session/session_tracker.py
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from featurepulse.api.client import FeaturePulseAPI
from featurepulse.api.errors import FeaturePulseError
from featurepulse.logger import BasicLogger
from featurepulse.storage.key_value_store import KeyValueStore, StorageKeys

SESSION_TIMEOUT_SECONDS = 1800
APP_OPEN_ACTIVITY = "app_open"


class SessionTracker:
    """Reports an ``app_open`` activity at most once per session window.

    A foreground event starts a new session when no session was ever
    recorded or the last one is more than ``timeout_seconds`` old. The
    timestamp and session counter are persisted only after the backend
    accepts the activity, so a failed report is retried on the next
    qualifying foreground event. Failures are logged, never raised.
    """

    def __init__(
        self,
        api: FeaturePulseAPI,
        storage: KeyValueStore,
        timeout_seconds: int = SESSION_TIMEOUT_SECONDS,
        clock: Optional[Callable[[], float]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.api = api
        self.storage = storage
        self.timeout_seconds = timeout_seconds
        self.clock = clock or time.time
        self.logger = logger or BasicLogger("SessionTracker").get_logger()

    @property
    def last_session_time(self) -> float:
        return self.storage.get_float(StorageKeys.LAST_SESSION_TIME)

    @property
    def session_count(self) -> int:
        return self.storage.get_int(StorageKeys.SESSION_COUNT)

    def is_new_session(self, now: Optional[float] = None) -> bool:
        now = self.clock() if now is None else now
        last = self.last_session_time
        return last == 0 or (now - last) > self.timeout_seconds

    def track_app_open_if_new_session(self) -> bool:
        """Handle a foreground event. Returns ``True`` if a new session was recorded."""
        now = self.clock()
        if not self.is_new_session(now):
            return False

        try:
            self.api.track_activity(APP_OPEN_ACTIVITY)
        except FeaturePulseError as e:
            self.logger.warning("[SessionTracker] app_open not tracked, will retry next time: %s", e)
            return False

        self.storage.set_float(StorageKeys.LAST_SESSION_TIME, now)
        self.storage.set_int(StorageKeys.SESSION_COUNT, self.session_count + 1)
        self.logger.debug("[SessionTracker] New session recorded at %s", now)
        return True
