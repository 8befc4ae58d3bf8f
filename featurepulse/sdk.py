"""
FeaturePulse SDK entry point.

``FeaturePulse`` is an explicitly constructed context: it owns the user,
the server configuration snapshot, the API client, the feature request
store and the session tracker for one app install. Nothing here is a
process-wide singleton, so tests (or multi-tenant hosts) can run several
isolated instances side by side.

Example::

    from featurepulse import FeaturePulse, Payment, SDKConfig

    sdk = FeaturePulse(SDKConfig(api_key="fp_live_..."))
    sdk.update_user_payment(Payment.monthly("7.99", "USD"))
    sdk.track_app_open_if_new_session()

    store = sdk.store
    store.load_feature_requests()
    store.toggle_vote(store.feature_requests[0].id)
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

import requests

from featurepulse.api.client import FeaturePulseAPI
from featurepulse.api.errors import FeaturePulseError
from featurepulse.api.network_client import NetworkClient
from featurepulse.config.sdk_config import SDKConfig
from featurepulse.logger import BasicLogger
from featurepulse.models.payment import Payment
from featurepulse.models.server_config import ServerConfigState, ServerConfiguration
from featurepulse.models.user import User
from featurepulse.session.session_tracker import SessionTracker
from featurepulse.storage.device_identity import DeviceIdentityProvider
from featurepulse.storage.key_value_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageKeys,
)
from featurepulse.store.feature_request_store import FeatureRequestStore

DEFAULT_CTA_MIN_SESSIONS = 3


class FeaturePulse:
    def __init__(
        self,
        config: SDKConfig,
        storage: Optional[KeyValueStore] = None,
        session: Optional[requests.Session] = None,
        clock: Optional[Callable[[], float]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.logger = logger or BasicLogger(
            "FeaturePulse",
            level=config.log_level,
            log_to_file=config.log_to_file,
            log_dir=config.log_dir,
        ).get_logger()

        if storage is None:
            if config.storage_path:
                storage = JsonFileKeyValueStore(config.storage_path, logger=self.logger)
            else:
                storage = InMemoryKeyValueStore()
        self.storage = storage

        device_id = DeviceIdentityProvider(storage, logger=self.logger).get_or_create()
        self.user = User(device_id=device_id)
        self.server_config_state = ServerConfigState()

        network = NetworkClient(config, session=session, logger=self.logger)
        self.api = FeaturePulseAPI(
            config,
            self.user,
            self.server_config_state,
            network=network,
            logger=self.logger,
        )
        self.store = FeatureRequestStore(
            self.api,
            self.user,
            self.server_config_state,
            logger=self.logger,
        )
        self.session_tracker = SessionTracker(
            self.api,
            storage,
            timeout_seconds=config.session_timeout_seconds,
            clock=clock,
            logger=self.logger,
        )

    # ----------------------------------------------------------------------
    # Server-controlled settings
    # ----------------------------------------------------------------------
    @property
    def server_config(self) -> ServerConfiguration:
        return self.server_config_state.current

    # ----------------------------------------------------------------------
    # User
    # ----------------------------------------------------------------------
    def update_user(
        self,
        custom_id: Optional[str] = None,
        email: Optional[str] = None,
        name: Optional[str] = None,
    ) -> bool:
        """Set the provided metadata fields, then sync the user best-effort."""
        if custom_id is not None:
            self.user.custom_id = custom_id
        if email is not None:
            self.user.email = email
        if name is not None:
            self.user.name = name
        return self._sync_user_quietly()

    def update_user_payment(self, payment: Payment) -> bool:
        """Attach ``payment`` to the user and sync best-effort."""
        self.user.payment = payment
        return self._sync_user_quietly()

    def _sync_user_quietly(self) -> bool:
        try:
            self.api.sync_user()
        except FeaturePulseError as e:
            self.logger.warning("[FeaturePulse] User sync failed: %s", e)
            return False
        return True

    # ----------------------------------------------------------------------
    # Sessions & CTA banner
    # ----------------------------------------------------------------------
    def track_app_open_if_new_session(self) -> bool:
        return self.session_tracker.track_app_open_if_new_session()

    def should_show_cta_banner(
        self,
        min_sessions: int = DEFAULT_CTA_MIN_SESSIONS,
        condition: Optional[Callable[[], bool]] = None,
    ) -> bool:
        """Whether the feedback banner should be shown.

        With ``condition`` the banner follows it (manual trigger); otherwise
        it appears once ``min_sessions`` sessions have been tracked. A
        dismissed banner never comes back.
        """
        if self.storage.get_bool(StorageKeys.CTA_DISMISSED):
            return False
        if condition is not None:
            return bool(condition())
        return self.session_tracker.session_count >= min_sessions

    def dismiss_cta_banner(self) -> None:
        self.storage.set_bool(StorageKeys.CTA_DISMISSED, True)
