# featurepulse/storage/device_identity.py
from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional

from featurepulse.logger import BasicLogger
from featurepulse.storage.key_value_store import KeyValueStore, StorageKeys


class DeviceIdentityProvider:
    """Get-or-create the device identifier.

    The identifier is generated once (uppercase UUID4) and cached in the
    key-value store; later calls always return the stored value.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        id_factory: Optional[Callable[[], str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.storage = storage
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()).upper())
        self.logger = logger or BasicLogger("DeviceIdentityProvider").get_logger()

    def get_or_create(self) -> str:
        stored = self.storage.get_string(StorageKeys.DEVICE_ID)
        if stored:
            return stored

        new_id = self._id_factory()
        if not new_id:
            raise ValueError("Device id factory returned an empty identifier")

        self.storage.set_string(StorageKeys.DEVICE_ID, new_id)
        self.logger.info("[DeviceIdentityProvider] Generated new device id")
        return new_id
