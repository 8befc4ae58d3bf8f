from featurepulse.storage.device_identity import DeviceIdentityProvider
from featurepulse.storage.key_value_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageKeys,
)

__all__ = [
    "DeviceIdentityProvider",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageKeys",
]
