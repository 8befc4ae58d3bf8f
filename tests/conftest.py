# tests/conftest.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

import pytest

from featurepulse.api.client import FeaturePulseAPI
from featurepulse.api.network_client import NetworkClient
from featurepulse.config.sdk_config import SDKConfig
from featurepulse.logger import BasicLogger
from featurepulse.models.server_config import ServerConfigState
from featurepulse.models.user import User
from featurepulse.storage.key_value_store import InMemoryKeyValueStore
from featurepulse.store.feature_request_store import FeatureRequestStore

DEVICE_ID = "DEVICE-1234"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        if text is not None:
            self.text = text
        elif payload is not None:
            self.text = json.dumps(payload)
        else:
            self.text = ""

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """
    Records every request and replays queued outcomes in order.

    An outcome is either a FakeResponse or an exception instance to raise.
    When the queue is empty a bare 200 {"success": true} is returned.
    """

    def __init__(self, outcomes: Optional[List[Union[FakeResponse, BaseException]]] = None):
        self.outcomes: List[Union[FakeResponse, BaseException]] = list(outcomes or [])
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *outcomes: Union[FakeResponse, BaseException]) -> "FakeSession":
        self.outcomes.extend(outcomes)
        return self

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.outcomes:
            return FakeResponse(200, {"success": True})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]


def make_feature_request_payload(
    id: str,
    vote_count: int = 0,
    has_voted: bool = False,
    status: Any = "pending",
    title: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": id,
        "title": title or f"Feature {id}",
        "description": f"Description for feature {id}",
        "status": status,
        "vote_count": vote_count,
        "has_voted": has_voted,
    }


def make_list_response(items: List[Dict[str, Any]], **extra: Any) -> FakeResponse:
    return FakeResponse(200, {"success": True, "data": items, **extra})


@pytest.fixture
def test_logger() -> logging.Logger:
    return BasicLogger("test-logger").get_logger()


@pytest.fixture
def sdk_config() -> SDKConfig:
    return SDKConfig(api_key="test-key", base_url="https://api.example.test", bundle_id="com.example.app")


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def user() -> User:
    return User(device_id=DEVICE_ID)


@pytest.fixture
def server_state() -> ServerConfigState:
    return ServerConfigState()


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def network_client(sdk_config, fake_session, test_logger) -> NetworkClient:
    return NetworkClient(sdk_config, session=fake_session, logger=test_logger)


@pytest.fixture
def api(sdk_config, user, server_state, network_client, test_logger) -> FeaturePulseAPI:
    return FeaturePulseAPI(sdk_config, user, server_state, network=network_client, logger=test_logger)


@pytest.fixture
def store(api, user, server_state, test_logger) -> FeatureRequestStore:
    return FeatureRequestStore(api, user, server_state, logger=test_logger)
