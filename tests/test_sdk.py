from __future__ import annotations

from dataclasses import replace

import requests

from featurepulse.models.payment import Payment
from featurepulse.sdk import FeaturePulse
from featurepulse.storage.key_value_store import InMemoryKeyValueStore, StorageKeys
from tests.conftest import FakeResponse, FakeSession, make_feature_request_payload, make_list_response

NOW = 1_700_000_000.0


def make_sdk(sdk_config, test_logger, session=None, storage=None):
    return FeaturePulse(
        sdk_config,
        storage=storage if storage is not None else InMemoryKeyValueStore(),
        session=session if session is not None else FakeSession(),
        clock=lambda: NOW,
        logger=test_logger,
    )


def test_instances_are_isolated(sdk_config, test_logger):
    first = make_sdk(sdk_config, test_logger)
    second = make_sdk(sdk_config, test_logger)

    assert first.user.device_id != second.user.device_id
    assert first.store is not second.store
    assert first.server_config_state is not second.server_config_state


def test_device_id_reused_from_storage(sdk_config, test_logger):
    storage = InMemoryKeyValueStore({StorageKeys.DEVICE_ID: "KNOWN-DEVICE"})
    sdk = make_sdk(sdk_config, test_logger, storage=storage)

    assert sdk.user.device_id == "KNOWN-DEVICE"
    assert sdk.user.user_identifier == "KNOWN-DEVICE"


def test_json_storage_used_when_path_configured(sdk_config, test_logger, tmp_path):
    config = replace(sdk_config, storage_path=str(tmp_path / "state.json"))
    first = FeaturePulse(config, session=FakeSession(), logger=test_logger)
    second = FeaturePulse(config, session=FakeSession(), logger=test_logger)

    assert first.user.device_id == second.user.device_id


def test_update_user_sets_fields_and_syncs(sdk_config, test_logger):
    session = FakeSession()
    sdk = make_sdk(sdk_config, test_logger, session=session)

    assert sdk.update_user(custom_id="user-42", email="me@example.com") is True

    assert sdk.user.custom_id == "user-42"
    assert sdk.user.user_identifier == sdk.user.device_id
    body = session.last_call["json"]
    assert body["user_identifier"] == sdk.user.device_id
    assert body["custom_id"] == "user-42"
    assert body["user_email"] == "me@example.com"
    assert "user_name" not in body


def test_update_user_keeps_unspecified_fields(sdk_config, test_logger):
    sdk = make_sdk(sdk_config, test_logger)
    sdk.update_user(name="Ada")
    sdk.update_user(email="ada@example.com")

    assert sdk.user.name == "Ada"
    assert sdk.user.email == "ada@example.com"


def test_sync_failure_is_swallowed(sdk_config, test_logger):
    session = FakeSession([requests.exceptions.ConnectionError("offline")])
    sdk = make_sdk(sdk_config, test_logger, session=session)

    assert sdk.update_user_payment(Payment.monthly("7.99", "usd")) is False
    assert sdk.user.payment == Payment.monthly("7.99", "USD")


def test_payment_sync_body(sdk_config, test_logger):
    session = FakeSession()
    sdk = make_sdk(sdk_config, test_logger, session=session)

    sdk.update_user_payment(Payment.yearly("99.99", "EUR"))

    body = session.last_call["json"]
    assert body["payment_type"] == "yearly"
    assert body["monthly_value_cents"] == 834
    assert body["original_amount_cents"] == 9999
    assert body["currency"] == "EUR"


def test_server_config_reflects_last_fetch(sdk_config, test_logger):
    session = FakeSession([make_list_response([make_feature_request_payload("1")], show_status=True)])
    sdk = make_sdk(sdk_config, test_logger, session=session)

    assert sdk.server_config.show_status is False
    assert sdk.store.load_feature_requests() is True
    assert sdk.server_config.show_status is True


# ----------------------------
# CTA banner
# ----------------------------

def test_cta_banner_after_min_sessions(sdk_config, test_logger):
    storage = InMemoryKeyValueStore({StorageKeys.SESSION_COUNT: 2})
    sdk = make_sdk(sdk_config, test_logger, storage=storage)

    assert sdk.should_show_cta_banner() is False
    assert sdk.track_app_open_if_new_session() is True
    assert sdk.should_show_cta_banner() is True


def test_cta_banner_manual_condition(sdk_config, test_logger):
    sdk = make_sdk(sdk_config, test_logger)

    assert sdk.should_show_cta_banner(condition=lambda: True) is True
    assert sdk.should_show_cta_banner(condition=lambda: False) is False


def test_dismissed_banner_stays_hidden(sdk_config, test_logger):
    storage = InMemoryKeyValueStore({StorageKeys.SESSION_COUNT: 10})
    sdk = make_sdk(sdk_config, test_logger, storage=storage)

    sdk.dismiss_cta_banner()

    assert sdk.should_show_cta_banner() is False
    assert sdk.should_show_cta_banner(condition=lambda: True) is False


def test_app_open_failure_does_not_raise(sdk_config, test_logger):
    session = FakeSession([FakeResponse(502)])
    sdk = make_sdk(sdk_config, test_logger, session=session)

    assert sdk.track_app_open_if_new_session() is False
    assert sdk.session_tracker.session_count == 0
