from __future__ import annotations

import pytest

from featurepulse.api.errors import DecodingError, MissingAPIKeyError, ServerError
from featurepulse.api.client import FeaturePulseAPI
from featurepulse.api.network_client import NetworkClient
from featurepulse.config.sdk_config import SDKConfig
from featurepulse.models.feature_request import FeatureRequestStatus
from featurepulse.models.payment import Payment
from featurepulse.models.server_config import ServerConfiguration, StatusAppearance
from tests.conftest import DEVICE_ID, FakeResponse, make_feature_request_payload, make_list_response


def test_track_activity_body(api, fake_session):
    fake_session.queue(FakeResponse(200, {"success": True, "message": "ok"}))

    response = api.track_activity()

    call = fake_session.last_call
    assert call["method"] == "POST"
    assert call["url"].endswith("/api/sdk/activity")
    assert call["json"] == {"user_identifier": DEVICE_ID, "activity_type": "app_open"}
    assert response.success is True
    assert response.message == "ok"


def test_track_activity_rejects_malformed_ack(api, fake_session):
    fake_session.queue(FakeResponse(200, {"ok": "yes"}))

    with pytest.raises(DecodingError):
        api.track_activity("app_open")


def test_fetch_passes_device_id_and_parses_items(api, fake_session):
    fake_session.queue(make_list_response([
        make_feature_request_payload("1", vote_count=3, has_voted=True, status="in_progress"),
        make_feature_request_payload("2", status="planned"),
    ]))

    requests = api.fetch_feature_requests()

    call = fake_session.last_call
    assert call["method"] == "GET"
    assert call["url"].endswith(f"/api/sdk/feature-requests?device_id={DEVICE_ID}")
    assert [r.id for r in requests] == ["1", "2"]
    assert requests[0].status is FeatureRequestStatus.IN_PROGRESS
    assert requests[0].vote_count == 3
    assert requests[0].has_voted is True
    assert requests[1].status is FeatureRequestStatus.PLANNED


def test_unknown_status_falls_back_instead_of_failing(api, fake_session):
    fake_session.queue(make_list_response([
        make_feature_request_payload("1", status="shipped_to_mars"),
        make_feature_request_payload("2", status=None),
        make_feature_request_payload("3", status=42),
    ]))

    requests = api.fetch_feature_requests()

    assert all(r.status is FeatureRequestStatus.PENDING for r in requests)


def test_fetch_applies_server_settings(api, fake_session, server_state):
    fake_session.queue(make_list_response(
        [],
        show_status=True,
        show_translation=False,
        show_watermark=False,
        show_sdk_email_field=True,
        permissions={"can_create_feature_request": False},
        status_config={"completed": {"color": "#000000", "icon": "star.fill"}},
    ))

    api.fetch_feature_requests()

    config = server_state.current
    assert config.show_status is True
    assert config.show_translation is False
    assert config.show_watermark is False
    assert config.show_sdk_email_field is True
    assert config.permissions.can_create_feature_request is False
    assert config.appearance_for(FeatureRequestStatus.COMPLETED) == StatusAppearance("#000000", "star.fill")
    # no override -> default appearance
    assert config.appearance_for("pending").icon == "clock.fill"


def test_fetch_keeps_settings_missing_from_response(api, fake_session, server_state):
    server_state.replace(ServerConfiguration(show_status=True, show_translation=False))
    fake_session.queue(make_list_response([], show_watermark=False))

    api.fetch_feature_requests()

    config = server_state.current
    assert config.show_status is True
    assert config.show_translation is False
    assert config.show_watermark is False


def test_failed_fetch_does_not_touch_settings(api, fake_session, server_state):
    before = server_state.current
    fake_session.queue(FakeResponse(500))

    with pytest.raises(ServerError):
        api.fetch_feature_requests()

    assert server_state.current is before


def test_wrong_shape_is_decoding_error(api, fake_session, server_state):
    before = server_state.current
    fake_session.queue(FakeResponse(200, {"success": True, "data": [{"id": "1"}], "show_status": True}))

    with pytest.raises(DecodingError):
        api.fetch_feature_requests()

    assert server_state.current is before


def test_submit_body_without_payment(api, fake_session):
    api.submit_feature_request("Dark mode", "Please add a dark theme")

    call = fake_session.last_call
    assert call["method"] == "POST"
    assert call["url"].endswith("/api/sdk/feature-requests")
    assert call["json"] == {
        "title": "Dark mode",
        "description": "Please add a dark theme",
        "device_info": {"device_id": DEVICE_ID, "bundle_id": "com.example.app"},
    }


def test_submit_body_with_payment_and_email(api, user, fake_session):
    user.payment = Payment.yearly("79.99", "EUR")

    api.submit_feature_request("Dark mode", "Please add a dark theme", email="me@example.com")

    body = fake_session.last_call["json"]
    assert body["user_email"] == "me@example.com"
    assert body["payment_type"] == "yearly"
    assert body["monthly_value_cents"] == 667
    assert body["original_amount_cents"] == 7999
    assert body["currency"] == "EUR"


def test_vote_and_unvote_bodies(api, user, fake_session):
    user.payment = Payment.monthly("7.99", "USD")

    api.vote("fr 1")
    vote_call = fake_session.last_call
    api.unvote("fr 1")
    unvote_call = fake_session.last_call

    assert vote_call["method"] == "POST"
    assert vote_call["url"].endswith("/api/sdk/feature-requests/fr%201/vote")
    assert vote_call["json"] == {"device_id": DEVICE_ID, "payment_type": "monthly", "monthly_value_cents": 799}
    assert unvote_call["method"] == "DELETE"
    assert unvote_call["json"] == {"device_id": DEVICE_ID}


def test_sync_user_body(api, user, fake_session):
    user.custom_id = "user_123"
    user.email = "a@b.c"
    user.name = "Ada"
    user.payment = Payment.lifetime("99.99", "USD")

    api.sync_user()

    call = fake_session.last_call
    assert call["url"].endswith("/api/sdk/user")
    assert call["json"] == {
        "user_identifier": DEVICE_ID,
        "custom_id": "user_123",
        "user_email": "a@b.c",
        "user_name": "Ada",
        "payment_type": "lifetime",
        "monthly_value_cents": 417,
        "original_amount_cents": 9999,
        "currency": "USD",
    }


def test_operations_without_api_key_never_hit_network(user, server_state, fake_session, test_logger):
    config = SDKConfig(api_key="")
    network = NetworkClient(config, session=fake_session, logger=test_logger)
    api = FeaturePulseAPI(config, user, server_state, network=network, logger=test_logger)

    for call in (
        lambda: api.track_activity(),
        api.fetch_feature_requests,
        lambda: api.submit_feature_request("abc", "abcdefghijk"),
        lambda: api.vote("1"),
        lambda: api.unvote("1"),
        api.sync_user,
    ):
        with pytest.raises(MissingAPIKeyError):
            call()

    assert fake_session.calls == []


@pytest.mark.parametrize("feature_request_id", ["", "   "])
def test_missing_api_key_wins_over_bad_vote_id(user, server_state, fake_session, test_logger, feature_request_id):
    config = SDKConfig(api_key="")
    network = NetworkClient(config, session=fake_session, logger=test_logger)
    api = FeaturePulseAPI(config, user, server_state, network=network, logger=test_logger)

    with pytest.raises(MissingAPIKeyError):
        api.vote(feature_request_id)
    with pytest.raises(MissingAPIKeyError):
        api.unvote(feature_request_id)

    assert fake_session.calls == []


def test_empty_id_in_list_is_decoding_error(api, fake_session):
    fake_session.queue(make_list_response([make_feature_request_payload("")]))

    with pytest.raises(DecodingError):
        api.fetch_feature_requests()
