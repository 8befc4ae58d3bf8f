# featurepulse/api/client.py
from __future__ import annotations

import logging
from typing import List, Optional

from featurepulse.api.endpoints import APIEndpoint
from featurepulse.api.network_client import NetworkClient
from featurepulse.api.payloads import (
    ActivityRequest,
    DeviceInfo,
    PaymentFields,
    SubmitFeatureRequest,
    SyncUserRequest,
    UnvoteRequest,
    VoteRequest,
)
from featurepulse.api.responses import ActivityResponse, FeatureRequestsResponse
from featurepulse.config.sdk_config import SDKConfig
from featurepulse.logger import BasicLogger
from featurepulse.models.feature_request import FeatureRequest
from featurepulse.models.server_config import ServerConfigState
from featurepulse.models.user import User


class FeaturePulseAPI:
    """
    Typed operations against the FeaturePulse SDK endpoints.

    Every call identifies the device through ``user.device_id`` and carries
    the user's current payment tier where the backend expects one. Errors
    propagate to the caller unchanged.
    """

    def __init__(
        self,
        config: SDKConfig,
        user: User,
        server_config: ServerConfigState,
        network: Optional[NetworkClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.user = user
        self.server_config = server_config
        self.logger = logger or BasicLogger("FeaturePulseAPI").get_logger()
        self.network = network or NetworkClient(config, logger=self.logger)

    # ------------------------------------------------------------------
    # Activity tracking
    # ------------------------------------------------------------------
    def track_activity(self, activity_type: str = "app_open") -> ActivityResponse:
        body = ActivityRequest(
            user_identifier=self.user.user_identifier,
            activity_type=activity_type,
        )
        payload = self.network.request(APIEndpoint.activity(), body=body.to_dict())
        return ActivityResponse.from_json(payload)

    # ------------------------------------------------------------------
    # Feature requests
    # ------------------------------------------------------------------
    def fetch_feature_requests(self) -> List[FeatureRequest]:
        """Fetch the project's feature requests in server order.

        On success the server-controlled settings carried by the response
        replace the current :class:`ServerConfiguration` snapshot.
        """
        payload = self.network.request(
            APIEndpoint.feature_requests(),
            query={"device_id": self.user.device_id},
        )
        response = FeatureRequestsResponse.from_json(payload)
        self._apply_server_settings(response)

        self.logger.info("[FeaturePulseAPI] Fetched %s feature requests", len(response.data))
        return response.data

    def submit_feature_request(
        self,
        title: str,
        description: str,
        email: Optional[str] = None,
    ) -> None:
        body = SubmitFeatureRequest(
            title=title,
            description=description,
            device_info=DeviceInfo(
                device_id=self.user.device_id,
                bundle_id=self.config.bundle_id,
            ),
            user_email=email or None,
            payment=PaymentFields.from_payment(self.user.payment),
        )
        self.network.request_void(APIEndpoint.submit_feature_request(), body=body.to_dict())
        self.logger.info("[FeaturePulseAPI] Submitted feature request %r", title)

    # ------------------------------------------------------------------
    # Voting
    # ------------------------------------------------------------------
    def vote(self, feature_request_id: str) -> None:
        # credentials are checked before the id is turned into a path
        self.network.require_api_key()
        payment = PaymentFields.from_payment(self.user.payment)
        body = VoteRequest(
            device_id=self.user.device_id,
            payment_type=payment.payment_type,
            monthly_value_cents=payment.monthly_value_cents,
        )
        self.network.request_void(APIEndpoint.vote(feature_request_id), body=body.to_dict())

    def unvote(self, feature_request_id: str) -> None:
        self.network.require_api_key()
        body = UnvoteRequest(device_id=self.user.device_id)
        self.network.request_void(APIEndpoint.unvote(feature_request_id), body=body.to_dict())

    # ------------------------------------------------------------------
    # User management
    # ------------------------------------------------------------------
    def sync_user(self) -> None:
        body = SyncUserRequest(
            user_identifier=self.user.user_identifier,
            custom_id=self.user.custom_id,
            user_email=self.user.email,
            user_name=self.user.name,
            payment=PaymentFields.from_payment(self.user.payment),
        )
        self.network.request_void(APIEndpoint.sync_user(), body=body.to_dict())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _apply_server_settings(self, response: FeatureRequestsResponse) -> None:
        snapshot = self.server_config.current.merged_with(
            show_status=response.show_status,
            show_translation=response.show_translation,
            show_watermark=response.show_watermark,
            show_sdk_email_field=response.show_sdk_email_field,
            permissions=response.permissions,
            status_config=response.status_config,
        )
        self.server_config.replace(snapshot)
