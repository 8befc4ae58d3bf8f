# featurepulse/api/network_client.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

import requests

from featurepulse.api.endpoints import APIEndpoint
from featurepulse.api.errors import (
    AlreadyVotedError,
    DecodingError,
    FeaturePulseError,
    InvalidResponseError,
    InvalidURLError,
    MissingAPIKeyError,
    NetworkError,
    PaymentRequiredError,
    ServerError,
)
from featurepulse.config.sdk_config import SDKConfig
from featurepulse.logger import BasicLogger


# Endpoint-specific status mappings; anything else outside 2xx is a ServerError.
SPECIAL_STATUS_ERRORS: Dict[str, Dict[int, Type[FeaturePulseError]]] = {
    "submit_feature_request": {403: PaymentRequiredError},
    "vote": {409: AlreadyVotedError},
}

_URL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
)


class NetworkClient:
    """
    Sends authenticated JSON requests to the FeaturePulse backend.

    Stateless per call: the only shared state is the config and the
    underlying ``requests.Session``, so one instance can serve the whole
    SDK. Every failure is raised as a :class:`FeaturePulseError`; nothing
    is swallowed here.
    """

    def __init__(
        self,
        config: SDKConfig,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.logger = logger or BasicLogger("NetworkClient").get_logger()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def request(
        self,
        endpoint: APIEndpoint,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send the request and return the decoded JSON body."""
        response = self._send(endpoint, body=body, query=query)
        try:
            return response.json()
        except ValueError as e:
            self.logger.error("[NetworkClient] %s returned a non-JSON body", endpoint.path)
            raise DecodingError("Failed to decode the server response", details=str(e)) from e

    def request_void(
        self,
        endpoint: APIEndpoint,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, str]] = None,
    ) -> None:
        """Send the request, validating only the status code."""
        self._send(endpoint, body=body, query=query)

    def require_api_key(self) -> str:
        """Return the configured API key or raise :class:`MissingAPIKeyError`."""
        api_key = self.config.api_key
        if not api_key or not api_key.strip():
            raise MissingAPIKeyError()
        return api_key

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _send(
        self,
        endpoint: APIEndpoint,
        body: Optional[Dict[str, Any]],
        query: Optional[Dict[str, str]],
    ) -> requests.Response:
        api_key = self.require_api_key()

        url = endpoint.url(self.config.normalized_base_url, query)
        headers = self._build_headers(api_key)

        self.logger.debug("[NetworkClient] %s %s", endpoint.method.value, endpoint.path)

        try:
            response = self.session.request(
                endpoint.method.value,
                url,
                json=body,
                headers=headers,
                timeout=self.config.request_timeout,
            )
        except _URL_ERRORS as e:
            raise InvalidURLError(f"Failed to construct a valid URL: {e}") from e
        except requests.exceptions.RequestException as e:
            self.logger.warning(
                "[NetworkClient] %s %s failed: %s", endpoint.method.value, endpoint.path, e
            )
            raise NetworkError(e) from e

        self._validate_response(endpoint, response)
        return response

    @staticmethod
    def _build_headers(api_key: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-API-Key": api_key,
        }

    def _validate_response(self, endpoint: APIEndpoint, response: Any) -> None:
        status = getattr(response, "status_code", None)
        if not isinstance(status, int) or isinstance(status, bool):
            raise InvalidResponseError()

        self.logger.debug(
            "[NetworkClient] %s %s -> %s", endpoint.method.value, endpoint.path, status
        )

        if 200 <= status <= 299:
            return

        special = SPECIAL_STATUS_ERRORS.get(endpoint.name, {}).get(status)
        if special is not None:
            raise special()

        self.logger.error(
            "[NetworkClient] %s %s returned HTTP %s", endpoint.method.value, endpoint.path, status
        )
        raise ServerError(status)
