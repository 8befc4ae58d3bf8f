# featurepulse/api/endpoints.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional
from urllib.parse import quote, urlencode, urlsplit

from featurepulse.api.errors import InvalidURLError


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class APIEndpoint:
    """One backend route: HTTP method plus path."""

    name: str
    method: HTTPMethod
    path: str

    # ----------------------------------------------------------------------
    # Known endpoints
    # ----------------------------------------------------------------------
    @classmethod
    def activity(cls) -> "APIEndpoint":
        return cls("activity", HTTPMethod.POST, "/api/sdk/activity")

    @classmethod
    def feature_requests(cls) -> "APIEndpoint":
        return cls("feature_requests", HTTPMethod.GET, "/api/sdk/feature-requests")

    @classmethod
    def submit_feature_request(cls) -> "APIEndpoint":
        return cls("submit_feature_request", HTTPMethod.POST, "/api/sdk/feature-requests")

    @classmethod
    def vote(cls, feature_request_id: str) -> "APIEndpoint":
        return cls("vote", HTTPMethod.POST, _vote_path(feature_request_id))

    @classmethod
    def unvote(cls, feature_request_id: str) -> "APIEndpoint":
        return cls("unvote", HTTPMethod.DELETE, _vote_path(feature_request_id))

    @classmethod
    def sync_user(cls) -> "APIEndpoint":
        return cls("sync_user", HTTPMethod.POST, "/api/sdk/user")

    # ----------------------------------------------------------------------
    # URL construction
    # ----------------------------------------------------------------------
    def url(self, base_url: str, query: Optional[Dict[str, str]] = None) -> str:
        """Join ``base_url`` and the path, appending ``query`` when given.

        Raises:
            InvalidURLError: base URL is not an absolute http(s) URL.
        """
        base = (base_url or "").strip().rstrip("/")
        parts = urlsplit(base)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidURLError(f"Failed to construct a valid URL from base {base_url!r}")

        url = base + self.path
        if query:
            url = f"{url}?{urlencode(query)}"
        return url


def _vote_path(feature_request_id: str) -> str:
    if not isinstance(feature_request_id, str) or not feature_request_id.strip():
        raise InvalidURLError("Feature request id must be a non-empty string")
    return f"/api/sdk/feature-requests/{quote(feature_request_id, safe='')}/vote"
