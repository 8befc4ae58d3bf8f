# featurepulse/api/responses.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import jsonschema

from featurepulse.api.errors import DecodingError
from featurepulse.models.feature_request import FeatureRequest
from featurepulse.models.server_config import Permissions, StatusAppearance


# ----------------------------
# Schemas
# ----------------------------

# ``status`` is deliberately unconstrained: unknown values are mapped to the
# default status during parsing instead of failing the whole response.
FEATURE_REQUEST_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id", "title", "description", "vote_count"],
    "properties": {
        "id": {"type": ["string", "integer"], "minLength": 1},
        "title": {"type": "string"},
        "description": {"type": "string"},
        "vote_count": {"type": "integer", "minimum": 0},
        "has_voted": {"type": "boolean"},
    },
}

STATUS_APPEARANCE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["color", "icon"],
    "properties": {
        "color": {"type": "string"},
        "icon": {"type": "string"},
    },
}

FEATURE_REQUESTS_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["success", "data"],
    "properties": {
        "success": {"type": "boolean"},
        "data": {"type": "array", "items": FEATURE_REQUEST_SCHEMA},
        "show_status": {"type": ["boolean", "null"]},
        "show_translation": {"type": ["boolean", "null"]},
        "show_watermark": {"type": ["boolean", "null"]},
        "show_sdk_email_field": {"type": ["boolean", "null"]},
        "permissions": {
            "type": ["object", "null"],
            "properties": {"can_create_feature_request": {"type": "boolean"}},
        },
        "status_config": {
            "type": ["object", "null"],
            "additionalProperties": STATUS_APPEARANCE_SCHEMA,
        },
    },
}

ACTIVITY_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["success"],
    "properties": {
        "success": {"type": "boolean"},
        "message": {"type": ["string", "null"]},
    },
}


def validate_payload(instance: Any, schema: Dict[str, Any], what: str) -> None:
    try:
        jsonschema.validate(instance=instance, schema=schema)
    except jsonschema.ValidationError as e:
        raise DecodingError(f"Unexpected {what} response shape", details=e.message) from e


# ----------------------------
# Typed responses
# ----------------------------

@dataclass(frozen=True)
class FeatureRequestsResponse:
    success: bool
    data: List[FeatureRequest]
    show_status: Optional[bool] = None
    show_translation: Optional[bool] = None
    show_watermark: Optional[bool] = None
    show_sdk_email_field: Optional[bool] = None
    permissions: Optional[Permissions] = None
    status_config: Optional[Dict[str, StatusAppearance]] = None

    @staticmethod
    def from_json(payload: Any) -> "FeatureRequestsResponse":
        validate_payload(payload, FEATURE_REQUESTS_RESPONSE_SCHEMA, "feature requests")

        permissions_raw = payload.get("permissions")
        status_config_raw = payload.get("status_config")

        status_config: Optional[Dict[str, StatusAppearance]] = None
        if status_config_raw is not None:
            status_config = {
                key: StatusAppearance.from_dict(value)
                for key, value in status_config_raw.items()
            }

        try:
            data = [FeatureRequest.from_dict(item) for item in payload["data"]]
        except ValueError as e:
            raise DecodingError("Unexpected feature request entry", details=str(e)) from e

        return FeatureRequestsResponse(
            success=payload["success"],
            data=data,
            show_status=payload.get("show_status"),
            show_translation=payload.get("show_translation"),
            show_watermark=payload.get("show_watermark"),
            show_sdk_email_field=payload.get("show_sdk_email_field"),
            permissions=Permissions.from_dict(permissions_raw) if permissions_raw is not None else None,
            status_config=status_config,
        )


@dataclass(frozen=True)
class ActivityResponse:
    success: bool
    message: Optional[str] = None

    @staticmethod
    def from_json(payload: Any) -> "ActivityResponse":
        validate_payload(payload, ACTIVITY_RESPONSE_SCHEMA, "activity")
        return ActivityResponse(success=payload["success"], message=payload.get("message"))
