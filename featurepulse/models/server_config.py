"""
Server-controlled presentation settings.

The backend decides whether statuses, translation, the watermark and the
email field are visible, whether the device may create requests, and can
override how each status looks. The client never edits these values: each
successful list fetch produces a new immutable :class:`ServerConfiguration`
which replaces the previous one in a :class:`ServerConfigState` in a single
assignment.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Union

from featurepulse.models.feature_request import FeatureRequestStatus


@dataclass(frozen=True)
class Permissions:
    can_create_feature_request: bool = True

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> "Permissions":
        if not data:
            return Permissions()
        return Permissions(
            can_create_feature_request=bool(data.get("can_create_feature_request", True)),
        )


@dataclass(frozen=True)
class StatusAppearance:
    """Hex color (e.g. ``#EAB308``) and icon name for a status badge."""

    color: str
    icon: str

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "StatusAppearance":
        return StatusAppearance(color=str(data["color"]), icon=str(data["icon"]))


DEFAULT_STATUS_APPEARANCE: Dict[FeatureRequestStatus, StatusAppearance] = {
    FeatureRequestStatus.PENDING: StatusAppearance("#EAB308", "clock.fill"),
    FeatureRequestStatus.APPROVED: StatusAppearance("#3B82F6", "checkmark.seal.fill"),
    FeatureRequestStatus.PLANNED: StatusAppearance("#06B6D4", "calendar"),
    FeatureRequestStatus.IN_PROGRESS: StatusAppearance("#A855F7", "eye.fill"),
    FeatureRequestStatus.COMPLETED: StatusAppearance("#22C55E", "checkmark.circle.fill"),
    FeatureRequestStatus.REJECTED: StatusAppearance("#EF4444", "xmark.circle.fill"),
}


@dataclass(frozen=True)
class ServerConfiguration:
    show_status: bool = False
    show_translation: bool = True
    show_watermark: bool = True
    show_sdk_email_field: bool = False
    permissions: Permissions = field(default_factory=Permissions)
    status_config: Mapping[str, StatusAppearance] = field(default_factory=dict)

    def appearance_for(self, status: Union[FeatureRequestStatus, str]) -> StatusAppearance:
        """Server override for ``status`` if one was sent, else the built-in default."""
        parsed = FeatureRequestStatus.parse(status)
        key = status.value if isinstance(status, FeatureRequestStatus) else str(status)
        override = self.status_config.get(key) or self.status_config.get(parsed.value)
        if override is not None:
            return override
        return DEFAULT_STATUS_APPEARANCE[parsed]

    def merged_with(
        self,
        show_status: Optional[bool] = None,
        show_translation: Optional[bool] = None,
        show_watermark: Optional[bool] = None,
        show_sdk_email_field: Optional[bool] = None,
        permissions: Optional[Permissions] = None,
        status_config: Optional[Mapping[str, StatusAppearance]] = None,
    ) -> "ServerConfiguration":
        """New snapshot where every non-``None`` argument replaces the current value."""
        changes: Dict[str, Any] = {}
        if show_status is not None:
            changes["show_status"] = show_status
        if show_translation is not None:
            changes["show_translation"] = show_translation
        if show_watermark is not None:
            changes["show_watermark"] = show_watermark
        if show_sdk_email_field is not None:
            changes["show_sdk_email_field"] = show_sdk_email_field
        if permissions is not None:
            changes["permissions"] = permissions
        if status_config is not None:
            changes["status_config"] = dict(status_config)
        return replace(self, **changes)


class ServerConfigState:
    """Holds the current :class:`ServerConfiguration` snapshot.

    Readers always see a complete snapshot; writers swap the whole value.
    """

    def __init__(self, initial: Optional[ServerConfiguration] = None):
        self._current = initial or ServerConfiguration()
        self._lock = threading.Lock()

    @property
    def current(self) -> ServerConfiguration:
        return self._current

    def replace(self, snapshot: ServerConfiguration) -> None:
        with self._lock:
            self._current = snapshot
