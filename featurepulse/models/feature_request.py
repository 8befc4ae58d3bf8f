# featurepulse/models/feature_request.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict


class FeatureRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"

    @classmethod
    def default(cls) -> "FeatureRequestStatus":
        return cls.PENDING

    @classmethod
    def parse(cls, raw: Any) -> "FeatureRequestStatus":
        """Lossy parse: anything unrecognized falls back to :meth:`default`."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.default()


@dataclass(frozen=True)
class FeatureRequest:
    """A feature request as reported by the server for the current device.

    Instances are never mutated; vote changes produce a new value via
    :meth:`with_vote`.
    """

    id: str
    title: str
    description: str
    status: FeatureRequestStatus
    vote_count: int
    has_voted: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatureRequest":
        """Create a FeatureRequest from one entry of the list response.

        Shape is validated upstream by the response schema; this only
        coerces types. ``status`` never fails: unknown values become
        ``pending``.
        """
        if not isinstance(data, dict):
            raise ValueError("Feature request entry must be an object")

        id_val = data.get("id")
        if id_val is None or str(id_val) == "":
            raise ValueError("Feature request entry missing required 'id' field")

        vote_count = int(data.get("vote_count", 0) or 0)

        return cls(
            id=str(id_val),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            status=FeatureRequestStatus.parse(data.get("status")),
            vote_count=max(0, vote_count),
            has_voted=bool(data.get("has_voted", False)),
        )

    def with_vote(self, voted: bool) -> "FeatureRequest":
        """Return a copy with the vote applied (+1) or removed (-1, floored at 0)."""
        if voted:
            count = self.vote_count + 1
        else:
            count = max(0, self.vote_count - 1)
        return replace(self, vote_count=count, has_voted=voted)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "vote_count": self.vote_count,
            "has_voted": self.has_voted,
        }
