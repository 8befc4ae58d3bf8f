# featurepulse/validation.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 50
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 500


class FeatureRequestValidationError(ValueError):
    """Raised when a new feature request fails local validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class FeatureRequestDraft:
    title: str
    description: str
    email: Optional[str] = None


class FeatureRequestValidator:
    """Validate the new-feature-request form before anything is sent.

    Title and description are trimmed first; lengths are checked on the
    trimmed text. The first violation found is raised.
    """

    def __init__(
        self,
        title_min: int = TITLE_MIN_LENGTH,
        title_max: int = TITLE_MAX_LENGTH,
        description_min: int = DESCRIPTION_MIN_LENGTH,
        description_max: int = DESCRIPTION_MAX_LENGTH,
    ) -> None:
        self.title_min = title_min
        self.title_max = title_max
        self.description_min = description_min
        self.description_max = description_max

    def validate(self, title: Any, description: Any, email: Any = None) -> FeatureRequestDraft:
        if not isinstance(title, str):
            raise FeatureRequestValidationError("title", "Title must be a string")
        if not isinstance(description, str):
            raise FeatureRequestValidationError("description", "Description must be a string")

        title_clean = title.strip()
        description_clean = description.strip()

        if len(title_clean) < self.title_min:
            raise FeatureRequestValidationError(
                "title", f"Title must be at least {self.title_min} characters"
            )
        if len(title_clean) > self.title_max:
            raise FeatureRequestValidationError(
                "title", f"Title must be at most {self.title_max} characters"
            )
        if len(description_clean) < self.description_min:
            raise FeatureRequestValidationError(
                "description", f"Description must be at least {self.description_min} characters"
            )
        if len(description_clean) > self.description_max:
            raise FeatureRequestValidationError(
                "description", f"Description must be at most {self.description_max} characters"
            )

        email_clean: Optional[str] = None
        if email is not None:
            if not isinstance(email, str):
                raise FeatureRequestValidationError("email", "Email must be a string")
            email_clean = email.strip() or None

        return FeatureRequestDraft(
            title=title_clean,
            description=description_clean,
            email=email_clean,
        )
