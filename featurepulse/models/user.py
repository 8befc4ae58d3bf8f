# featurepulse/models/user.py
from __future__ import annotations

from typing import Optional

from featurepulse.models.payment import Payment


class User:
    """The single SDK user for this install.

    ``device_id`` is the identity sent with every request and never changes
    once assigned. ``custom_id``, ``email`` and ``name`` are optional
    metadata supplied by the host app.
    """

    def __init__(
        self,
        device_id: str,
        custom_id: Optional[str] = None,
        email: Optional[str] = None,
        name: Optional[str] = None,
        payment: Optional[Payment] = None,
    ):
        if not device_id:
            raise ValueError("device_id must be a non-empty string")
        self._device_id = device_id
        self.custom_id = custom_id
        self.email = email
        self.name = name
        self.payment = payment

    @property
    def device_id(self) -> str:
        return self._device_id

    @property
    def user_identifier(self) -> str:
        return self._device_id

    def __repr__(self) -> str:
        return (
            f"User(device_id={self._device_id!r}, custom_id={self.custom_id!r}, "
            f"payment={self.payment.payment_type.value if self.payment else None!r})"
        )
