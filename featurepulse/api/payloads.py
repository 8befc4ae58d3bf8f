# featurepulse/api/payloads.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from featurepulse.models.payment import Payment


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    # Optional fields are omitted rather than sent as null.
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class PaymentFields:
    """Payment metadata shared by the submit, vote and user-sync bodies."""

    payment_type: Optional[str] = None
    monthly_value_cents: Optional[int] = None
    original_amount_cents: Optional[int] = None
    currency: Optional[str] = None

    @staticmethod
    def from_payment(payment: Optional[Payment]) -> "PaymentFields":
        if payment is None:
            return PaymentFields()
        return PaymentFields(
            payment_type=payment.payment_type.value,
            monthly_value_cents=payment.monthly_value_in_cents,
            original_amount_cents=payment.original_amount_cents,
            currency=payment.currency,
        )


@dataclass(frozen=True)
class ActivityRequest:
    user_identifier: str
    activity_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_identifier": self.user_identifier,
            "activity_type": self.activity_type,
        }


@dataclass(frozen=True)
class DeviceInfo:
    device_id: str
    bundle_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"device_id": self.device_id, "bundle_id": self.bundle_id}


@dataclass(frozen=True)
class SubmitFeatureRequest:
    title: str
    description: str
    device_info: DeviceInfo
    user_email: Optional[str] = None
    payment: PaymentFields = field(default_factory=PaymentFields)

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "title": self.title,
            "description": self.description,
            "device_info": self.device_info.to_dict(),
            "user_email": self.user_email,
            "payment_type": self.payment.payment_type,
            "monthly_value_cents": self.payment.monthly_value_cents,
            "original_amount_cents": self.payment.original_amount_cents,
            "currency": self.payment.currency,
        })


@dataclass(frozen=True)
class VoteRequest:
    device_id: str
    payment_type: Optional[str] = None
    monthly_value_cents: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "device_id": self.device_id,
            "payment_type": self.payment_type,
            "monthly_value_cents": self.monthly_value_cents,
        })


@dataclass(frozen=True)
class UnvoteRequest:
    device_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"device_id": self.device_id}


@dataclass(frozen=True)
class SyncUserRequest:
    user_identifier: str
    custom_id: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    payment: PaymentFields = field(default_factory=PaymentFields)

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "user_identifier": self.user_identifier,
            "custom_id": self.custom_id,
            "user_email": self.user_email,
            "user_name": self.user_name,
            "payment_type": self.payment.payment_type,
            "monthly_value_cents": self.payment.monthly_value_cents,
            "original_amount_cents": self.payment.original_amount_cents,
            "currency": self.payment.currency,
        })
