"""
Payment tiers and MRR normalization.

Every plan is reduced to a monthly recurring revenue figure in minor
currency units (cents). Arithmetic runs on ``Decimal`` end to end; amounts
arriving as floats are routed through ``str()`` first so ``2.99`` stays
``2.99`` instead of its binary approximation.

Rounding policy:

- weekly, yearly and lifetime round *up* (away from zero) to whole cents,
  so revenue is never under-counted;
- monthly is a straight conversion to cents, rounded half-up.

Weekly plans use a flat x4 multiplier rather than 52/12.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_UP, ROUND_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional, Union


Amount = Union[Decimal, int, float, str]

CENTS_PER_UNIT = Decimal(100)
WEEKS_PER_MONTH = Decimal(4)
MONTHS_PER_YEAR = Decimal(12)
DEFAULT_LIFETIME_MONTHS = 24
DEFAULT_CURRENCY = "USD"


class PaymentType(str, Enum):
    FREE = "free"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    LIFETIME = "lifetime"


def to_decimal(amount: Amount) -> Decimal:
    """Coerce ``amount`` to an exact ``Decimal``; rejects NaN, infinities and negatives."""
    if isinstance(amount, bool):
        raise ValueError(f"Invalid amount value: {amount!r}")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValueError(f"Invalid amount value: {amount!r}") from exc

    if not value.is_finite():
        raise ValueError(f"Invalid amount value: {amount!r}")
    if value < 0:
        raise ValueError(f"Amount must not be negative: {amount!r}")
    return value


def _round_up(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_UP))


def _round_half_up(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def monthly_value_in_cents(
    payment_type: PaymentType,
    amount: Decimal,
    expected_lifetime_months: int = DEFAULT_LIFETIME_MONTHS,
) -> int:
    cents = amount * CENTS_PER_UNIT

    if payment_type is PaymentType.FREE:
        return 0
    if payment_type is PaymentType.WEEKLY:
        return _round_up(cents * WEEKS_PER_MONTH)
    if payment_type is PaymentType.MONTHLY:
        return _round_half_up(cents)
    if payment_type is PaymentType.YEARLY:
        return _round_up(cents / MONTHS_PER_YEAR)
    if payment_type is PaymentType.LIFETIME:
        if not isinstance(expected_lifetime_months, int) or isinstance(expected_lifetime_months, bool):
            raise ValueError("expected_lifetime_months must be an integer")
        if expected_lifetime_months <= 0:
            raise ValueError("expected_lifetime_months must be greater than zero")
        return _round_up(cents / Decimal(expected_lifetime_months))

    raise ValueError(f"Unsupported payment type: {payment_type!r}")


@dataclass(frozen=True)
class Payment:
    """Normalized payment tier attached to the SDK user.

    Build instances through :func:`normalize` or the ``Payment.free()`` /
    ``weekly`` / ``monthly`` / ``yearly`` / ``lifetime`` helpers so that
    ``monthly_value_in_cents`` always matches ``(payment_type, original_amount)``.
    """

    monthly_value_in_cents: int
    payment_type: PaymentType
    original_amount: Decimal
    currency: str

    # ----------------------------------------------------------------------
    # Constructors
    # ----------------------------------------------------------------------
    @classmethod
    def free(cls, currency: str = DEFAULT_CURRENCY) -> "Payment":
        return normalize(PaymentType.FREE, Decimal(0), currency)

    @classmethod
    def weekly(cls, amount: Amount, currency: str) -> "Payment":
        return normalize(PaymentType.WEEKLY, amount, currency)

    @classmethod
    def monthly(cls, amount: Amount, currency: str) -> "Payment":
        return normalize(PaymentType.MONTHLY, amount, currency)

    @classmethod
    def yearly(cls, amount: Amount, currency: str) -> "Payment":
        return normalize(PaymentType.YEARLY, amount, currency)

    @classmethod
    def lifetime(
        cls,
        amount: Amount,
        currency: str,
        expected_lifetime_months: int = DEFAULT_LIFETIME_MONTHS,
    ) -> "Payment":
        return normalize(PaymentType.LIFETIME, amount, currency, expected_lifetime_months)

    # ----------------------------------------------------------------------
    # Derived values
    # ----------------------------------------------------------------------
    @property
    def monthly_value(self) -> Decimal:
        """MRR in major currency units."""
        return Decimal(self.monthly_value_in_cents) / CENTS_PER_UNIT

    @property
    def annual_value_in_cents(self) -> int:
        return self.monthly_value_in_cents * 12

    @property
    def annual_value(self) -> Decimal:
        return Decimal(self.annual_value_in_cents) / CENTS_PER_UNIT

    @property
    def is_paying(self) -> bool:
        return self.monthly_value_in_cents > 0

    @property
    def original_amount_cents(self) -> int:
        """The list price in cents, sub-cent digits truncated (7.995 -> 799)."""
        return int((self.original_amount * CENTS_PER_UNIT).to_integral_value(rounding=ROUND_DOWN))

    def to_dict(self) -> Dict[str, Any]:
        # Decimal kept as a string to preserve the exact lexical value
        return {
            "monthly_value_in_cents": self.monthly_value_in_cents,
            "payment_type": self.payment_type.value,
            "original_amount": str(self.original_amount),
            "currency": self.currency,
        }


def normalize(
    plan_type: Union[PaymentType, str],
    amount: Amount,
    currency: str,
    expected_lifetime_months: Optional[int] = None,
) -> Payment:
    """Convert a purchase ``(plan_type, amount, currency)`` into a :class:`Payment`.

    ``amount`` is in major units of ``currency`` (e.g. ``"7.99"`` USD).
    ``expected_lifetime_months`` only applies to lifetime plans and
    defaults to 24.

    Raises:
        ValueError: unknown plan type, negative or non-numeric amount,
            empty currency, or a non-positive lifetime.
    """
    try:
        payment_type = PaymentType(plan_type)
    except ValueError as exc:
        raise ValueError(f"Unknown payment type: {plan_type!r}") from exc

    if not isinstance(currency, str) or not currency.strip():
        raise ValueError("currency must be a non-empty ISO 4217 code")

    value = to_decimal(amount)
    months = DEFAULT_LIFETIME_MONTHS if expected_lifetime_months is None else expected_lifetime_months

    return Payment(
        monthly_value_in_cents=monthly_value_in_cents(payment_type, value, months),
        payment_type=payment_type,
        original_amount=value,
        currency=currency.strip().upper(),
    )
