"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from catalog.domain.exceptions import ErrorKind, ValidationError

_HUNDRED = Decimal("100")


def _round_minor_units(value: Decimal) -> int:
    """Round to the nearest whole minor unit, ties away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _to_decimal(value: Decimal | int | float | str, kind: ErrorKind, field: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(kind, f"{field} must be numeric, got bool", field=field, value=value)
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(
            kind, f"{field} is not a valid number: {value!r}", field=field, value=value
        ) from exc
    if not result.is_finite():
        raise ValidationError(kind, f"{field} must be finite, got {value!r}", field=field, value=value)
    return result


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    ``amount`` is held in the smallest currency unit (e.g. cents for USD)
    so that arithmetic never drifts.  Any operation producing a fractional
    minor unit rounds half away from zero.
    """

    amount: int
    currency: str

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError(
                ErrorKind.INVALID_AMOUNT,
                f"Money amount must be an int of minor units, got {type(self.amount).__name__}",
                field="amount",
                value=self.amount,
            )
        if self.amount < 0:
            raise ValidationError(
                ErrorKind.NEGATIVE_AMOUNT,
                f"Money amount cannot be negative, got {self.amount}",
                field="amount",
                value=self.amount,
            )
        if not isinstance(self.currency, str) or len(self.currency) != 3:
            raise ValidationError(
                ErrorKind.INVALID_CURRENCY,
                f"Currency must be a 3-letter code, got {self.currency!r}",
                field="currency",
                value=self.currency,
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < 0:
            raise ValidationError(
                ErrorKind.NEGATIVE_RESULT,
                f"Money subtraction would result in a negative amount ({self} - {other})",
            )
        return Money(result, self.currency)

    def __mul__(self, factor: Decimal | int | float | str) -> Money:
        value = _to_decimal(factor, ErrorKind.INVALID_AMOUNT, "factor")
        if value < 0:
            raise ValidationError(
                ErrorKind.NEGATIVE_FACTOR,
                f"Cannot multiply Money by a negative factor, got {factor}",
                field="factor",
                value=factor,
            )
        return Money(_round_minor_units(self.amount * value), self.currency)

    def apply_percentage_discount(self, percentage: Decimal | int | str) -> Money:
        """Return the amount left after taking ``percentage`` percent off."""
        pct = _to_decimal(percentage, ErrorKind.INVALID_DISCOUNT_PERCENTAGE, "percentage")
        if pct < 0 or pct > _HUNDRED:
            raise ValidationError(
                ErrorKind.INVALID_DISCOUNT_PERCENTAGE,
                f"Discount percentage must be between 0 and 100, got {percentage}",
                field="percentage",
                value=percentage,
            )
        discounted = self.amount * (1 - pct / _HUNDRED)
        return Money(_round_minor_units(discounted), self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        major, minor = divmod(self.amount, 100)
        return f"{major}.{minor:02d} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money | None) -> None:
        if other is None:
            raise ValidationError(
                ErrorKind.MISSING_OPERAND, "Money operation requires a second operand"
            )
        if not isinstance(other, Money):
            raise TypeError(f"Can only combine Money with Money, got {type(other).__name__}")
        if self.currency != other.currency:
            raise ValidationError(
                ErrorKind.CURRENCY_MISMATCH,
                f"Cannot combine {self.currency} with {other.currency}",
                field="currency",
                value=other.currency,
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | int, currency: str) -> Money:
        """Convenient factory that coerces a minor-unit amount to int safely."""
        if isinstance(amount, bool):
            raise ValidationError(
                ErrorKind.INVALID_AMOUNT,
                f"Invalid money amount: {amount!r}",
                field="amount",
                value=amount,
            )
        try:
            return Money(int(str(amount).strip()), currency)
        except ValueError as exc:
            raise ValidationError(
                ErrorKind.INVALID_AMOUNT,
                f"Invalid money amount: {amount!r}",
                field="amount",
                value=amount,
            ) from exc


@dataclass(frozen=True)
class Discount:
    """A percentage discount valid over the half-open window [starts_at, ends_at).

    ``percentage`` is kept as the exact decimal string it was given so it
    survives persistence round-trips unchanged; ``percentage_value`` parses
    it for computation.
    """

    percentage: str
    starts_at: datetime
    ends_at: datetime

    def __post_init__(self) -> None:
        if isinstance(self.percentage, (Decimal, int)) and not isinstance(self.percentage, bool):
            object.__setattr__(self, "percentage", str(self.percentage))
        if not isinstance(self.percentage, str):
            raise ValidationError(
                ErrorKind.INVALID_DISCOUNT_PERCENTAGE,
                f"Discount percentage must be a decimal string, got {type(self.percentage).__name__}",
                field="percentage",
                value=self.percentage,
            )
        pct = _to_decimal(self.percentage, ErrorKind.INVALID_DISCOUNT_PERCENTAGE, "percentage")
        if pct < 0 or pct > _HUNDRED:
            raise ValidationError(
                ErrorKind.INVALID_DISCOUNT_PERCENTAGE,
                f"Discount percentage must be between 0 and 100, got {self.percentage}",
                field="percentage",
                value=self.percentage,
            )

        for name in ("starts_at", "ends_at"):
            moment = getattr(self, name)
            if not isinstance(moment, datetime) or moment.tzinfo is None:
                raise ValidationError(
                    ErrorKind.INVALID_DISCOUNT_PERIOD,
                    f"Discount {name} must be a timezone-aware datetime, got {moment!r}",
                    field=name,
                    value=moment,
                )
        if self.ends_at <= self.starts_at:
            raise ValidationError(
                ErrorKind.INVALID_DISCOUNT_PERIOD,
                "Discount end date must be after start date",
                field="ends_at",
                value=self.ends_at,
            )

    @property
    def percentage_value(self) -> Decimal:
        return Decimal(self.percentage.strip())

    def is_valid_at(self, now: datetime) -> bool:
        return self.starts_at <= now < self.ends_at

    def is_expired(self, now: datetime) -> bool:
        return now >= self.ends_at

    def is_upcoming(self, now: datetime) -> bool:
        return now < self.starts_at

    def __str__(self) -> str:
        return f"{self.percentage}% [{self.starts_at.isoformat()}, {self.ends_at.isoformat()})"
