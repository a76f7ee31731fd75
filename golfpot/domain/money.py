"""Cent rounding and tolerance helpers shared by the calculators and settlement."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP

from .game import DomainValidationError

EPSILON = 0.01
ZERO_SUM_TOLERANCE = 1e-9
CENT = Decimal("0.01")


def to_cents(amount: float) -> int:
    """Round a currency amount to whole cents, halves away from zero."""
    value = Decimal(repr(float(amount))) * 100
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def cents_to_decimal(cents: int) -> Decimal:
    return (Decimal(cents) / Decimal(100)).quantize(CENT)


def allocate_cents(amounts: Mapping[str, float]) -> dict[str, int]:
    """Whole cents per player whose sum is the ledger's own total, rounded half-up.

    Every entry is floored to the cent and the cents still missing go, one each,
    to the entries with the largest fractional remainder (earlier keys first on
    ties), so no entry moves by more than a cent.
    """
    exact = {key: Decimal(repr(float(amount))) * 100 for key, amount in amounts.items()}
    cents = {key: int(value.to_integral_value(rounding=ROUND_FLOOR)) for key, value in exact.items()}
    target = int(sum(exact.values(), Decimal(0)).to_integral_value(rounding=ROUND_HALF_UP))
    missing = target - sum(cents.values())

    by_remainder = sorted(exact, key=lambda key: exact[key] - cents[key], reverse=True)
    for key in by_remainder[:missing]:
        cents[key] += 1
    return cents


def is_negligible(amount: float) -> bool:
    return abs(amount) <= EPSILON


def is_zero_sum(values: Iterable[float], tolerance: float = ZERO_SUM_TOLERANCE) -> bool:
    return abs(math.fsum(values)) <= tolerance


def ensure_finite(name: str, value: float, *, allow_negative: bool = False) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise DomainValidationError(f"{name} must be a number") from exc
    if not math.isfinite(number):
        raise DomainValidationError(f"{name} must be finite")
    if number < 0 and not allow_negative:
        raise DomainValidationError(f"{name} must be non-negative")
    return number
