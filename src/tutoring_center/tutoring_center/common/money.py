from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import TAX_RATE

CENT = Decimal("0.01")


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Totals:
    base: Decimal
    tax: Decimal
    grand_total: Decimal


def compute_totals(base: Decimal, *, rate: Decimal = TAX_RATE) -> Totals:
    """Grand total = base + rate * base; tax is derived so base + tax == grand_total."""

    base = quantize(base)
    grand_total = quantize(base * (1 + rate))
    return Totals(base=base, tax=grand_total - base, grand_total=grand_total)
