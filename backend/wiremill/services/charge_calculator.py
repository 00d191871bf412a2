"""Charge arithmetic for conversions and invoices. Pure, no I/O.

Amounts keep full Decimal precision internally; round_money() is for
presentation only so repeated edits never compound rounding error.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

_CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Number) -> Decimal:
    return to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ChargeBreakdown:
    material: Decimal
    annealing: Decimal
    draw: Decimal
    total: Decimal


def compute(
    quantity: Number,
    rate: Number,
    annealing_charge_per_unit: Number,
    draw_charge_per_unit: Number,
    annealing_count: int,
    draw_pass_count: int,
) -> ChargeBreakdown:
    qty = to_decimal(quantity)
    material = qty * to_decimal(rate)
    annealing = to_decimal(annealing_charge_per_unit) * qty * annealing_count
    draw = to_decimal(draw_charge_per_unit) * qty * draw_pass_count
    return ChargeBreakdown(
        material=material,
        annealing=annealing,
        draw=draw,
        total=material + annealing + draw,
    )


def percentage_of(amount: Number, percentage: Number) -> Decimal:
    """`percentage` percent of `amount`, e.g. percentage_of(1000, 9) == 90."""
    return to_decimal(amount) * to_decimal(percentage) / Decimal("100")
