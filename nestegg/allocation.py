"""Split an amount across weights so that the parts add up exactly."""

from decimal import ROUND_DOWN, Decimal
from typing import Sequence

from .base import NegativeWeight, Numeric, to_amount


def allocate_proportionally(
    total: Numeric, weights: Sequence[Numeric], unit: Numeric = 1
) -> list[Decimal]:
    """Allocate *total* in proportion to *weights*.

    Each share is rounded toward zero to a whole number of *unit*s, then the
    remainder is handed out one unit at a time, starting with the shares that
    lost the most to rounding (ties go to the lower index). The result always
    sums to *total*.

    >>> allocate_proportionally(1000, [1, 1, 1])
    [Decimal('334'), Decimal('333'), Decimal('333')]
    """
    if not weights:
        return []
    total = to_amount(total)
    unit = to_amount(unit)
    ws = [to_amount(w) for w in weights]
    if any(w < 0 for w in ws):
        raise NegativeWeight(f"All weights must be non-negative: {list(weights)}")
    weight_total = sum(ws, Decimal(0))
    if weight_total == 0:
        ws = [Decimal(1)] * len(ws)
        weight_total = Decimal(len(ws))

    raw = [total * w / weight_total for w in ws]
    floored = [(x / unit).to_integral_value(rounding=ROUND_DOWN) * unit for x in raw]
    result = list(floored)
    remainder = total - sum(floored, Decimal(0))
    if remainder == 0:
        return result

    order = sorted(
        range(len(raw)), key=lambda i: (-abs(raw[i] - floored[i]), i)
    )
    step = unit if remainder > 0 else -unit
    units_left = int(abs(remainder) // unit)
    for i in order[:units_left]:
        result[i] += step
    # a total that is not a multiple of unit leaves a sub-unit residue
    residue = total - sum(result, Decimal(0))
    if residue:
        result[order[0]] += residue
    return result
