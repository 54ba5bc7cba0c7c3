"""
Split allocation.

Builds default splits for a list of participants and turns a split into
exact currency amounts.

All functions here are total: they never raise for well-formed input and
return smaller (or empty) results for smaller (or empty) input.
"""

from decimal import Decimal, ROUND_FLOOR
from typing import Dict, Iterable

from apps.ledger.splits import HUNDRED, CENT, quantize


FOUR_PLACES = Decimal('0.0001')


def compute_equal_percentage_split(participant_ids: Iterable) -> Dict[str, Decimal]:
    """
    Split 100% equally among participants, exactly.

    Every participant but the last gets ``round(round(100 / n, 4), 2)``; the
    last one absorbs the rounding slack so the values always sum to exactly
    100.00. The result depends on the order of ``participant_ids``.

    Example:
        >>> compute_equal_percentage_split(['a', 'b', 'c'])
        {'a': Decimal('33.33'), 'b': Decimal('33.33'), 'c': Decimal('33.34')}
    """
    ids = [str(pid) for pid in participant_ids]
    if not ids:
        return {}

    rounded_percentage = quantize(quantize(HUNDRED / len(ids), FOUR_PLACES))

    split = {}
    assigned = Decimal('0')
    for pid in ids[:-1]:
        split[pid] = rounded_percentage
        assigned += rounded_percentage

    split[ids[-1]] = quantize(HUNDRED - assigned)
    return split


def compute_equal_shares(participant_ids: Iterable) -> Dict[str, int]:
    """One share per participant."""
    return {str(pid): 1 for pid in participant_ids}


def allocate_amount(amount, split) -> Dict[str, Decimal]:
    """
    Split a currency amount into cent-exact parts proportional to the split.

    Algorithm:
        1. Convert to cents: ``total_cents = amount * 100``
        2. Each participant gets ``floor(total_cents * w / total_w)`` cents
        3. Leftover cents go one each to the largest fractional remainders,
           ties broken by mapping order
        4. Convert back to currency units

    Zero-weight participants are kept with 0.00. A split whose weights sum to
    zero allocates nothing.

    Example:
        100.00 split 1:1:1 gives 33.34, 33.33, 33.33 and sums to 100.00.
    """
    weights = split.weights()
    total_weight = sum(weights.values(), Decimal('0'))
    if total_weight <= 0:
        return {}

    total_cents = int(quantize(amount) * 100)

    cents = {}
    remainders = []
    for position, (pid, weight) in enumerate(weights.items()):
        exact = Decimal(total_cents) * weight / total_weight
        floored = int(exact.to_integral_value(rounding=ROUND_FLOOR))
        cents[pid] = floored
        if weight > 0:
            remainders.append((exact - floored, position, pid))

    leftover = total_cents - sum(cents.values())
    remainders.sort(key=lambda item: (-item[0], item[1]))
    for _, _, pid in remainders[:leftover]:
        cents[pid] += 1

    return {pid: Decimal(value) * CENT for pid, value in cents.items()}
