"""
Split sanitization.

When an event's participant set changes, existing cost item splits may
reference players who are no longer participants. The functions here drop
those stale entries and, for percentage splits, rescale the survivors back
to exactly 100%.

Rounding residue after rescaling is always given to the first entry (in
mapping order) whose value is non-zero, so sanitizing is deterministic and
zero-weight (excluded) participants are never pulled back into a split.
"""

import copy
from decimal import Decimal
from typing import Dict, Iterable

from apps.ledger.splits import (
    HUNDRED,
    PercentageSplit,
    SharesSplit,
    Split,
    quantize,
    to_decimal,
)


def _as_id_set(participants: Iterable) -> set:
    return {str(pid) for pid in participants}


def sanitize_percentages(split_percentages: Dict, current_participants: Iterable) -> Dict[str, Decimal]:
    """
    Drop non-participants from a percentage split and rescale to 100%.

    Returns:
        - the kept entries unchanged when nobody was removed;
        - ``{}`` when no participant (or no positive weight) is left, meaning
          no valid split remains and the caller must decide what to do;
        - otherwise the rescaled map, summing to exactly 100.00.

    Example:
        >>> sanitize_percentages({'a': 25, 'b': 25, 'c': 25, 'd': 25}, ['a', 'b', 'c'])
        {'a': Decimal('33.34'), 'b': Decimal('33.33'), 'c': Decimal('33.33')}
    """
    participants = _as_id_set(current_participants)

    kept = {}
    removed = {}
    for pid, value in split_percentages.items():
        target = kept if str(pid) in participants else removed
        target[str(pid)] = to_decimal(value)

    if not removed:
        return kept
    if not kept:
        return {}

    total_valid = sum(kept.values(), Decimal('0'))
    if total_valid == 0:
        return {}

    factor = HUNDRED / total_valid
    rescaled = {pid: quantize(value * factor) for pid, value in kept.items()}

    new_total = sum(rescaled.values(), Decimal('0'))
    if new_total != HUNDRED:
        anchor = next(pid for pid, value in rescaled.items() if value != 0)
        rescaled[anchor] = quantize(rescaled[anchor] + (HUNDRED - new_total))

    return rescaled


def sanitize_shares(split_shares: Dict, current_participants: Iterable) -> Dict[str, int]:
    """
    Drop non-participants from a shares split.

    Shares are relative weights, so the survivors keep their exact counts
    and ratios; nothing is rescaled.
    """
    participants = _as_id_set(current_participants)
    return {
        str(pid): count
        for pid, count in split_shares.items()
        if str(pid) in participants
    }


def sanitize_split(split: Split, current_participants: Iterable) -> Split:
    """Sanitize whichever kind of split is given, returning the same kind."""
    if isinstance(split, SharesSplit):
        return SharesSplit(sanitize_shares(split.values, current_participants))
    return PercentageSplit(sanitize_percentages(split.values, current_participants))


def has_valid_allocation(split: Split) -> bool:
    """True when the split still allocates the expense to somebody."""
    return bool(split.values) and split.total() > 0


def sanitize_expense_data(expense: Dict, current_participants: Iterable) -> Dict:
    """
    Sanitize the split fields of an expense mapping.

    Applies the percentage or shares rules to ``split_percentage`` and/or
    ``split_shares`` when they are populated; every other key is copied
    through untouched. The input mapping is not modified.
    """
    participants = list(current_participants)
    sanitized = copy.deepcopy(expense)

    if expense.get('split_percentage'):
        sanitized['split_percentage'] = sanitize_percentages(
            expense['split_percentage'], participants
        )
    if expense.get('split_shares'):
        sanitized['split_shares'] = sanitize_shares(
            expense['split_shares'], participants
        )

    return sanitized
