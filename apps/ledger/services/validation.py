"""
Split validation.

Enforces the split invariants before anything is persisted:

* percentage splits: every value in [0, 100] with at most 2 decimal
  places, sum within 0.01 of 100;
* shares splits: every value a non-negative integer, sum greater than 0.

Both validators return a normalised copy of the mapping (Decimal
percentages, int shares) so callers can store exactly what was checked.
"""

from decimal import Decimal, InvalidOperation
from typing import Dict

from .exceptions import LedgerValidationError
from apps.ledger.splits import (
    CENT,
    HUNDRED,
    PERCENTAGE_TOLERANCE,
    PercentageSplit,
    SharesSplit,
    Split,
    quantize,
    to_decimal,
)


def _parse_number(value):
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = to_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not number.is_finite():
        return None
    return number


def validate_split_percentages(split_percentage) -> Dict[str, Decimal]:
    """
    Validate a percentage split.

    Raises:
        LedgerValidationError: If the mapping is empty, a value is not a number
            between 0 and 100 with at most 2 decimal places, or the values
            do not sum to 100 ± 0.01. The message names the actual sum.
    """
    if not isinstance(split_percentage, dict):
        raise LedgerValidationError(
            'Split configuration is required', field='split_percentage'
        )
    if not split_percentage:
        raise LedgerValidationError(
            'At least one person must be included in the split',
            field='split_percentage',
        )

    normalised = {}
    for pid, value in split_percentage.items():
        number = _parse_number(value)
        if number is None or number < 0 or number > HUNDRED:
            raise LedgerValidationError(
                "Each person's share must be between 0% and 100%",
                field='split_percentage',
            )
        if quantize(number) != number:
            raise LedgerValidationError(
                'Split percentages can have at most 2 decimal places',
                field='split_percentage',
            )
        normalised[str(pid)] = number

    total = sum(normalised.values(), Decimal('0'))
    if abs(total - HUNDRED) > PERCENTAGE_TOLERANCE:
        raise LedgerValidationError(
            f'Split percentages must sum to 100%. Currently: {quantize(total)}%',
            field='split_percentage',
        )

    return normalised


def validate_split_shares(split_shares) -> Dict[str, int]:
    """
    Validate a shares split.

    Integral values given as floats or strings (``2.0``, ``"2"``) are
    accepted and converted to int; booleans, fractions and negatives are not.

    Raises:
        LedgerValidationError: If the mapping is empty, a value is not a
            non-negative whole number, or every share is zero.
    """
    if not isinstance(split_shares, dict):
        raise LedgerValidationError(
            'Split shares configuration is required', field='split_shares'
        )
    if not split_shares:
        raise LedgerValidationError(
            'At least one person must be included in the split',
            field='split_shares',
        )

    normalised = {}
    for pid, value in split_shares.items():
        number = _parse_number(value)
        if number is None or number < 0 or number != number.to_integral_value():
            raise LedgerValidationError(
                "Each person's share count must be a non-negative whole number",
                field='split_shares',
            )
        normalised[str(pid)] = int(number)

    if sum(normalised.values()) <= 0:
        raise LedgerValidationError(
            'At least one person must have a share greater than 0',
            field='split_shares',
        )

    return normalised


def validate_split(split: Split) -> Split:
    """Validate either kind of split and return its normalised form."""
    if isinstance(split, SharesSplit):
        return SharesSplit(validate_split_shares(split.values))
    return PercentageSplit(validate_split_percentages(split.values))


MAX_AMOUNT = Decimal('99999.99')


def validate_amount(amount, field: str = 'amount') -> Decimal:
    """
    Validate a currency amount and round it to cents.

    Raises:
        LedgerValidationError: If the amount is not a number between 0.01
            and 99999.99
    """
    number = _parse_number(amount)
    if number is None or number < CENT or number > MAX_AMOUNT:
        raise LedgerValidationError(
            f'Amount must be a number between {CENT} and {MAX_AMOUNT}',
            field=field,
        )
    return quantize(number)
