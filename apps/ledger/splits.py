"""
Split value objects.

A cost item carries exactly one split: either a percentage map or a shares
map. Both are modelled as frozen dataclasses so the active mode is part of
the type rather than a pair of optional fields.

    Split = PercentageSplit | SharesSplit

Keys are participant identifiers as strings (UUIDs rendered with ``str``),
which keeps the maps JSON-serialisable and order preserving.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union


PERCENTAGE_MODE = 'percentage'
SHARES_MODE = 'shares'

HUNDRED = Decimal('100')
CENT = Decimal('0.01')
PERCENTAGE_TOLERANCE = Decimal('0.01')


def to_decimal(value) -> Decimal:
    """Convert ints, floats, strings and Decimals to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value, places: Decimal = CENT) -> Decimal:
    """Round half away from zero to the given number of places."""
    return to_decimal(value).quantize(places, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PercentageSplit:
    """Participant id → percentage (0-100). Sums to 100 ± 0.01 when valid."""

    values: Dict[str, Decimal] = field(default_factory=dict)
    mode = PERCENTAGE_MODE

    def weights(self) -> Dict[str, Decimal]:
        return {key: to_decimal(value) for key, value in self.values.items()}

    def total(self) -> Decimal:
        return sum(self.weights().values(), Decimal('0'))

    def to_storage(self) -> Dict[str, str]:
        # Stored as strings so JSON keeps the exact 2-decimal representation.
        return {key: str(quantize(value)) for key, value in self.values.items()}


@dataclass(frozen=True)
class SharesSplit:
    """Participant id → non-negative integer share count. Sum must be > 0."""

    values: Dict[str, int] = field(default_factory=dict)
    mode = SHARES_MODE

    def weights(self) -> Dict[str, Decimal]:
        return {key: Decimal(value) for key, value in self.values.items()}

    def total(self) -> int:
        return sum(self.values.values())

    def to_storage(self) -> Dict[str, int]:
        return dict(self.values)


Split = Union[PercentageSplit, SharesSplit]


def split_from_storage(mode: str, values: Optional[dict]) -> Split:
    """Rebuild a split from the ``split_mode``/``split_values`` model columns."""
    values = values or {}
    if mode == SHARES_MODE:
        return SharesSplit({str(key): int(value) for key, value in values.items()})
    return PercentageSplit({str(key): to_decimal(value) for key, value in values.items()})


def split_from_payload(split_percentage=None, split_shares=None) -> Optional[Split]:
    """
    Pick the active split from an API payload.

    Shares take precedence when both maps are supplied; the percentage map is
    then ignored. Returns None when neither is present. Values are not
    validated here, see ``apps.ledger.services.validation``.
    """
    if split_shares:
        return SharesSplit({str(key): value for key, value in split_shares.items()})
    if split_percentage:
        return PercentageSplit({str(key): value for key, value in split_percentage.items()})
    return None


def split_to_payload(split: Split) -> dict:
    """Render a split the way the API exposes it."""
    if split.mode == SHARES_MODE:
        return {
            'split_mode': SHARES_MODE,
            'split_shares': split.to_storage(),
            'split_percentage': None,
        }
    return {
        'split_mode': PERCENTAGE_MODE,
        'split_shares': None,
        'split_percentage': {
            key: quantize(value) for key, value in split.values.items()
        },
    }
