import pytest
from decimal import Decimal

from apps.ledger.splits import PercentageSplit


@pytest.fixture
def coaching_fee(event, alice, charlie, cost_item_factory):
    """$40 paid by Alice but allocated entirely to Charlie."""
    return cost_item_factory(event, alice, '40.00', PercentageSplit({
        str(alice.id): Decimal('0'),
        str(charlie.id): Decimal('100'),
    }), description='Coaching fee')
