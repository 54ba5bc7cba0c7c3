import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient

from apps.players.models import Player
from apps.events.models import Event, EventParticipant
from apps.expenses.models import CostItem
from apps.ledger.splits import PercentageSplit, SharesSplit


@pytest.fixture
def api_client():
    """Return an API client (the API has no authentication)."""
    return APIClient()


@pytest.fixture
def alice(db):
    return Player.objects.create(name='Alice', email='alice@example.com')


@pytest.fixture
def bob(db):
    return Player.objects.create(name='Bob', email='bob@example.com')


@pytest.fixture
def charlie(db):
    return Player.objects.create(name='Charlie')


@pytest.fixture
def dana(db):
    return Player.objects.create(name='Dana')


def add_participants(event, *players):
    """Attach players to an event in the given order, bypassing the services."""
    for position, player in enumerate(players):
        EventParticipant.objects.create(event=event, player=player, position=position)
    return event


@pytest.fixture
def event(alice, bob, charlie):
    """Event with Alice, Bob and Charlie as participants."""
    event = Event.objects.create(name='Monday Badminton', date=date(2024, 3, 4))
    return add_participants(event, alice, bob, charlie)


@pytest.fixture
def empty_event(db):
    """Event without participants."""
    return Event.objects.create(name='Empty Session', date=date(2024, 3, 11))


def make_cost_item(event, paid_by, amount, split, description='Court rental'):
    """Create a cost item directly, without validation."""
    item = CostItem(
        event=event,
        description=description,
        amount=Decimal(amount),
        paid_by=paid_by,
        date=event.date,
    )
    item.split = split
    item.save()
    return item


@pytest.fixture
def court_rental(event, alice, bob, charlie):
    """$60 paid by Alice, split 33.33 / 33.33 / 33.34."""
    return make_cost_item(event, alice, '60.00', PercentageSplit({
        str(alice.id): Decimal('33.33'),
        str(bob.id): Decimal('33.33'),
        str(charlie.id): Decimal('33.34'),
    }))


@pytest.fixture
def shuttlecocks(event, alice, bob, charlie):
    """$90 paid by Bob, shares A:1 B:2 C:0."""
    return make_cost_item(event, bob, '90.00', SharesSplit({
        str(alice.id): 1,
        str(bob.id): 2,
        str(charlie.id): 0,
    }), description='Shuttlecocks')


@pytest.fixture
def cost_item_factory(db):
    """Factory creating cost items directly, without validation."""
    return make_cost_item
