"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 5 players (Alice, Bob, Charlie, Dana, Eve)
- 2 badminton events with participants
- Cost items split by percentage and by shares
- Payments, one of them linked to an event
- Expense templates for the quick-add bar
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal
from datetime import date, timedelta

from apps.players.models import Player
from apps.events.models import Event, EventParticipant
from apps.expenses.models import CostItem, ExpenseTemplate
from apps.payments.models import Payment

from apps.players.services import create_player
from apps.events.services import create_event
from apps.expenses.services import create_cost_item, create_template
from apps.payments.services import create_payment
from apps.ledger.splits import PercentageSplit, SharesSplit


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        players = self.create_players()
        events = self.create_events(players)
        self.create_cost_items(players, events)
        self.create_payments(players, events)
        self.create_templates(players)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))

    def clear_data(self):
        """Clear all data from the database."""
        Payment.objects.all().delete()
        CostItem.objects.all().delete()
        ExpenseTemplate.objects.all().delete()
        EventParticipant.objects.all().delete()
        Event.objects.all().delete()
        Player.objects.all().delete()

    def create_players(self):
        """Create sample players, reusing existing ones with the same name."""
        self.stdout.write('  Creating players...')

        players = {}
        for name, email in [
            ('Alice', 'alice@example.com'),
            ('Bob', 'bob@example.com'),
            ('Charlie', 'charlie@example.com'),
            ('Dana', 'dana@example.com'),
            ('Eve', ''),
        ]:
            player = Player.objects.filter(name__iexact=name).first()
            if player is None:
                player = create_player(name=name, email=email)
            players[name.lower()] = player

        return players

    def create_events(self, players):
        """Create two badminton sessions."""
        self.stdout.write('  Creating events...')

        today = date.today()
        events_data = [
            {
                'key': 'monday',
                'name': 'Monday Badminton',
                'date': today - timedelta(days=7),
                'description': 'Weekly doubles at the sports hall',
                'participants': ['alice', 'bob', 'charlie'],
            },
            {
                'key': 'tournament',
                'name': 'Club Tournament',
                'date': today - timedelta(days=2),
                'description': 'Friendly tournament, four courts booked',
                'participants': ['alice', 'bob', 'charlie', 'dana', 'eve'],
            },
        ]

        events = {}
        for data in events_data:
            event = Event.objects.filter(name=data['name']).first()
            if event is None:
                event = create_event(
                    name=data['name'],
                    date=data['date'],
                    description=data['description'],
                    participant_ids=[players[key].id for key in data['participants']],
                )
            events[data['key']] = event

        return events

    def create_cost_items(self, players, events):
        """Create cost items with both split modes."""
        self.stdout.write('  Creating cost items...')

        monday = events['monday']
        tournament = events['tournament']
        if monday.cost_items.exists() or tournament.cost_items.exists():
            return

        alice, bob, charlie = players['alice'], players['bob'], players['charlie']
        dana, eve = players['dana'], players['eve']

        # Equal percentage split (the default)
        create_cost_item(
            event_id=monday.id,
            description='Court rental',
            amount=Decimal('60.00'),
            paid_by_id=alice.id,
            date=monday.date,
        )
        create_cost_item(
            event_id=monday.id,
            description='Shuttlecocks',
            amount=Decimal('24.50'),
            paid_by_id=bob.id,
            date=monday.date,
            split=PercentageSplit({
                str(alice.id): Decimal('50'),
                str(bob.id): Decimal('50'),
                str(charlie.id): Decimal('0'),
            }),
        )
        create_cost_item(
            event_id=tournament.id,
            description='Four courts, three hours',
            amount=Decimal('180.00'),
            paid_by_id=dana.id,
            date=tournament.date,
            split=SharesSplit({
                str(alice.id): 1,
                str(bob.id): 1,
                str(charlie.id): 2,
                str(dana.id): 1,
                str(eve.id): 1,
            }),
        )
        create_cost_item(
            event_id=tournament.id,
            description='Drinks',
            amount=Decimal('31.90'),
            paid_by_id=eve.id,
            date=tournament.date,
        )

    def create_payments(self, players, events):
        """Create a couple of payments."""
        self.stdout.write('  Creating payments...')

        if Payment.objects.exists():
            return

        create_payment(
            player_id=players['charlie'].id,
            amount=Decimal('20.00'),
            related_event_id=events['monday'].id,
            description='Cash to Alice after the game',
        )
        create_payment(
            player_id=players['bob'].id,
            amount=Decimal('15.00'),
            description='Bank transfer',
        )

    def create_templates(self, players):
        """Create quick-add expense templates."""
        self.stdout.write('  Creating expense templates...')

        if ExpenseTemplate.objects.exists():
            return

        for name, amount, category, payer in [
            ('Court rental', Decimal('60.00'), 'Venue', players['alice']),
            ('Shuttlecocks', Decimal('24.50'), 'Equipment', None),
            ('Drinks', Decimal('15.00'), 'Food & drink', None),
        ]:
            create_template(
                name=name,
                default_amount=amount,
                category=category,
                default_paid_by_id=payer.id if payer else None,
            )
