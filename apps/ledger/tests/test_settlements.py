"""
Tests for settlement suggestions.
"""

import pytest
from decimal import Decimal

from apps.ledger.services import calculate_settlements, suggest_settlements


def balance(user_id, net):
    return {'user_id': user_id, 'user_name': user_id.title(), 'net': Decimal(net)}


class TestSuggestSettlements:
    """Tests for suggest_settlements()."""

    def test_one_creditor_two_debtors(self):
        plan = suggest_settlements([
            balance('alice', '40.00'),
            balance('bob', '-20.00'),
            balance('charlie', '-20.00'),
        ])

        assert [(s['from_id'], s['to_id'], s['amount']) for s in plan['settlements']] == [
            ('bob', 'alice', Decimal('20.00')),
            ('charlie', 'alice', Decimal('20.00')),
        ]
        assert plan['settlements'][0]['description'] == 'Bob pays Alice'
        assert plan['summary'] == {
            'total_settlements': 2,
            'total_debt': Decimal('40.00'),
            'total_credit': Decimal('40.00'),
            'balanced': True,
        }

    def test_largest_amounts_first(self):
        plan = suggest_settlements([
            balance('alice', '10.00'),
            balance('bob', '30.00'),
            balance('charlie', '-35.00'),
            balance('dana', '-5.00'),
        ])

        assert [(s['from_id'], s['to_id'], s['amount']) for s in plan['settlements']] == [
            ('charlie', 'bob', Decimal('30.00')),
            ('charlie', 'alice', Decimal('5.00')),
            ('dana', 'alice', Decimal('5.00')),
        ]

    def test_everyone_settled(self):
        plan = suggest_settlements([balance('alice', '0.00'), balance('bob', '0.01')])

        assert plan['settlements'] == []
        assert plan['summary']['balanced'] is True

    def test_unbalanced_input(self):
        plan = suggest_settlements([balance('alice', '10.00'), balance('bob', '-5.00')])

        assert len(plan['settlements']) == 1
        assert plan['settlements'][0]['amount'] == Decimal('5.00')
        assert plan['summary']['balanced'] is False

    def test_empty(self):
        plan = suggest_settlements([])

        assert plan['settlements'] == []
        assert plan['summary']['total_settlements'] == 0


@pytest.mark.django_db
class TestCalculateSettlements:
    """Tests for calculate_settlements()."""

    def test_settles_global_balances(self, court_rental, shuttlecocks, alice, bob, charlie):
        plan = calculate_settlements()

        assert [(s['from_id'], s['to_id'], s['amount']) for s in plan['settlements']] == [
            (charlie.id, alice.id, Decimal('10.00')),
            (charlie.id, bob.id, Decimal('10.00')),
        ]
        assert plan['summary']['balanced'] is True
