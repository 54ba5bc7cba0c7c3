"""
Unit tests for split sanitization.

Tests cover:
- Rescaling percentage splits after participants are removed
- Residual placement (first non-zero entry)
- Idempotence and the post-conditions of a sanitized split
- Shares splits keeping their ratios
- Sanitizing whole expense mappings
"""

import uuid

import pytest
from decimal import Decimal

from apps.ledger.services.sanitization import (
    has_valid_allocation,
    sanitize_expense_data,
    sanitize_percentages,
    sanitize_shares,
    sanitize_split,
)
from apps.ledger.splits import PercentageSplit, SharesSplit


class TestSanitizePercentages:
    """Tests for sanitize_percentages()."""

    def test_removing_one_of_four_rescales_to_100(self):
        """{A,B,C,D: 25} without D sums to exactly 100."""
        split = {'a': 25, 'b': 25, 'c': 25, 'd': 25}

        result = sanitize_percentages(split, ['a', 'b', 'c'])

        assert set(result) == {'a', 'b', 'c'}
        assert sum(result.values()) == Decimal('100.00')
        assert result == {
            'a': Decimal('33.34'),
            'b': Decimal('33.33'),
            'c': Decimal('33.33'),
        }

    def test_no_removal_returns_values_unchanged(self):
        split = {'a': Decimal('33.33'), 'b': Decimal('33.33'), 'c': Decimal('33.34')}

        assert sanitize_percentages(split, ['a', 'b', 'c', 'd']) == split

    def test_everyone_removed(self):
        assert sanitize_percentages({'a': 50, 'b': 50}, ['z']) == {}

    def test_only_zero_weights_left(self):
        assert sanitize_percentages({'a': 0, 'b': 100}, ['a']) == {}

    def test_zero_weight_entry_stays_zero(self):
        result = sanitize_percentages({'a': 0, 'b': 50, 'c': 50}, ['a', 'b'])

        assert result == {'a': Decimal('0.00'), 'b': Decimal('100.00')}

    def test_residual_skips_leading_zero_entry(self):
        split = {'a': 0, 'b': 25, 'c': 25, 'd': 25, 'e': 25}

        result = sanitize_percentages(split, ['a', 'b', 'c', 'd'])

        assert result['a'] == Decimal('0.00')
        assert result['b'] == Decimal('33.34')
        assert result['c'] == Decimal('33.33')
        assert result['d'] == Decimal('33.33')

    def test_residual_can_be_negative(self):
        """Six entries rounding up to 16.67 give the first one 16.65."""
        split = {key: 10 for key in 'abcdef'}
        split['g'] = 40

        result = sanitize_percentages(split, list('abcdef'))

        assert result['a'] == Decimal('16.65')
        assert all(result[key] == Decimal('16.67') for key in 'bcdef')
        assert sum(result.values()) == Decimal('100.00')

    def test_accepts_uuid_participants(self):
        pid = uuid.uuid4()

        result = sanitize_percentages({str(pid): 60, 'gone': 40}, [pid])

        assert result == {str(pid): Decimal('100.00')}

    @pytest.mark.parametrize('split,participants', [
        ({'a': 25, 'b': 25, 'c': 25, 'd': 25}, ['a', 'b', 'c']),
        ({'a': 10, 'b': 20, 'c': 30, 'd': 40}, ['b', 'd']),
        ({'a': Decimal('14.29'), 'b': Decimal('14.29'), 'c': Decimal('14.29'),
          'd': Decimal('14.29'), 'e': Decimal('14.29'), 'f': Decimal('14.29'),
          'g': Decimal('14.26')}, ['a', 'c', 'e']),
        ({'a': Decimal('33.33'), 'b': Decimal('33.33'), 'c': Decimal('33.34')}, ['c']),
        ({'a': 1, 'b': 1, 'c': 98}, ['a', 'b']),
        ({'a': 0, 'b': Decimal('0.01'), 'c': Decimal('99.99')}, ['a', 'b']),
    ])
    def test_postconditions(self, split, participants):
        """Keys are participants, non-empty results sum to 100, and sanitizing is idempotent."""
        once = sanitize_percentages(split, participants)
        twice = sanitize_percentages(once, participants)

        assert set(once) <= set(participants)
        assert abs(sum(once.values()) - Decimal('100')) <= Decimal('0.01')
        assert twice == once


class TestSanitizeShares:
    """Tests for sanitize_shares()."""

    def test_drops_removed_players(self):
        assert sanitize_shares({'a': 2, 'b': 4, 'c': 1}, ['a', 'b']) == {'a': 2, 'b': 4}

    def test_keeps_ratios_exactly(self):
        result = sanitize_shares({'a': 3, 'b': 6, 'c': 5}, ['a', 'b'])

        assert result['b'] / result['a'] == 2

    def test_idempotent(self):
        once = sanitize_shares({'a': 1, 'b': 2, 'c': 0}, ['a', 'c'])

        assert sanitize_shares(once, ['a', 'c']) == once


class TestSanitizeSplit:
    """Tests for sanitize_split() and has_valid_allocation()."""

    def test_returns_same_kind(self):
        shares = sanitize_split(SharesSplit({'a': 1, 'b': 1}), ['a'])
        percentages = sanitize_split(PercentageSplit({'a': 50, 'b': 50}), ['a'])

        assert shares == SharesSplit({'a': 1})
        assert percentages == PercentageSplit({'a': Decimal('100.00')})

    def test_has_valid_allocation(self):
        assert has_valid_allocation(SharesSplit({'a': 1}))
        assert not has_valid_allocation(SharesSplit({'a': 0}))
        assert not has_valid_allocation(SharesSplit({}))
        assert not has_valid_allocation(PercentageSplit({}))


class TestSanitizeExpenseData:
    """Tests for sanitize_expense_data()."""

    def test_sanitizes_percentages_and_keeps_other_fields(self):
        expense = {
            'description': 'Court rental',
            'amount': 60,
            'split_percentage': {'a': 25, 'b': 25, 'c': 25, 'd': 25},
        }

        result = sanitize_expense_data(expense, ['a', 'b', 'c'])

        assert result['description'] == 'Court rental'
        assert result['amount'] == 60
        assert sum(result['split_percentage'].values()) == Decimal('100.00')
        assert 'd' not in result['split_percentage']

    def test_does_not_modify_input(self):
        expense = {'split_shares': {'a': 1, 'b': 2}}

        result = sanitize_expense_data(expense, ['a'])

        assert result['split_shares'] == {'a': 1}
        assert expense['split_shares'] == {'a': 1, 'b': 2}

    def test_noop_without_split(self):
        expense = {'description': 'Drinks', 'split_percentage': None}

        assert sanitize_expense_data(expense, ['a']) == expense
