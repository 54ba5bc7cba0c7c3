"""
Unit tests for split and amount validation.
"""

import pytest
from decimal import Decimal

from apps.ledger.services.exceptions import LedgerValidationError
from apps.ledger.services.validation import (
    validate_amount,
    validate_split,
    validate_split_percentages,
    validate_split_shares,
)
from apps.ledger.splits import PercentageSplit, SharesSplit


class TestValidateSplitPercentages:
    """Tests for validate_split_percentages()."""

    def test_sum_error_names_actual_total(self):
        with pytest.raises(LedgerValidationError) as exc_info:
            validate_split_percentages({'a': 50, 'b': 49})

        assert '99' in exc_info.value.message
        assert exc_info.value.message == 'Split percentages must sum to 100%. Currently: 99.00%'
        assert exc_info.value.field == 'split_percentage'

    def test_valid_split_is_normalised(self):
        result = validate_split_percentages({'a': '33.33', 'b': 33.33, 'c': Decimal('33.34')})

        assert result == {
            'a': Decimal('33.33'),
            'b': Decimal('33.33'),
            'c': Decimal('33.34'),
        }
        assert all(isinstance(value, Decimal) for value in result.values())

    def test_within_tolerance(self):
        assert validate_split_percentages({'a': '33.33', 'b': '33.33', 'c': '33.33'})
        assert validate_split_percentages({'a': '50.01', 'b': '50.00'})

    def test_outside_tolerance(self):
        with pytest.raises(LedgerValidationError):
            validate_split_percentages({'a': '50.01', 'b': '50.01'})

    def test_zero_values_allowed(self):
        assert validate_split_percentages({'a': 0, 'b': 100}) == {
            'a': Decimal('0'),
            'b': Decimal('100'),
        }

    @pytest.mark.parametrize('value', [-1, 100.5, 'abc', None, True, float('nan'), [50]])
    def test_invalid_values(self, value):
        with pytest.raises(LedgerValidationError) as exc_info:
            validate_split_percentages({'a': value, 'b': 50})

        assert exc_info.value.field == 'split_percentage'

    @pytest.mark.parametrize('value', ['33.333', 33.334, Decimal('0.001')])
    def test_more_than_two_decimals_rejected(self, value):
        with pytest.raises(LedgerValidationError) as exc_info:
            validate_split_percentages({'a': value, 'b': '33.33', 'c': '33.34'})

        assert exc_info.value.message == 'Split percentages can have at most 2 decimal places'
        assert exc_info.value.field == 'split_percentage'

    def test_trailing_zeros_are_not_extra_decimals(self):
        assert validate_split_percentages({'a': '50.000', 'b': '50'}) == {
            'a': Decimal('50'),
            'b': Decimal('50'),
        }

    @pytest.mark.parametrize('mapping', [{}, None, [('a', 100)], 'a=100'])
    def test_missing_or_malformed_mapping(self, mapping):
        with pytest.raises(LedgerValidationError):
            validate_split_percentages(mapping)


class TestValidateSplitShares:
    """Tests for validate_split_shares()."""

    def test_valid_shares(self):
        assert validate_split_shares({'a': 1, 'b': 2, 'c': 0}) == {'a': 1, 'b': 2, 'c': 0}

    def test_integral_numbers_are_normalised(self):
        result = validate_split_shares({'a': 2.0, 'b': '3'})

        assert result == {'a': 2, 'b': 3}
        assert all(isinstance(value, int) for value in result.values())

    @pytest.mark.parametrize('value', [1.5, -1, True, 'two', None])
    def test_invalid_values(self, value):
        with pytest.raises(LedgerValidationError) as exc_info:
            validate_split_shares({'a': value, 'b': 1})

        assert exc_info.value.field == 'split_shares'

    def test_all_zero(self):
        with pytest.raises(LedgerValidationError) as exc_info:
            validate_split_shares({'a': 0, 'b': 0})

        assert 'greater than 0' in exc_info.value.message

    def test_empty(self):
        with pytest.raises(LedgerValidationError):
            validate_split_shares({})


class TestValidateSplit:
    """Tests for validate_split()."""

    def test_dispatches_on_kind(self):
        assert validate_split(SharesSplit({'a': '2'})) == SharesSplit({'a': 2})
        assert validate_split(PercentageSplit({'a': '100'})) == PercentageSplit({'a': Decimal('100')})

    def test_percentage_errors_propagate(self):
        with pytest.raises(LedgerValidationError):
            validate_split(PercentageSplit({'a': 50}))


class TestValidateAmount:
    """Tests for validate_amount()."""

    def test_rounds_to_cents(self):
        assert validate_amount('10') == Decimal('10.00')
        assert validate_amount(Decimal('12.345')) == Decimal('12.35')

    @pytest.mark.parametrize('amount', [0, '0.00', -5, '100000', 'ten', None, False])
    def test_rejects_out_of_range(self, amount):
        with pytest.raises(LedgerValidationError) as exc_info:
            validate_amount(amount)

        assert exc_info.value.field == 'amount'

    def test_custom_field(self):
        with pytest.raises(LedgerValidationError) as exc_info:
            validate_amount(0, field='default_amount')

        assert exc_info.value.field == 'default_amount'
