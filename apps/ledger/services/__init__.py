"""
Ledger services layer.

The split and balance engine: allocation, sanitization, validation,
balances and settlement suggestions. Apart from the balance and settlement
queries these functions are pure and never touch the database.
"""

from .exceptions import (
    LedgerServiceError,
    LedgerValidationError,
    NotFoundError,
    BusinessRuleError,
)

from .allocation import (
    compute_equal_percentage_split,
    compute_equal_shares,
    allocate_amount,
)

from .sanitization import (
    sanitize_percentages,
    sanitize_shares,
    sanitize_split,
    sanitize_expense_data,
    has_valid_allocation,
)

from .validation import (
    validate_split_percentages,
    validate_split_shares,
    validate_split,
    validate_amount,
)

from .balances import (
    BalanceStatus,
    ExpenseRecord,
    PaymentRecord,
    balance_status,
    expense_owed_amounts,
    accumulate_balances,
    round_balance,
    calculate_event_balance,
    calculate_global_balance,
    calculate_all_balances,
    calculate_event_statistics,
)

from .settlements import (
    suggest_settlements,
    calculate_settlements,
)


__all__ = [
    # Exceptions
    'LedgerServiceError',
    'LedgerValidationError',
    'NotFoundError',
    'BusinessRuleError',

    # Allocation
    'compute_equal_percentage_split',
    'compute_equal_shares',
    'allocate_amount',

    # Sanitization
    'sanitize_percentages',
    'sanitize_shares',
    'sanitize_split',
    'sanitize_expense_data',
    'has_valid_allocation',

    # Validation
    'validate_split_percentages',
    'validate_split_shares',
    'validate_split',
    'validate_amount',

    # Balances
    'BalanceStatus',
    'ExpenseRecord',
    'PaymentRecord',
    'balance_status',
    'expense_owed_amounts',
    'accumulate_balances',
    'round_balance',
    'calculate_event_balance',
    'calculate_global_balance',
    'calculate_all_balances',
    'calculate_event_statistics',

    # Settlements
    'suggest_settlements',
    'calculate_settlements',
]
