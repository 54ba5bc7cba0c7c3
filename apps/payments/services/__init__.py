"""
Payments app services layer.
"""

from .exceptions import (
    PaymentNotFoundError,
    InvalidSettlementError,
)

from .payment_management import (
    create_payment,
    get_payment_by_id,
    list_payments,
    update_payment,
    delete_payment,
    record_settlement,
)


__all__ = [
    # Exceptions
    'PaymentNotFoundError',
    'InvalidSettlementError',

    # Payment Management
    'create_payment',
    'get_payment_by_id',
    'list_payments',
    'update_payment',
    'delete_payment',
    'record_settlement',
]
