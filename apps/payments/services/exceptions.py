"""
Domain-specific exceptions for payments app.
"""

from apps.ledger.services.exceptions import LedgerValidationError, NotFoundError


class PaymentNotFoundError(NotFoundError):
    """Raised when a payment does not exist."""
    default_message = 'Payment not found'


class InvalidSettlementError(LedgerValidationError):
    """Raised when a settlement names the same player twice or a non-positive amount."""
    pass
