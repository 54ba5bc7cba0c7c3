"""
Domain exceptions for the ledger engine.

Every service in the project raises one of the three error kinds below (or
a more specific subclass defined in an app's ``services/exceptions.py``).
They carry a human-readable message, an optional field name and the HTTP
status the API layer should answer with.

Exception Hierarchy:
    LedgerServiceError (base)
    ├── LedgerValidationError   400 - malformed or out-of-invariant input
    ├── NotFoundError           404 - referenced entity is absent
    └── BusinessRuleError       422 - operation violates a domain rule

Usage:
    from apps.ledger.services.exceptions import LedgerValidationError

    if total <= 0:
        raise LedgerValidationError(
            "At least one person must have a share greater than 0",
            field='split_shares',
        )
"""


class LedgerServiceError(Exception):
    """
    Base exception for all ledger service errors.

    Catching this class in a view (or in the DRF exception handler) catches
    every domain error raised by the services:

        try:
            balance = calculate_event_balance(event_id=pk)
        except LedgerServiceError as e:
            return Response({'error': e.message}, status=e.status_code)
    """

    status_code = 500
    default_message = 'Ledger service error'

    def __init__(self, message=None, field=None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)


class LedgerValidationError(LedgerServiceError):
    """
    Raised when input is malformed or breaks a split invariant.

    Always recoverable by the caller correcting the input.

    Example:
        raise LedgerValidationError(
            "Split percentages must sum to 100%. Currently: 99.00%",
            field='split_percentage',
        )
    """

    status_code = 400
    default_message = 'Invalid data'


class NotFoundError(LedgerServiceError):
    """
    Raised when a referenced event, player, expense or payment does not exist.

    Example:
        raise NotFoundError("Event not found")
    """

    status_code = 404
    default_message = 'Resource not found'


class BusinessRuleError(LedgerServiceError):
    """
    Raised when an operation would violate a domain rule.

    For example removing a participant who paid for one of the event's
    expenses, or deleting an event that still has expenses.
    """

    status_code = 422
    default_message = 'Business rule violation'
