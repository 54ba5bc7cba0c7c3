"""
Domain-specific exceptions for events app.

These exceptions represent business rule violations and are converted to
HTTP responses by the API exception handler.
"""

from apps.ledger.services.exceptions import (
    BusinessRuleError,
    LedgerValidationError,
    NotFoundError,
)


class EventNotFoundError(NotFoundError):
    """Raised when an event does not exist."""
    default_message = 'Event not found'


class DuplicateEventNameError(LedgerValidationError):
    """Raised when another event already uses the name."""
    pass


class InvalidParticipantsError(LedgerValidationError):
    """Raised when a participant list is empty, too long, repeats or names unknown players."""
    pass


class PayerRemovalError(BusinessRuleError):
    """Raised when a participant change would remove the payer of an expense or of a linked payment."""
    pass


class UnresolvableSplitError(BusinessRuleError):
    """Raised when removing participants leaves an expense split with nobody to allocate to."""
    pass


class EventInUseError(BusinessRuleError):
    """Raised when deleting an event that still has expenses or payments."""
    pass
