"""
Domain-specific exceptions for expenses app.
"""

from apps.ledger.services.exceptions import LedgerValidationError, NotFoundError


class CostItemNotFoundError(NotFoundError):
    """Raised when a cost item does not exist."""
    default_message = 'Cost item not found'


class SplitParticipantError(LedgerValidationError):
    """Raised when the payer or a weighted split entry is not an event participant."""
    pass


class TemplateNotFoundError(NotFoundError):
    """Raised when an expense template does not exist."""
    default_message = 'Template not found'
