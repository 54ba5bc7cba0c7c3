"""
Domain-specific exceptions for players app.

Each exception maps onto one of the ledger error classes so the API
exception handler can turn it into the right HTTP status.
"""

from apps.ledger.services.exceptions import (
    BusinessRuleError,
    LedgerValidationError,
    NotFoundError,
)


class PlayerNotFoundError(NotFoundError):
    """Raised when a player does not exist."""
    default_message = 'Player not found'


class DuplicatePlayerNameError(LedgerValidationError):
    """Raised when another player already uses the name (case-insensitive)."""
    pass


class PlayerInUseError(BusinessRuleError):
    """Raised when deleting a player that events, expenses or payments still reference."""
    pass
