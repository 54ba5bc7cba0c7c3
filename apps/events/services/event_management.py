"""
Event management service.

Handles event CRUD and the default (equal) split offered for a new expense.
Participant changes live in participant_management.
"""

import logging
from datetime import date as date_type
from typing import Iterable, Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Prefetch

from apps.events.models import Event, EventParticipant
from apps.ledger.services.allocation import (
    compute_equal_percentage_split,
    compute_equal_shares,
)
from apps.ledger.services.exceptions import LedgerValidationError
from apps.ledger.splits import (
    PERCENTAGE_MODE,
    SHARES_MODE,
    PercentageSplit,
    SharesSplit,
    split_to_payload,
)

from .exceptions import (
    DuplicateEventNameError,
    EventInUseError,
    EventNotFoundError,
)
from .participant_management import set_participants

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 500


def _clean_name(name) -> str:
    name = (name or '').strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise LedgerValidationError(
            f'Event name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters',
            field='name',
        )
    return name


def _clean_description(description) -> str:
    description = (description or '').strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise LedgerValidationError(
            f'Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters',
            field='description',
        )
    return description


def _ensure_unique_name(name: str, exclude_id: Optional[UUID] = None) -> None:
    queryset = Event.objects.filter(name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateEventNameError(
            f'An event named "{name}" already exists', field='name'
        )


@transaction.atomic
def create_event(
    *,
    name: str,
    date: date_type,
    description: str = '',
    participant_ids: Optional[Iterable] = None,
) -> Event:
    """
    Create a new event, optionally with its initial participants.

    Args:
        name: Event name, 3-200 characters, unique
        date: Day the event takes place
        description: Optional description, at most 500 characters
        participant_ids: Optional initial participants, in display order

    Returns:
        Created Event instance

    Raises:
        LedgerValidationError: If name or description are invalid
        DuplicateEventNameError: If the name is already taken
        InvalidParticipantsError: If the participant list is invalid
    """
    name = _clean_name(name)
    _ensure_unique_name(name)

    event = Event.objects.create(
        name=name,
        date=date,
        description=_clean_description(description),
    )
    logger.info('Created event %s (%s)', event.name, event.id)

    if participant_ids:
        set_participants(event_id=event.id, participant_ids=list(participant_ids))

    return event


def get_event_by_id(*, event_id: UUID) -> Event:
    """
    Get an event by ID with its participants prefetched.

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    try:
        return (
            Event.objects
            .prefetch_related(
                Prefetch(
                    'memberships',
                    queryset=EventParticipant.objects.select_related('player').order_by('position')
                )
            )
            .get(id=event_id)
        )
    except (Event.DoesNotExist, DjangoValidationError, ValueError):
        raise EventNotFoundError(f'Event with ID {event_id} not found')


@transaction.atomic
def update_event(
    *,
    event_id: UUID,
    name: Optional[str] = None,
    date: Optional[date_type] = None,
    description: Optional[str] = None,
) -> Event:
    """
    Update an event's name, date or description. None leaves a field as is.

    Raises:
        EventNotFoundError: If event doesn't exist
        LedgerValidationError: If name or description are invalid
        DuplicateEventNameError: If the new name is already taken
    """
    try:
        event = Event.objects.select_for_update().get(id=event_id)
    except (Event.DoesNotExist, DjangoValidationError, ValueError):
        raise EventNotFoundError(f'Event with ID {event_id} not found')

    if name is not None:
        name = _clean_name(name)
        _ensure_unique_name(name, exclude_id=event.id)
        event.name = name
    if date is not None:
        event.date = date
    if description is not None:
        event.description = _clean_description(description)

    event.save()
    logger.info('Updated event %s', event.id)
    return event


@transaction.atomic
def delete_event(*, event_id: UUID) -> None:
    """
    Delete an event that has no expenses or payments.

    Raises:
        EventNotFoundError: If event doesn't exist
        EventInUseError: If expenses or payments still belong to the event
    """
    try:
        event = Event.objects.select_for_update().get(id=event_id)
    except (Event.DoesNotExist, DjangoValidationError, ValueError):
        raise EventNotFoundError(f'Event with ID {event_id} not found')

    if event.cost_items.exists() or event.payments.exists():
        logger.warning('Refused to delete event %s: it has expenses or payments', event.id)
        raise EventInUseError(
            f'Cannot delete "{event.name}": delete its expenses and payments first'
        )

    event.delete()
    logger.info('Deleted event %s', event_id)


def get_equal_split(
    *,
    event_id: UUID,
    mode: str = PERCENTAGE_MODE,
    exclude: Iterable = (),
) -> dict:
    """
    Default split for a new expense of the event.

    Every participant not in ``exclude`` gets an equal part: exact
    percentages summing to 100.00, or one share each.

    Returns:
        dict with ``split_mode``, ``split_percentage`` and ``split_shares``

    Raises:
        EventNotFoundError: If event doesn't exist
        LedgerValidationError: If the mode is unknown or everyone is excluded
    """
    event = get_event_by_id(event_id=event_id)
    excluded = {str(pid) for pid in exclude}
    included = [pid for pid in event.participant_ids() if pid not in excluded]

    if not included:
        raise LedgerValidationError(
            'At least one participant must be included in the split',
            field='exclude',
        )

    if mode == SHARES_MODE:
        split = SharesSplit(compute_equal_shares(included))
    elif mode == PERCENTAGE_MODE:
        split = PercentageSplit(compute_equal_percentage_split(included))
    else:
        raise LedgerValidationError(
            f'Unknown split mode "{mode}"', field='mode'
        )
    return split_to_payload(split)
