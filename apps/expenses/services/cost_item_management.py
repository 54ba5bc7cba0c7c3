"""
Cost item management service.

Handles expense CRUD. Every write locks the owning event row so it cannot
interleave with a participant change of the same event.

A split is only ever replaced as a whole (``replace_split``); there is no
operation that edits one participant's share in place.
"""

import datetime
import logging
from typing import Dict, Iterable, Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.events.models import Event
from apps.events.services.exceptions import EventNotFoundError
from apps.expenses.models import CostItem
from apps.ledger.services.allocation import allocate_amount, compute_equal_percentage_split
from apps.ledger.services.exceptions import LedgerValidationError
from apps.ledger.services.validation import validate_amount, validate_split
from apps.ledger.splits import PercentageSplit, Split, SharesSplit, quantize
from apps.players.models import Player

from .exceptions import CostItemNotFoundError, SplitParticipantError

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 200


def _lock_event(event_id: UUID) -> Event:
    try:
        return Event.objects.select_for_update().get(id=event_id)
    except (Event.DoesNotExist, DjangoValidationError, ValueError):
        raise EventNotFoundError(f'Event with ID {event_id} not found')


def _lock_cost_item(cost_item_id: UUID) -> CostItem:
    try:
        item = CostItem.objects.get(id=cost_item_id)
    except (CostItem.DoesNotExist, DjangoValidationError, ValueError):
        raise CostItemNotFoundError(f'Cost item with ID {cost_item_id} not found')
    _lock_event(item.event_id)
    return CostItem.objects.select_for_update().get(id=item.id)


def _clean_description(description) -> str:
    description = (description or '').strip()
    if not 1 <= len(description) <= DESCRIPTION_MAX_LENGTH:
        raise LedgerValidationError(
            f'Description must be between 1 and {DESCRIPTION_MAX_LENGTH} characters',
            field='description',
        )
    return description


def _check_payer(paid_by_id, participant_ids: Iterable[str]) -> str:
    payer = str(paid_by_id)
    if payer not in set(participant_ids):
        raise SplitParticipantError(
            'The payer must be a participant of the event', field='paid_by'
        )
    return payer


def resolve_split(split: Split, participant_ids: Iterable[str]) -> Split:
    """
    Validate a split against the invariants and the event's participants.

    Entries for non-participants are accepted only with a zero weight and
    are dropped from the result.

    Raises:
        LedgerValidationError: If the split breaks a split invariant
        SplitParticipantError: If a non-participant has a non-zero weight
    """
    if split is None:
        raise LedgerValidationError(
            'Split configuration is required', field='split_percentage'
        )
    split = validate_split(split)
    participants = set(participant_ids)

    outsiders = [
        pid for pid, weight in split.weights().items()
        if pid not in participants and weight > 0
    ]
    if outsiders:
        field = 'split_shares' if isinstance(split, SharesSplit) else 'split_percentage'
        raise SplitParticipantError(
            'Only event participants can be part of the split', field=field
        )

    kept = {pid: value for pid, value in split.values.items() if pid in participants}
    return type(split)(kept)


@transaction.atomic
def create_cost_item(
    *,
    event_id: UUID,
    description: str,
    amount,
    paid_by_id: UUID,
    date: Optional[datetime.date] = None,
    split: Optional[Split] = None,
) -> CostItem:
    """
    Create an expense for an event.

    Args:
        event_id: UUID of the event
        description: What was paid for, 1-200 characters
        amount: 0.01-99999.99
        paid_by_id: Participant who paid
        date: Day of the expense, defaults to today
        split: PercentageSplit or SharesSplit; defaults to an equal
            percentage split over all participants

    Returns:
        Created CostItem instance

    Raises:
        EventNotFoundError: If the event doesn't exist
        LedgerValidationError: If any field or the split is invalid
        SplitParticipantError: If the payer or a weighted split entry is not
            a participant
    """
    event = _lock_event(event_id)
    participant_ids = event.participant_ids()

    payer = _check_payer(paid_by_id, participant_ids)
    if split is None:
        split = PercentageSplit(compute_equal_percentage_split(participant_ids))

    item = CostItem(
        event=event,
        description=_clean_description(description),
        amount=validate_amount(amount),
        paid_by_id=payer,
        date=date or datetime.date.today(),
    )
    item.split = resolve_split(split, participant_ids)
    item.save()

    logger.info('Created cost item %s (%s) for event %s', item.id, item.amount, event.id)
    return item


def get_cost_item_by_id(*, cost_item_id: UUID) -> CostItem:
    """
    Get a cost item by ID.

    Raises:
        CostItemNotFoundError: If cost item doesn't exist
    """
    try:
        return CostItem.objects.select_related('event', 'paid_by').get(id=cost_item_id)
    except (CostItem.DoesNotExist, DjangoValidationError, ValueError):
        raise CostItemNotFoundError(f'Cost item with ID {cost_item_id} not found')


def list_cost_items(*, event_id: Optional[UUID] = None) -> QuerySet:
    """All cost items, or those of one event, newest first."""
    queryset = CostItem.objects.select_related('event', 'paid_by')
    if event_id:
        queryset = queryset.filter(event_id=event_id)
    return queryset


@transaction.atomic
def update_cost_item(
    *,
    cost_item_id: UUID,
    description: Optional[str] = None,
    amount=None,
    date: Optional[datetime.date] = None,
    paid_by_id: Optional[UUID] = None,
) -> CostItem:
    """
    Update the plain fields of an expense. None leaves a field as is.

    Raises:
        CostItemNotFoundError: If cost item doesn't exist
        LedgerValidationError: If a field is invalid
        SplitParticipantError: If the new payer is not a participant
    """
    item = _lock_cost_item(cost_item_id)

    if description is not None:
        item.description = _clean_description(description)
    if amount is not None:
        item.amount = validate_amount(amount)
    if date is not None:
        item.date = date
    if paid_by_id is not None:
        item.paid_by_id = _check_payer(paid_by_id, item.event.participant_ids())

    item.save()
    logger.info('Updated cost item %s', item.id)
    return item


@transaction.atomic
def replace_split(*, cost_item_id: UUID, split: Split) -> CostItem:
    """
    Replace the whole split of an expense.

    Raises:
        CostItemNotFoundError: If cost item doesn't exist
        LedgerValidationError: If the split breaks a split invariant
        SplitParticipantError: If a weighted entry is not a participant
    """
    item = _lock_cost_item(cost_item_id)
    item.split = resolve_split(split, item.event.participant_ids())
    item.save(update_fields=['split_mode', 'split_values', 'updated_at'])

    logger.info('Replaced split of cost item %s (%s mode)', item.id, item.split_mode)
    return item


@transaction.atomic
def delete_cost_item(*, cost_item_id: UUID) -> None:
    """
    Delete an expense.

    Raises:
        CostItemNotFoundError: If cost item doesn't exist
    """
    item = _lock_cost_item(cost_item_id)
    item.delete()
    logger.info('Deleted cost item %s', cost_item_id)


def get_cost_item_breakdown(*, cost_item_id: UUID) -> Dict:
    """
    Cent-exact amount each participant owes for one expense.

    Returns:
        dict with ``cost_item_id``, ``description``, ``amount``,
        ``split_mode``, ``total_allocated`` and ``allocations``: a list of
        ``{player_id, player_name, weight, amount}`` in split order whose
        amounts sum to exactly the expense amount

    Raises:
        CostItemNotFoundError: If cost item doesn't exist
    """
    item = get_cost_item_by_id(cost_item_id=cost_item_id)
    split = item.split
    allocation = allocate_amount(item.amount, split)
    names = dict(Player.objects.filter(id__in=list(allocation)).values_list('id', 'name'))
    names = {str(pid): name for pid, name in names.items()}

    allocations = [
        {
            'player_id': pid,
            'player_name': names.get(pid, ''),
            'weight': split.values[pid],
            'amount': amount,
        }
        for pid, amount in allocation.items()
    ]
    return {
        'cost_item_id': item.id,
        'description': item.description,
        'amount': item.amount,
        'split_mode': item.split_mode,
        'total_allocated': quantize(sum((a['amount'] for a in allocations), quantize(0))),
        'allocations': allocations,
    }
