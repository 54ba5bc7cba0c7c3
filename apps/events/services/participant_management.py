"""
Participant management service.

Changing who takes part in an event is the one operation that touches
existing expenses: every cost item split of the event is sanitized against
the new participant list in the same transaction, with the event row
locked, so nobody can observe participants and splits out of step.

Order of a participant change:
    1. lock the event row
    2. validate the new participant ids
    3. refuse to remove anyone who paid for one of the event's expenses
       or has a payment linked to the event
    4. apply the new ordered membership
    5. sanitize every expense split; abort if one has nobody left to pay
    6. persist the repaired splits
"""

import logging
import uuid
from typing import Iterable, List, NamedTuple
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from apps.events.models import Event, EventParticipant
from apps.ledger.services.sanitization import has_valid_allocation, sanitize_split
from apps.payments.models import Payment
from apps.players.models import Player

from .exceptions import (
    EventNotFoundError,
    InvalidParticipantsError,
    PayerRemovalError,
    UnresolvableSplitError,
)

logger = logging.getLogger(__name__)


class ParticipantChange(NamedTuple):
    event: Event
    added: List[str]
    removed: List[str]
    repaired_cost_items: int


def _lock_event(event_id: UUID) -> Event:
    try:
        return Event.objects.select_for_update().get(id=event_id)
    except (Event.DoesNotExist, DjangoValidationError, ValueError):
        raise EventNotFoundError(f'Event with ID {event_id} not found')


def _canonical_id(player_id, field='player_id') -> str:
    try:
        return str(uuid.UUID(str(player_id)))
    except ValueError:
        raise InvalidParticipantsError(f'"{player_id}" is not a valid player ID', field=field)


def validate_participant_ids(participant_ids: Iterable) -> List[str]:
    """
    Check a participant list and return it as canonical id strings.

    Raises:
        InvalidParticipantsError: If the list is empty, longer than
            MAX_PARTICIPANTS_PER_EVENT, repeats a player, contains something
            that is not an id, or names a player that doesn't exist
    """
    if not isinstance(participant_ids, (list, tuple)):
        raise InvalidParticipantsError(
            'Participants must be a list of player IDs', field='participant_ids'
        )

    ids = [_canonical_id(pid, field='participant_ids') for pid in participant_ids]

    if not ids:
        raise InvalidParticipantsError(
            'An event needs at least one participant', field='participant_ids'
        )
    max_participants = settings.MAX_PARTICIPANTS_PER_EVENT
    if len(ids) > max_participants:
        raise InvalidParticipantsError(
            f'An event can have at most {max_participants} participants',
            field='participant_ids',
        )
    if len(set(ids)) != len(ids):
        raise InvalidParticipantsError(
            'Each player can only take part once', field='participant_ids'
        )

    known = {str(pid) for pid in Player.objects.filter(id__in=ids).values_list('id', flat=True)}
    missing = [pid for pid in ids if pid not in known]
    if missing:
        raise InvalidParticipantsError(
            f'Unknown players: {", ".join(missing)}', field='participant_ids'
        )

    return ids


def _apply_membership(event: Event, participant_ids: List[str]) -> None:
    EventParticipant.objects.filter(event=event).exclude(player_id__in=participant_ids).delete()
    for position, player_id in enumerate(participant_ids):
        EventParticipant.objects.update_or_create(
            event=event,
            player_id=player_id,
            defaults={'position': position},
        )


@transaction.atomic
def set_participants(*, event_id: UUID, participant_ids: Iterable) -> ParticipantChange:
    """
    Replace an event's participant list and repair the affected splits.

    Args:
        event_id: UUID of the event
        participant_ids: New participants, in display order

    Returns:
        ParticipantChange with the event, the added and removed ids and the
        number of cost items whose split was repaired

    Raises:
        EventNotFoundError: If the event doesn't exist
        InvalidParticipantsError: If the new list is invalid
        PayerRemovalError: If a removed player paid for one of the expenses
            or has a payment linked to the event
        UnresolvableSplitError: If an expense would have nobody left to
            allocate it to; nothing is changed in that case
    """
    event = _lock_event(event_id)
    new_ids = validate_participant_ids(participant_ids)
    new_set = set(new_ids)

    current_ids = event.participant_ids()
    current_set = set(current_ids)
    added = [pid for pid in new_ids if pid not in current_set]
    removed = [pid for pid in current_ids if pid not in new_set]

    cost_items = list(
        event.cost_items.select_related('paid_by').order_by('date', 'created_at')
    )
    for item in cost_items:
        if str(item.paid_by_id) not in new_set:
            logger.warning(
                'Refused participant change on event %s: payer of cost item %s removed',
                event.id, item.id,
            )
            raise PayerRemovalError(
                f'Cannot remove {item.paid_by.name}: they paid for "{item.description}". '
                'Change the payer or delete the expense first.',
                field='participant_ids',
            )

    if removed:
        payment = (
            Payment.objects.filter(related_event=event, player_id__in=removed)
            .select_related('player')
            .order_by('date', 'created_at')
            .first()
        )
        if payment is not None:
            logger.warning(
                'Refused participant change on event %s: payment %s belongs to a removed player',
                event.id, payment.id,
            )
            raise PayerRemovalError(
                f'Cannot remove {payment.player.name}: they have a payment of '
                f'{payment.amount} linked to this event. '
                'Unlink or delete the payment first.',
                field='participant_ids',
            )

    _apply_membership(event, new_ids)

    repaired = 0
    for item in cost_items:
        split = item.split
        sanitized = sanitize_split(split, new_ids)
        if not has_valid_allocation(sanitized):
            logger.warning(
                'Refused participant change on event %s: cost item %s left without a split',
                event.id, item.id,
            )
            raise UnresolvableSplitError(
                f'Expense "{item.description}" would have nobody left to split it. '
                'Edit its split or delete it first.',
                field='participant_ids',
            )
        if sanitized != split:
            item.split = sanitized
            item.save(update_fields=['split_mode', 'split_values', 'updated_at'])
            repaired += 1

    if added or removed:
        event.save(update_fields=['updated_at'])

    logger.info(
        'Updated participants of event %s: %d added, %d removed, %d splits repaired',
        event.id, len(added), len(removed), repaired,
    )
    return ParticipantChange(event=event, added=added, removed=removed, repaired_cost_items=repaired)


@transaction.atomic
def add_participant(*, event_id: UUID, player_id: UUID) -> ParticipantChange:
    """
    Append a player to the end of an event's participant list.

    Raises:
        EventNotFoundError: If the event doesn't exist
        InvalidParticipantsError: If the player is unknown, already takes
            part or the event is full
    """
    event = _lock_event(event_id)
    player_id = _canonical_id(player_id)
    current_ids = event.participant_ids()
    if player_id in current_ids:
        raise InvalidParticipantsError(
            'Player already takes part in this event', field='player_id'
        )
    return set_participants(event_id=event.id, participant_ids=current_ids + [player_id])


@transaction.atomic
def remove_participant(*, event_id: UUID, player_id: UUID) -> ParticipantChange:
    """
    Remove one player from an event, sanitizing the splits they appear in.

    Raises:
        EventNotFoundError: If the event doesn't exist
        InvalidParticipantsError: If the player is not a participant or is
            the last one
        PayerRemovalError: If the player paid for one of the expenses or
            has a payment linked to the event
        UnresolvableSplitError: If an expense would be left without a split
    """
    event = _lock_event(event_id)
    player_id = _canonical_id(player_id)
    current_ids = event.participant_ids()
    if player_id not in current_ids:
        raise InvalidParticipantsError(
            'Player does not take part in this event', field='player_id'
        )
    remaining = [pid for pid in current_ids if pid != player_id]
    return set_participants(event_id=event.id, participant_ids=remaining)
