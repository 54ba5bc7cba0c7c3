"""
Payment management service.

A payment always adds to its player's "paid" total: globally, and within
the related event when one is given.
"""

import datetime
import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.events.models import Event
from apps.events.services.exceptions import EventNotFoundError
from apps.ledger.services.exceptions import LedgerValidationError
from apps.ledger.services.validation import validate_amount
from apps.payments.models import Payment
from apps.players.services.player_management import get_player_by_id

from .exceptions import InvalidSettlementError, PaymentNotFoundError

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 500

_UNSET = object()


def _clean_description(description) -> str:
    description = (description or '').strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise LedgerValidationError(
            f'Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters',
            field='description',
        )
    return description


def _resolve_event(event_id, player_id) -> Optional[Event]:
    if not event_id:
        return None
    try:
        event = Event.objects.get(id=event_id)
    except (Event.DoesNotExist, DjangoValidationError, ValueError):
        raise EventNotFoundError('Related event not found')
    if not event.has_participant(player_id):
        raise LedgerValidationError(
            'Player must be a participant in the related event',
            field='related_event',
        )
    return event


def _get_for_update(payment_id: UUID) -> Payment:
    try:
        return Payment.objects.select_for_update().get(id=payment_id)
    except (Payment.DoesNotExist, DjangoValidationError, ValueError):
        raise PaymentNotFoundError(f'Payment with ID {payment_id} not found')


@transaction.atomic
def create_payment(
    *,
    player_id: UUID,
    amount,
    date: Optional[datetime.date] = None,
    related_event_id: Optional[UUID] = None,
    description: str = '',
) -> Payment:
    """
    Record a payment.

    Args:
        player_id: Player who paid
        amount: Positive amount, at most 99999.99
        date: Day of the payment, defaults to today
        related_event_id: Optional event the payment belongs to; the player
            must take part in it
        description: Optional note, at most 500 characters

    Returns:
        Created Payment instance

    Raises:
        PlayerNotFoundError: If the player doesn't exist
        EventNotFoundError: If the related event doesn't exist
        LedgerValidationError: If a field is invalid or the player is not a
            participant of the related event
    """
    player = get_player_by_id(player_id=player_id)
    payment = Payment.objects.create(
        player=player,
        amount=validate_amount(amount),
        date=date or datetime.date.today(),
        related_event=_resolve_event(related_event_id, player.id),
        description=_clean_description(description),
    )
    logger.info('Recorded payment %s of %s by player %s', payment.id, payment.amount, player.id)
    return payment


def get_payment_by_id(*, payment_id: UUID) -> Payment:
    """
    Get a payment by ID.

    Raises:
        PaymentNotFoundError: If payment doesn't exist
    """
    try:
        return Payment.objects.select_related('player', 'related_event').get(id=payment_id)
    except (Payment.DoesNotExist, DjangoValidationError, ValueError):
        raise PaymentNotFoundError(f'Payment with ID {payment_id} not found')


def list_payments(
    *,
    player_id: Optional[UUID] = None,
    event_id: Optional[UUID] = None,
) -> QuerySet:
    """Payments, newest first, optionally of one player and/or one event."""
    queryset = Payment.objects.select_related('player', 'related_event')
    if player_id:
        queryset = queryset.filter(player_id=player_id)
    if event_id:
        queryset = queryset.filter(related_event_id=event_id)
    return queryset


@transaction.atomic
def update_payment(
    *,
    payment_id: UUID,
    amount=None,
    date: Optional[datetime.date] = None,
    related_event_id=_UNSET,
    description: Optional[str] = None,
) -> Payment:
    """
    Update a payment. None leaves a field as is; ``related_event_id=None``
    unlinks the payment from its event.

    Raises:
        PaymentNotFoundError: If payment doesn't exist
        EventNotFoundError: If the new related event doesn't exist
        LedgerValidationError: If a field is invalid
    """
    payment = _get_for_update(payment_id)

    if amount is not None:
        payment.amount = validate_amount(amount)
    if date is not None:
        payment.date = date
    if related_event_id is not _UNSET:
        payment.related_event = _resolve_event(related_event_id, payment.player_id)
    if description is not None:
        payment.description = _clean_description(description)

    payment.save()
    logger.info('Updated payment %s', payment.id)
    return payment


@transaction.atomic
def delete_payment(*, payment_id: UUID) -> None:
    """
    Delete a payment.

    Raises:
        PaymentNotFoundError: If payment doesn't exist
    """
    payment = _get_for_update(payment_id)
    payment.delete()
    logger.info('Deleted payment %s', payment_id)


@transaction.atomic
def record_settlement(
    *,
    from_player_id: UUID,
    to_player_id: UUID,
    amount,
    description: str = '',
) -> Payment:
    """
    Record that one player settled up with another.

    Stored as a payment by the sender whose description names the
    recipient.

    Raises:
        InvalidSettlementError: If both players are the same or the amount
            is not positive
        PlayerNotFoundError: If either player doesn't exist
    """
    if str(from_player_id) == str(to_player_id):
        raise InvalidSettlementError(
            'A player cannot settle with themselves', field='to_player'
        )
    try:
        amount = validate_amount(amount)
    except LedgerValidationError as e:
        raise InvalidSettlementError(e.message, field='amount')

    sender = get_player_by_id(player_id=from_player_id)
    recipient = get_player_by_id(player_id=to_player_id)

    note = f'Settlement to {recipient.name}'
    description = _clean_description(description)
    if description:
        note = f'{note}: {description}'

    payment = create_payment(
        player_id=sender.id,
        amount=amount,
        description=note[:DESCRIPTION_MAX_LENGTH],
    )
    logger.info('Recorded settlement of %s from %s to %s', amount, sender.id, recipient.id)
    return payment
