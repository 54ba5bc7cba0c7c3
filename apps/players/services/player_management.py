"""
Player management service.

Handles player CRUD with name normalisation and uniqueness checks.
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Q, QuerySet

from apps.ledger.services.exceptions import LedgerValidationError
from apps.players.models import Player

from .exceptions import (
    DuplicatePlayerNameError,
    PlayerInUseError,
    PlayerNotFoundError,
)

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100


def _clean_name(name) -> str:
    name = (name or '').strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise LedgerValidationError(
            f'Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters',
            field='name',
        )
    return name


def _ensure_unique_name(name: str, exclude_id: Optional[UUID] = None) -> None:
    queryset = Player.objects.filter(name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicatePlayerNameError(
            f'A player named "{name}" already exists', field='name'
        )


@transaction.atomic
def create_player(*, name: str, email: str = '', phone: str = '') -> Player:
    """
    Create a new player.

    Args:
        name: Display name, 2-100 characters, unique ignoring case
        email: Optional contact email
        phone: Optional contact phone

    Returns:
        Created Player instance

    Raises:
        LedgerValidationError: If the name is too short or too long
        DuplicatePlayerNameError: If the name is already taken
    """
    name = _clean_name(name)
    _ensure_unique_name(name)

    player = Player.objects.create(
        name=name,
        email=(email or '').strip(),
        phone=(phone or '').strip(),
    )
    logger.info('Created player %s (%s)', player.name, player.id)
    return player


def get_player_by_id(*, player_id: UUID) -> Player:
    """
    Get a player by ID.

    Raises:
        PlayerNotFoundError: If player doesn't exist
    """
    try:
        return Player.objects.get(id=player_id)
    except (Player.DoesNotExist, DjangoValidationError, ValueError):
        raise PlayerNotFoundError(f'Player with ID {player_id} not found')


@transaction.atomic
def update_player(
    *,
    player_id: UUID,
    name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
) -> Player:
    """
    Update a player's details. Fields left as None are not touched.

    Raises:
        PlayerNotFoundError: If player doesn't exist
        LedgerValidationError: If the new name has an invalid length
        DuplicatePlayerNameError: If the new name is already taken
    """
    try:
        player = Player.objects.select_for_update().get(id=player_id)
    except (Player.DoesNotExist, DjangoValidationError, ValueError):
        raise PlayerNotFoundError(f'Player with ID {player_id} not found')

    if name is not None:
        name = _clean_name(name)
        _ensure_unique_name(name, exclude_id=player.id)
        player.name = name
    if email is not None:
        player.email = email.strip()
    if phone is not None:
        player.phone = phone.strip()

    player.save()
    logger.info('Updated player %s', player.id)
    return player


@transaction.atomic
def delete_player(*, player_id: UUID) -> None:
    """
    Delete a player who is not referenced anywhere.

    Raises:
        PlayerNotFoundError: If player doesn't exist
        PlayerInUseError: If the player still takes part in events, paid for
            expenses or made payments
    """
    player = get_player_by_id(player_id=player_id)

    if (
        player.events.exists()
        or player.paid_cost_items.exists()
        or player.payments.exists()
    ):
        logger.warning('Refused to delete player %s: still referenced', player.id)
        raise PlayerInUseError(
            f'Cannot delete {player.name}: they still take part in events, '
            'expenses or payments'
        )

    player.delete()
    logger.info('Deleted player %s', player_id)


def search_players(*, query: str = '') -> QuerySet:
    """Players whose name or email contains ``query``, alphabetically."""
    queryset = Player.objects.all()
    query = (query or '').strip()
    if query:
        queryset = queryset.filter(Q(name__icontains=query) | Q(email__icontains=query))
    return queryset.order_by('name')
