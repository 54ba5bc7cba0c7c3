"""
Expense template service.

Templates are reusable quick-add expenses. Applying one to an event turns
it into ready-to-submit expense data with one share per participant.
"""

import datetime
import logging
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Max, QuerySet

from apps.events.services.event_management import get_event_by_id
from apps.expenses.models import ExpenseTemplate
from apps.ledger.services.allocation import compute_equal_shares
from apps.ledger.services.exceptions import LedgerValidationError
from apps.ledger.services.validation import validate_amount
from apps.ledger.splits import SHARES_MODE
from apps.players.services.exceptions import PlayerNotFoundError
from apps.players.services.player_management import get_player_by_id

from .exceptions import TemplateNotFoundError

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
CATEGORY_MAX_LENGTH = 50
QUICK_ADD_LIMIT = 6

_UNSET = object()


def _clean_name(name) -> str:
    name = (name or '').strip()
    if not 1 <= len(name) <= NAME_MAX_LENGTH:
        raise LedgerValidationError(
            f'Template name must be between 1 and {NAME_MAX_LENGTH} characters',
            field='name',
        )
    return name


def _clean_category(category) -> str:
    category = (category or '').strip()
    if len(category) > CATEGORY_MAX_LENGTH:
        raise LedgerValidationError(
            f'Category cannot exceed {CATEGORY_MAX_LENGTH} characters',
            field='category',
        )
    return category


def _resolve_payer(player_id):
    if not player_id:
        return None
    try:
        return get_player_by_id(player_id=player_id)
    except PlayerNotFoundError:
        raise LedgerValidationError(
            f'Player with ID {player_id} does not exist', field='default_paid_by'
        )


def get_template_by_id(*, template_id: UUID) -> ExpenseTemplate:
    """
    Get a template by ID.

    Raises:
        TemplateNotFoundError: If template doesn't exist
    """
    try:
        return ExpenseTemplate.objects.select_related('default_paid_by').get(id=template_id)
    except (ExpenseTemplate.DoesNotExist, DjangoValidationError, ValueError):
        raise TemplateNotFoundError(f'Template with ID {template_id} not found')


@transaction.atomic
def create_template(
    *,
    name: str,
    default_amount,
    category: str = '',
    default_paid_by_id: Optional[UUID] = None,
) -> ExpenseTemplate:
    """
    Create a template at the end of the display order.

    Duplicate names are allowed but logged.

    Raises:
        LedgerValidationError: If a field is invalid or the default payer
            doesn't exist
    """
    name = _clean_name(name)
    if ExpenseTemplate.objects.filter(name__iexact=name).exists():
        logger.warning('Template named "%s" already exists', name)

    last_order = ExpenseTemplate.objects.aggregate(last=Max('order'))['last']
    template = ExpenseTemplate.objects.create(
        name=name,
        default_amount=validate_amount(default_amount, field='default_amount'),
        category=_clean_category(category),
        default_paid_by=_resolve_payer(default_paid_by_id),
        order=0 if last_order is None else last_order + 1,
    )
    logger.info('Created expense template %s (%s)', template.name, template.id)
    return template


@transaction.atomic
def update_template(
    *,
    template_id: UUID,
    name: Optional[str] = None,
    default_amount=None,
    category: Optional[str] = None,
    default_paid_by_id=_UNSET,
) -> ExpenseTemplate:
    """
    Update a template. None leaves a field as is; ``default_paid_by_id=None``
    clears the default payer.

    Raises:
        TemplateNotFoundError: If template doesn't exist
        LedgerValidationError: If a field is invalid
    """
    try:
        template = ExpenseTemplate.objects.select_for_update().get(id=template_id)
    except (ExpenseTemplate.DoesNotExist, DjangoValidationError, ValueError):
        raise TemplateNotFoundError(f'Template with ID {template_id} not found')

    if name is not None:
        template.name = _clean_name(name)
    if default_amount is not None:
        template.default_amount = validate_amount(default_amount, field='default_amount')
    if category is not None:
        template.category = _clean_category(category)
    if default_paid_by_id is not _UNSET:
        template.default_paid_by = _resolve_payer(default_paid_by_id)

    template.save()
    logger.info('Updated expense template %s', template.id)
    return template


@transaction.atomic
def delete_template(*, template_id: UUID) -> None:
    """
    Delete a template.

    Raises:
        TemplateNotFoundError: If template doesn't exist
    """
    template = get_template_by_id(template_id=template_id)
    template.delete()
    logger.info('Deleted expense template %s', template_id)


@transaction.atomic
def reorder_templates(*, order_updates: Iterable[Dict]) -> List[ExpenseTemplate]:
    """
    Set the display order of several templates at once.

    Args:
        order_updates: ``[{'id': ..., 'order': n}, ...]`` with n >= 0

    Raises:
        LedgerValidationError: If the list is empty or an entry is malformed
        TemplateNotFoundError: If an id doesn't exist; nothing is changed
    """
    order_updates = list(order_updates or [])
    if not order_updates:
        raise LedgerValidationError('Order updates must be a non-empty list', field='order')

    templates = []
    for update in order_updates:
        order = update.get('order') if isinstance(update, dict) else None
        if (
            not isinstance(update, dict) or not update.get('id')
            or isinstance(order, bool) or not isinstance(order, int) or order < 0
        ):
            raise LedgerValidationError(
                'Each order update must have an id and a non-negative order',
                field='order',
            )
        template = get_template_by_id(template_id=update['id'])
        template.order = order
        templates.append(template)

    for template in templates:
        template.save(update_fields=['order', 'updated_at'])

    logger.info('Reordered %d expense templates', len(templates))
    return templates


def list_templates() -> QuerySet:
    """All templates in display order."""
    return ExpenseTemplate.objects.select_related('default_paid_by')


def get_quick_add_templates(*, limit: int = QUICK_ADD_LIMIT) -> List[ExpenseTemplate]:
    """The first ``limit`` templates in display order, for the quick-add bar."""
    return list(list_templates()[:limit])


def template_to_expense_data(*, template_id: UUID, event_id: UUID) -> Dict:
    """
    Expense data prefilled from a template for one event.

    The split gives every participant one share. The template's default
    payer is kept only if they take part in the event.

    Raises:
        TemplateNotFoundError: If template doesn't exist
        EventNotFoundError: If event doesn't exist
    """
    template = get_template_by_id(template_id=template_id)
    event = get_event_by_id(event_id=event_id)
    participant_ids = event.participant_ids()

    paid_by = None
    if template.default_paid_by_id:
        paid_by = str(template.default_paid_by_id)
        if paid_by not in participant_ids:
            logger.info(
                'Default payer of template %s is not in event %s, clearing it',
                template.id, event.id,
            )
            paid_by = None

    return {
        'event': event.id,
        'description': template.name,
        'amount': template.default_amount,
        'paid_by': paid_by,
        'date': datetime.date.today(),
        'split_mode': SHARES_MODE,
        'split_shares': compute_equal_shares(participant_ids),
        'split_percentage': None,
        'template': template.id,
    }
