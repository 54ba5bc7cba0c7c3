"""
Balance calculation.

Balances are derived on every read from the cost items and payments; they
are never stored. For a player within a scope (one event, or everything):

    paid = cost items the player covered + payments the player made
    owes = share of every cost item allocated to the player
    net  = paid - owes

Intermediate sums are kept at full Decimal precision and rounded to cents
once, when the result is produced, so rounding error does not compound
across many expenses.

Functions:
    accumulate_balances: Pure core over ExpenseRecord/PaymentRecord tuples.
    calculate_event_balance: Balances of one event's participants.
    calculate_global_balance: One player's balance across all events.
    calculate_all_balances: Global balance of every player.
    calculate_event_statistics: Summary numbers for one event.
"""

from decimal import Decimal
from typing import Dict, Iterable, NamedTuple
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Q

from apps.events.models import Event
from apps.expenses.models import CostItem
from apps.payments.models import Payment
from apps.players.models import Player

from .exceptions import LedgerValidationError, NotFoundError
from apps.ledger.splits import CENT, Split, quantize


ZERO = Decimal('0')


class BalanceStatus:
    OWED = 'owed'        # the group owes the player
    OWES = 'owes'        # the player owes the group
    SETTLED = 'settled'


class ExpenseRecord(NamedTuple):
    amount: Decimal
    paid_by: str
    split: Split


class PaymentRecord(NamedTuple):
    player: str
    amount: Decimal


def balance_status(net: Decimal) -> str:
    if net > CENT:
        return BalanceStatus.OWED
    if net < -CENT:
        return BalanceStatus.OWES
    return BalanceStatus.SETTLED


def expense_owed_amounts(amount, split: Split) -> Dict[str, Decimal]:
    """
    Full-precision amount owed by each participant with a positive weight.

    Percentages and shares use the same formula, ``amount * w / sum(w)``.

    Raises:
        LedgerValidationError: If the split weights sum to zero.
    """
    weights = split.weights()
    total_weight = sum(weights.values(), ZERO)
    if total_weight <= 0:
        raise LedgerValidationError('Total split weight must be greater than 0')

    amount = Decimal(amount)
    return {
        pid: amount * weight / total_weight
        for pid, weight in weights.items()
        if weight > 0
    }


def accumulate_balances(
    expenses: Iterable[ExpenseRecord],
    payments: Iterable[PaymentRecord],
    participant_ids: Iterable = (),
) -> Dict[str, Dict[str, Decimal]]:
    """
    Sum paid and owed amounts per player, unrounded.

    Every id in ``participant_ids`` is present in the result even without
    any activity; players who only appear in expenses or payments are added
    as they are met.
    """
    ledger = {str(pid): {'paid': ZERO, 'owes': ZERO} for pid in participant_ids}

    def entry(pid):
        return ledger.setdefault(str(pid), {'paid': ZERO, 'owes': ZERO})

    for expense in expenses:
        entry(expense.paid_by)['paid'] += Decimal(expense.amount)
        for pid, owed in expense_owed_amounts(expense.amount, expense.split).items():
            entry(pid)['owes'] += owed

    for payment in payments:
        entry(payment.player)['paid'] += Decimal(payment.amount)

    return ledger


def round_balance(paid: Decimal, owes: Decimal) -> Dict[str, Decimal]:
    """Round a raw paid/owes pair for presentation; net uses full precision."""
    net = quantize(paid - owes)
    return {
        'paid': quantize(paid),
        'owes': quantize(owes),
        'net': abs(net) if net == 0 else net,
    }


def _expense_record(cost_item: CostItem) -> ExpenseRecord:
    return ExpenseRecord(
        amount=cost_item.amount,
        paid_by=str(cost_item.paid_by_id),
        split=cost_item.split,
    )


def _payment_record(payment: Payment) -> PaymentRecord:
    return PaymentRecord(player=str(payment.player_id), amount=payment.amount)


def _get_event(event_id) -> Event:
    try:
        return Event.objects.get(id=event_id)
    except (Event.DoesNotExist, DjangoValidationError, ValueError):
        raise NotFoundError('Event not found')


def _get_player(player_id) -> Player:
    try:
        return Player.objects.get(id=player_id)
    except (Player.DoesNotExist, DjangoValidationError, ValueError):
        raise NotFoundError('Player not found')


def calculate_event_balance(*, event_id: UUID) -> dict:
    """
    Calculate every participant's balance within one event.

    Args:
        event_id: UUID of the event

    Returns:
        dict with ``event_id``, ``event_name``, ``total_costs``,
        ``total_payments`` and ``user_balances`` (player id →
        ``{paid, owes, net}``), all amounts rounded to cents.

    Raises:
        NotFoundError: If the event doesn't exist
    """
    event = _get_event(event_id)
    cost_items = list(CostItem.objects.filter(event=event))
    payments = list(Payment.objects.filter(related_event=event))

    ledger = accumulate_balances(
        (_expense_record(item) for item in cost_items),
        (_payment_record(payment) for payment in payments),
        participant_ids=event.participant_ids(),
    )

    return {
        'event_id': event.id,
        'event_name': event.name,
        'total_costs': quantize(sum((item.amount for item in cost_items), ZERO)),
        'total_payments': quantize(sum((p.amount for p in payments), ZERO)),
        'user_balances': {
            pid: round_balance(values['paid'], values['owes'])
            for pid, values in ledger.items()
        },
    }


def calculate_global_balance(*, player_id: UUID) -> dict:
    """
    Calculate a player's balance across every event they take part in.

    Includes cost items of the player's events (and any cost item they paid
    for), plus all of their payments whether or not the payment is linked to
    an event.

    Raises:
        NotFoundError: If the player doesn't exist
    """
    player = _get_player(player_id)
    pid = str(player.id)

    events = Event.objects.filter(participants=player)
    cost_items = CostItem.objects.filter(
        Q(event__in=events) | Q(paid_by=player)
    ).distinct()
    payments = list(Payment.objects.filter(player=player))

    paid = ZERO
    owes = ZERO
    involved_items = 0
    for item in cost_items:
        owed = expense_owed_amounts(item.amount, item.split).get(pid)
        is_payer = item.paid_by_id == player.id
        if is_payer:
            paid += item.amount
        if owed is not None:
            owes += owed
        if is_payer or owed is not None:
            involved_items += 1

    paid += sum((payment.amount for payment in payments), ZERO)

    balance = round_balance(paid, owes)
    return {
        'user_id': player.id,
        'user_name': player.name,
        'paid': balance['paid'],
        'owes': balance['owes'],
        'net': balance['net'],
        'status': balance_status(balance['net']),
        'event_count': events.count(),
        'cost_item_count': involved_items,
        'payment_count': len(payments),
    }


def calculate_all_balances() -> list:
    """Global balance of every player, highest net first."""
    balances = [
        calculate_global_balance(player_id=player.id)
        for player in Player.objects.all()
    ]
    return sorted(balances, key=lambda balance: balance['net'], reverse=True)


def calculate_event_statistics(*, event_id: UUID) -> dict:
    """
    Summary numbers for an event.

    Raises:
        NotFoundError: If the event doesn't exist
    """
    balance = calculate_event_balance(event_id=event_id)
    cost_item_count = CostItem.objects.filter(event_id=balance['event_id']).count()
    payment_count = Payment.objects.filter(related_event_id=balance['event_id']).count()

    nets = [entry['net'] for entry in balance['user_balances'].values()]
    participant_count = len(nets)
    owing = sum(1 for net in nets if balance_status(net) == BalanceStatus.OWES)
    owed = sum(1 for net in nets if balance_status(net) == BalanceStatus.OWED)

    total_costs = balance['total_costs']
    return {
        'event_id': balance['event_id'],
        'total_cost_items': cost_item_count,
        'total_payments': payment_count,
        'total_amount': total_costs,
        'total_payments_amount': balance['total_payments'],
        'average_cost_per_item': (
            quantize(total_costs / cost_item_count) if cost_item_count else quantize(ZERO)
        ),
        'average_owed_per_user': (
            quantize(total_costs / participant_count) if participant_count else quantize(ZERO)
        ),
        'participant_stats': {
            'total': participant_count,
            'owing': owing,
            'owed': owed,
            'settled': participant_count - owing - owed,
        },
    }
