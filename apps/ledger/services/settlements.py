"""
Settlement suggestions.

Turns global balances into a short list of transfers that would settle
everyone: debtors (net below -0.01) pay creditors (net above 0.01), largest
amounts first, until one side runs out.
"""

from decimal import Decimal
from typing import Iterable

from .balances import calculate_all_balances
from apps.ledger.splits import CENT, quantize


def suggest_settlements(balances: Iterable[dict]) -> dict:
    """
    Greedy debtor/creditor matching.

    Args:
        balances: dicts with ``user_id``, ``user_name`` and ``net`` as
            produced by ``calculate_global_balance``.

    Returns:
        dict with ``settlements`` (list of ``{from_id, from_name, to_id,
        to_name, amount, description}``) and ``summary``
        (``total_settlements``, ``total_debt``, ``total_credit``,
        ``balanced``).
    """
    balances = list(balances)
    debtors = sorted(
        ([b['user_id'], b['user_name'], -Decimal(b['net'])] for b in balances if b['net'] < -CENT),
        key=lambda d: d[2],
        reverse=True,
    )
    creditors = sorted(
        ([b['user_id'], b['user_name'], Decimal(b['net'])] for b in balances if b['net'] > CENT),
        key=lambda c: c[2],
        reverse=True,
    )

    total_debt = quantize(sum((d[2] for d in debtors), Decimal('0')))
    total_credit = quantize(sum((c[2] for c in creditors), Decimal('0')))

    settlements = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        amount = min(debtor[2], creditor[2])

        settlements.append({
            'from_id': debtor[0],
            'from_name': debtor[1],
            'to_id': creditor[0],
            'to_name': creditor[1],
            'amount': quantize(amount),
            'description': f'{debtor[1]} pays {creditor[1]}',
        })

        debtor[2] -= amount
        creditor[2] -= amount
        if debtor[2] < CENT:
            i += 1
        if creditor[2] < CENT:
            j += 1

    return {
        'settlements': settlements,
        'summary': {
            'total_settlements': len(settlements),
            'total_debt': total_debt,
            'total_credit': total_credit,
            'balanced': abs(total_debt - total_credit) < CENT,
        },
    }


def calculate_settlements() -> dict:
    """Settlement suggestions over every player's global balance."""
    return suggest_settlements(calculate_all_balances())
