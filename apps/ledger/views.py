"""
Engine endpoints that are not tied to a single model.

    GET  /api/ledger/settlements/       - suggested transfers
    POST /api/ledger/splits/equal/      - equal split over posted ids
    POST /api/ledger/splits/sanitize/   - sanitize posted expense splits
"""

from rest_framework.decorators import api_view
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    SettlementPlanSerializer,
    EqualSplitRequestSerializer,
    SplitPayloadSerializer,
    SanitizeRequestSerializer,
)
from apps.ledger.services import (
    calculate_settlements,
    compute_equal_percentage_split,
    compute_equal_shares,
    sanitize_expense_data,
)
from apps.ledger.services.exceptions import LedgerValidationError
from apps.ledger.splits import SHARES_MODE, PercentageSplit, SharesSplit, split_to_payload


@extend_schema(responses={200: SettlementPlanSerializer})
@api_view(['GET'])
def settlements(request):
    """Suggested transfers that would settle every player's balance."""
    plan = calculate_settlements()
    return Response(SettlementPlanSerializer(plan).data)


@extend_schema(request=EqualSplitRequestSerializer, responses={200: SplitPayloadSerializer})
@api_view(['POST'])
def equal_split(request):
    """Equal split over the posted participant ids, in the given order."""
    serializer = EqualSplitRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    participant_ids = serializer.validated_data['participant_ids']

    if serializer.validated_data['mode'] == SHARES_MODE:
        split = SharesSplit(compute_equal_shares(participant_ids))
    else:
        split = PercentageSplit(compute_equal_percentage_split(participant_ids))
    return Response(SplitPayloadSerializer(split_to_payload(split)).data)


@extend_schema(request=SanitizeRequestSerializer)
@api_view(['POST'])
def sanitize_splits(request):
    """
    Drop non-participants from posted expense splits.

    Every expense mapping is returned with ``split_percentage`` and/or
    ``split_shares`` sanitized and all other keys untouched. An empty map
    means no valid split remains for that expense.
    """
    serializer = SanitizeRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    participant_ids = serializer.validated_data['participant_ids']

    try:
        expenses = [
            sanitize_expense_data(expense, participant_ids)
            for expense in serializer.validated_data['expenses']
        ]
    except (AttributeError, ArithmeticError, TypeError, ValueError):
        raise LedgerValidationError(
            'Splits must map participant ids to numbers', field='expenses'
        )
    return Response({'expenses': expenses})
