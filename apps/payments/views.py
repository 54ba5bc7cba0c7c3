import uuid

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Payment
from .serializers import (
    PaymentSerializer,
    PaymentCreateSerializer,
    PaymentUpdateSerializer,
    SettlementCreateSerializer,
)

from apps.payments.services import (
    create_payment,
    list_payments,
    update_payment,
    delete_payment,
    record_settlement,
)
from apps.ledger.services.exceptions import LedgerValidationError


class PaymentPagination(PageNumberPagination):
    """Custom pagination for payments."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


def _uuid_param(request, name):
    value = request.query_params.get(name)
    if not value:
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        raise LedgerValidationError(f'Invalid {name} ID', field=name)


class PaymentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Payment operations.

    list: Get payments (?player=, ?event=)
    create: Record a payment
    retrieve: Get a specific payment
    update: Update a payment
    partial_update: Partially update a payment
    destroy: Delete a payment
    """

    queryset = Payment.objects.select_related('player', 'related_event')
    serializer_class = PaymentSerializer
    pagination_class = PaymentPagination

    def get_queryset(self):
        return list_payments(
            player_id=_uuid_param(self.request, 'player'),
            event_id=_uuid_param(self.request, 'event'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'create':
            return PaymentCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return PaymentUpdateSerializer
        elif self.action == 'settle':
            return SettlementCreateSerializer
        return PaymentSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('player', str, description='Only payments of this player'),
            OpenApiParameter('event', str, description='Only payments linked to this event'),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=PaymentCreateSerializer, responses={201: PaymentSerializer})
    def create(self, request, *args, **kwargs):
        """Record a payment."""
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        payment = create_payment(
            player_id=data['player'],
            amount=data['amount'],
            date=data.get('date'),
            related_event_id=data.get('related_event'),
            description=data.get('description', ''),
        )
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PaymentUpdateSerializer, responses={200: PaymentSerializer})
    def update(self, request, *args, **kwargs):
        """Update a payment; PATCH only touches the fields it sends."""
        partial = kwargs.pop('partial', False)
        serializer = PaymentUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        fields = {
            'amount': data.get('amount'),
            'date': data.get('date'),
            'description': data.get('description'),
        }
        if 'related_event' in request.data:
            fields['related_event_id'] = data.get('related_event')

        payment = update_payment(payment_id=self.kwargs['pk'], **fields)
        return Response(PaymentSerializer(payment).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a payment."""
        delete_payment(payment_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=SettlementCreateSerializer, responses={201: PaymentSerializer})
    @action(detail=False, methods=['post'])
    def settle(self, request):
        """Record a settlement from one player to another."""
        serializer = SettlementCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        payment = record_settlement(
            from_player_id=data['from_player'],
            to_player_id=data['to_player'],
            amount=data['amount'],
            description=data.get('description', ''),
        )
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)
