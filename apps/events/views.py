from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Event
from .serializers import (
    EventSerializer,
    EventListSerializer,
    EventCreateSerializer,
    EventUpdateSerializer,
    ParticipantsSerializer,
    ParticipantActionSerializer,
    ParticipantChangeSerializer,
    EqualSplitSerializer,
)

from apps.events.services import (
    create_event,
    get_event_by_id,
    update_event,
    delete_event,
    get_equal_split,
    set_participants,
    add_participant,
    remove_participant,
)
from apps.ledger.serializers import EventBalanceSerializer, EventStatisticsSerializer
from apps.ledger.services import calculate_event_balance, calculate_event_statistics
from apps.ledger.splits import PERCENTAGE_MODE


class EventPagination(PageNumberPagination):
    """Custom pagination for events."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class EventViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Event operations.

    list: Get all events, newest first
    create: Create an event (optionally with participants)
    retrieve: Get an event with its ordered participants
    update: Update name, date or description
    partial_update: Partially update those fields
    destroy: Delete an event without expenses or payments
    """

    queryset = Event.objects.prefetch_related('memberships')
    serializer_class = EventSerializer
    pagination_class = EventPagination

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return EventListSerializer
        elif self.action == 'create':
            return EventCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return EventUpdateSerializer
        elif self.action == 'participants':
            return ParticipantsSerializer
        elif self.action in ['add_participant', 'remove_participant']:
            return ParticipantActionSerializer
        return EventSerializer

    def retrieve(self, request, *args, **kwargs):
        event = get_event_by_id(event_id=self.kwargs['pk'])
        return Response(EventSerializer(event).data)

    @extend_schema(request=EventCreateSerializer, responses={201: EventSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new event."""
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        event = create_event(
            name=data['name'],
            date=data['date'],
            description=data.get('description', ''),
            participant_ids=data.get('participant_ids'),
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=EventUpdateSerializer, responses={200: EventSerializer})
    def update(self, request, *args, **kwargs):
        """Update an event; participants are changed via /participants/."""
        partial = kwargs.pop('partial', False)
        serializer = EventUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        event = update_event(
            event_id=self.kwargs['pk'],
            name=data.get('name'),
            date=data.get('date'),
            description=data.get('description'),
        )
        return Response(EventSerializer(event).data)

    def destroy(self, request, *args, **kwargs):
        """Delete an event."""
        delete_event(event_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ParticipantsSerializer, responses={200: ParticipantChangeSerializer})
    @action(detail=True, methods=['put'])
    def participants(self, request, pk=None):
        """Replace the participant list, repairing existing expense splits."""
        serializer = ParticipantsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        change = set_participants(
            event_id=pk,
            participant_ids=serializer.validated_data['participant_ids'],
        )
        return Response(ParticipantChangeSerializer(change._asdict()).data)

    @extend_schema(request=ParticipantActionSerializer, responses={200: ParticipantChangeSerializer})
    @action(detail=True, methods=['post'])
    def add_participant(self, request, pk=None):
        """Append one player to the participant list."""
        serializer = ParticipantActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        change = add_participant(event_id=pk, player_id=serializer.validated_data['player_id'])
        return Response(ParticipantChangeSerializer(change._asdict()).data)

    @extend_schema(request=ParticipantActionSerializer, responses={200: ParticipantChangeSerializer})
    @action(detail=True, methods=['post'])
    def remove_participant(self, request, pk=None):
        """Remove one player, repairing the splits they appear in."""
        serializer = ParticipantActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        change = remove_participant(event_id=pk, player_id=serializer.validated_data['player_id'])
        return Response(ParticipantChangeSerializer(change._asdict()).data)

    @extend_schema(responses={200: EventBalanceSerializer})
    @action(detail=True, methods=['get'])
    def balance(self, request, pk=None):
        """Every participant's balance within this event."""
        balance = calculate_event_balance(event_id=pk)
        return Response(EventBalanceSerializer(balance).data)

    @extend_schema(responses={200: EventStatisticsSerializer})
    @action(detail=True, methods=['get'])
    def statistics(self, request, pk=None):
        """Summary numbers for this event."""
        stats = calculate_event_statistics(event_id=pk)
        return Response(EventStatisticsSerializer(stats).data)

    @extend_schema(
        parameters=[
            OpenApiParameter('mode', str, enum=['percentage', 'shares'], description='Split mode'),
            OpenApiParameter('exclude', str, description='Comma-separated player IDs to leave out'),
        ],
        responses={200: EqualSplitSerializer},
    )
    @action(detail=True, methods=['get'])
    def equal_split(self, request, pk=None):
        """Equal split over the participants, for a new expense."""
        exclude = [
            pid.strip()
            for pid in request.query_params.get('exclude', '').split(',')
            if pid.strip()
        ]
        split = get_equal_split(
            event_id=pk,
            mode=request.query_params.get('mode', PERCENTAGE_MODE),
            exclude=exclude,
        )
        return Response(EqualSplitSerializer(split).data)
