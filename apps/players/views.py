from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Player
from .serializers import PlayerSerializer, PlayerCreateSerializer

from apps.players.services import (
    create_player,
    update_player,
    delete_player,
    search_players,
)
from apps.ledger.serializers import GlobalBalanceSerializer
from apps.ledger.services import (
    calculate_global_balance,
    calculate_all_balances,
)


class PlayerPagination(PageNumberPagination):
    """Custom pagination for players."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class PlayerViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Player CRUD operations.

    list: Get all players (optionally filtered with ?search=)
    create: Create a new player
    retrieve: Get a specific player
    update: Update a player
    partial_update: Partially update a player
    destroy: Delete a player who is not referenced anywhere
    """

    queryset = Player.objects.all()
    serializer_class = PlayerSerializer
    pagination_class = PlayerPagination

    def get_queryset(self):
        return search_players(query=self.request.query_params.get('search', ''))

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action in ['create', 'update', 'partial_update']:
            return PlayerCreateSerializer
        return PlayerSerializer

    @extend_schema(
        parameters=[OpenApiParameter('search', str, description='Filter by name or email')],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=PlayerCreateSerializer, responses={201: PlayerSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new player."""
        serializer = PlayerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        player = create_player(**serializer.validated_data)

        output_serializer = PlayerSerializer(player)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PlayerCreateSerializer, responses={200: PlayerSerializer})
    def update(self, request, *args, **kwargs):
        """Update a player; PATCH only touches the fields it sends."""
        partial = kwargs.pop('partial', False)
        serializer = PlayerCreateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        fields = {
            key: serializer.validated_data[key]
            for key in ('name', 'email', 'phone')
            if key in request.data
        }
        player = update_player(player_id=self.kwargs['pk'], **fields)

        return Response(PlayerSerializer(player).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a player."""
        delete_player(player_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: GlobalBalanceSerializer})
    @action(detail=True, methods=['get'])
    def balance(self, request, pk=None):
        """Player's balance across every event."""
        balance = calculate_global_balance(player_id=pk)
        return Response(GlobalBalanceSerializer(balance).data)

    @extend_schema(responses={200: GlobalBalanceSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def balances(self, request):
        """Global balance of every player, highest net first."""
        balances = calculate_all_balances()
        return Response(GlobalBalanceSerializer(balances, many=True).data)
