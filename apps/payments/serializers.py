from rest_framework import serializers
from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    """Main serializer for payments."""

    player_name = serializers.CharField(source='player.name', read_only=True)
    related_event_name = serializers.CharField(
        source='related_event.name', read_only=True, default=None
    )

    class Meta:
        model = Payment
        fields = [
            'id',
            'player',
            'player_name',
            'amount',
            'date',
            'related_event',
            'related_event_name',
            'description',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    """Input for recording a payment."""

    player = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    date = serializers.DateField(required=False)
    related_event = serializers.UUIDField(required=False, allow_null=True, default=None)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class PaymentUpdateSerializer(serializers.Serializer):
    """Input for updating a payment; the player cannot change."""

    amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    date = serializers.DateField(required=False)
    related_event = serializers.UUIDField(required=False, allow_null=True)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)


class SettlementCreateSerializer(serializers.Serializer):
    """Input for recording a settlement between two players."""

    from_player = serializers.UUIDField()
    to_player = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    description = serializers.CharField(max_length=400, required=False, allow_blank=True, default='')
