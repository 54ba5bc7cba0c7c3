from rest_framework import serializers
from .models import Event
from apps.players.serializers import PlayerMinimalSerializer


class EventSerializer(serializers.ModelSerializer):
    """Main serializer for events."""

    participants = serializers.SerializerMethodField()
    participant_ids = serializers.SerializerMethodField()
    participant_count = serializers.SerializerMethodField()
    cost_item_count = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = [
            'id',
            'name',
            'date',
            'description',
            'participants',
            'participant_ids',
            'participant_count',
            'cost_item_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_participants(self, obj):
        """Participants in participant order."""
        return PlayerMinimalSerializer(obj.ordered_participants(), many=True).data

    def get_participant_ids(self, obj):
        return obj.participant_ids()

    def get_participant_count(self, obj):
        return obj.memberships.count()

    def get_cost_item_count(self, obj):
        return obj.cost_items.count()


class EventListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    participant_count = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = ['id', 'name', 'date', 'description', 'participant_count', 'created_at']
        read_only_fields = fields

    def get_participant_count(self, obj):
        return obj.memberships.count()


class EventCreateSerializer(serializers.Serializer):
    """Input for creating an event."""

    name = serializers.CharField(max_length=200)
    date = serializers.DateField()
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    participant_ids = serializers.ListField(
        child=serializers.UUIDField(), required=False, default=list
    )


class EventUpdateSerializer(serializers.Serializer):
    """Input for updating an event's own fields."""

    name = serializers.CharField(max_length=200, required=False)
    date = serializers.DateField(required=False)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)


class ParticipantsSerializer(serializers.Serializer):
    """Input for replacing the participant list."""

    participant_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)


class ParticipantActionSerializer(serializers.Serializer):
    """Input for adding or removing one participant."""

    player_id = serializers.UUIDField()


class ParticipantChangeSerializer(serializers.Serializer):
    """Result of a participant change."""

    event = EventSerializer()
    added = serializers.ListField(child=serializers.CharField())
    removed = serializers.ListField(child=serializers.CharField())
    repaired_cost_items = serializers.IntegerField()


class EqualSplitSerializer(serializers.Serializer):
    """Default split for a new expense."""

    split_mode = serializers.CharField()
    split_percentage = serializers.DictField(
        child=serializers.DecimalField(max_digits=5, decimal_places=2), allow_null=True
    )
    split_shares = serializers.DictField(child=serializers.IntegerField(), allow_null=True)
