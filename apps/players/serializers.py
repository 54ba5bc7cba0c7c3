from rest_framework import serializers
from .models import Player


class PlayerSerializer(serializers.ModelSerializer):
    """Main serializer for players."""

    event_count = serializers.SerializerMethodField()

    class Meta:
        model = Player
        fields = [
            'id',
            'name',
            'email',
            'phone',
            'event_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'event_count', 'created_at', 'updated_at']

    def get_event_count(self, obj):
        return obj.events.count()


class PlayerCreateSerializer(serializers.Serializer):
    """Input for creating or updating a player."""

    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')


class PlayerMinimalSerializer(serializers.ModelSerializer):
    """Minimal player info for nested serialization."""

    class Meta:
        model = Player
        fields = ['id', 'name']
        read_only_fields = fields
