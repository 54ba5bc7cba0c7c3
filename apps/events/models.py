# ==========================================
# apps/events/models.py
# ==========================================

from django.core.validators import MinLengthValidator
from django.db import models
import uuid


class Event(models.Model):
    """A session (e.g. one evening of badminton) whose costs are shared."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, unique=True, validators=[MinLengthValidator(3)])
    date = models.DateField()
    description = models.CharField(max_length=500, blank=True)
    participants = models.ManyToManyField(
        'players.Player',
        through='EventParticipant',
        related_name='events',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'events'
        indexes = [
            models.Index(fields=['date'], name='events_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.name} ({self.date})"

    def participant_ids(self):
        """Participant ids as strings, in participant order."""
        return [
            str(player_id)
            for player_id in self.memberships.order_by('position').values_list('player_id', flat=True)
        ]

    def ordered_participants(self):
        return [m.player for m in self.memberships.select_related('player').order_by('position')]

    def has_participant(self, player_id):
        return self.memberships.filter(player_id=player_id).exists()


class EventParticipant(models.Model):
    """Player membership in an event, with its position in the participant list."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='memberships')
    player = models.ForeignKey('players.Player', on_delete=models.PROTECT, related_name='event_memberships')
    position = models.PositiveIntegerField(default=0)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'event_participants'
        unique_together = [['event', 'player']]
        ordering = ['position']

    def __str__(self):
        return f"{self.player.name} in {self.event.name}"
