# ==========================================
# apps/events/admin.py
# ==========================================

from django.contrib import admin
from .models import Event, EventParticipant


class EventParticipantInline(admin.TabularInline):
    """Inline admin for participants within an event."""
    model = EventParticipant
    extra = 0
    fields = ['player', 'position', 'joined_at']
    readonly_fields = ['joined_at']
    ordering = ['position']


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    """
    Admin interface for events.

    Participant changes made here do not repair expense splits; use the API
    for that.
    """

    list_display = ['name', 'date', 'participant_count', 'cost_item_count']
    search_fields = ['name', 'description']
    date_hierarchy = 'date'
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [EventParticipantInline]

    def participant_count(self, obj):
        return obj.memberships.count()
    participant_count.short_description = 'Participants'

    def cost_item_count(self, obj):
        return obj.cost_items.count()
    cost_item_count.short_description = 'Expenses'
