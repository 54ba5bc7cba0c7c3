# ==========================================
# apps/players/admin.py
# ==========================================

from django.contrib import admin
from .models import Player


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    """Admin interface for players."""

    list_display = ['name', 'email', 'phone', 'event_count', 'created_at']
    search_fields = ['name', 'email']
    readonly_fields = ['id', 'created_at', 'updated_at']

    def event_count(self, obj):
        return obj.events.count()
    event_count.short_description = 'Events'
