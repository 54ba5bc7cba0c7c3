# ==========================================
# apps/payments/admin.py
# ==========================================

from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Admin interface for payments."""

    list_display = ['player', 'amount', 'date', 'related_event', 'description']
    list_filter = ['date']
    search_fields = ['player__name', 'description', 'related_event__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    date_hierarchy = 'date'
