# ==========================================
# apps/expenses/admin.py
# ==========================================

from django.contrib import admin
from .models import CostItem, ExpenseTemplate


@admin.register(CostItem)
class CostItemAdmin(admin.ModelAdmin):
    """Admin interface for cost items."""

    list_display = ['description', 'event', 'amount', 'paid_by', 'date', 'split_mode']
    list_filter = ['split_mode', 'date']
    search_fields = ['description', 'event__name', 'paid_by__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    date_hierarchy = 'date'


@admin.register(ExpenseTemplate)
class ExpenseTemplateAdmin(admin.ModelAdmin):
    """Admin interface for expense templates."""

    list_display = ['name', 'default_amount', 'category', 'default_paid_by', 'order']
    list_editable = ['order']
    search_fields = ['name', 'category']
    readonly_fields = ['id', 'created_at', 'updated_at']
