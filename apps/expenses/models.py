# ==========================================
# apps/expenses/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator, MinLengthValidator
from decimal import Decimal
import uuid

from apps.ledger.splits import PERCENTAGE_MODE, SHARES_MODE, split_from_storage


MIN_AMOUNT = Decimal('0.01')
MAX_AMOUNT = Decimal('99999.99')


class SplitMode(models.TextChoices):
    PERCENTAGE = PERCENTAGE_MODE, 'Percentage'
    SHARES = SHARES_MODE, 'Shares'


class CostItem(models.Model):
    """An expense of an event, paid by one player and split among participants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(
        'events.Event',
        on_delete=models.PROTECT,
        related_name='cost_items'
    )
    description = models.CharField(max_length=200, validators=[MinLengthValidator(1)])
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(MIN_AMOUNT), MaxValueValidator(MAX_AMOUNT)]
    )
    paid_by = models.ForeignKey(
        'players.Player',
        on_delete=models.PROTECT,
        related_name='paid_cost_items'
    )
    date = models.DateField()

    # Exactly one split: percentages (strings, 2 decimals) or integer shares
    split_mode = models.CharField(max_length=20, choices=SplitMode.choices, default=SplitMode.PERCENTAGE)
    split_values = models.JSONField(default=dict)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cost_items'
        indexes = [
            models.Index(fields=['event', 'date'], name='cost_items_event_date_idx'),
            models.Index(fields=['paid_by'], name='cost_items_paid_by_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.description} - {self.amount}"

    @property
    def split(self):
        return split_from_storage(self.split_mode, self.split_values)

    @split.setter
    def split(self, value):
        self.split_mode = value.mode
        self.split_values = value.to_storage()


class ExpenseTemplate(models.Model):
    """Reusable quick-add expense (e.g. "Court rental 40.00")."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, validators=[MinLengthValidator(1)])
    default_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(MIN_AMOUNT), MaxValueValidator(MAX_AMOUNT)]
    )
    category = models.CharField(max_length=50, blank=True)
    default_paid_by = models.ForeignKey(
        'players.Player',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='default_templates'
    )
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expense_templates'
        ordering = ['order', 'name']

    def __str__(self):
        return f"{self.name} ({self.default_amount})"
