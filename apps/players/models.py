# ==========================================
# apps/players/models.py
# ==========================================

from django.core.validators import MinLengthValidator
from django.db import models
from django.db.models.functions import Lower
import uuid


class Player(models.Model):
    """A person who takes part in events and shares their costs."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, validators=[MinLengthValidator(2)])
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'players'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(Lower('name'), name='players_unique_name_ci'),
        ]

    def __str__(self):
        return self.name
