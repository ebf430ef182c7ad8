"""
Django ORM models for persistence.
Infrastructure layer — technical storage detail.
"""

import uuid
from django.db import models


class BaseModel(models.Model):

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class StoredValue(BaseModel):
    """One entry of the converter's key-value state (reference rate, ledger)."""

    key = models.CharField(max_length=64, unique=True)
    value = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return f"{self.key} = {self.value[:40]}"
