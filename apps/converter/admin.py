"""
Django Admin configuration for the converter app.
"""

from django.contrib import admin

from apps.converter.application.state import ledger_from_json
from apps.converter.domain.number_text import format_fixed
from apps.converter.domain.services import LedgerService
from apps.converter.infrastructure.persistence.models import StoredValue
from core.settings import LEDGER_STORAGE_KEY


@admin.register(StoredValue)
class StoredValueAdmin(admin.ModelAdmin):
    """Admin interface for the persisted converter state."""

    list_display = ('key', 'get_summary', 'updated_at')
    search_fields = ('key',)
    readonly_fields = ('id', 'created_at', 'updated_at')
    ordering = ('key',)

    fieldsets = (
        ('Stored Value', {
            'fields': ('key', 'value')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_summary(self, obj):
        """Show the ledger as count and average rate, other values as is."""
        if obj.key != LEDGER_STORAGE_KEY:
            return obj.value
        ledger = ledger_from_json(obj.value)
        if ledger.is_empty:
            return 'No transactions'
        return f"{len(ledger)} transaction(s), average {format_fixed(LedgerService.average_rate(ledger))} VND/USD"
    get_summary.short_description = 'Value'
