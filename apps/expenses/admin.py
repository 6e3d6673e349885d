from django.contrib import admin

from apps.expenses.models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Admin interface for Expenses."""

    list_display = ['description', 'program', 'category', 'amount', 'date', 'recorded_by']
    list_filter = ['category', 'date']
    search_fields = ['description', 'notes', 'program__name']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'date'
    ordering = ['-date']
    autocomplete_fields = ['program']
