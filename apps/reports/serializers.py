"""
Serializers for reports app.

Input serializers validate query parameters; response serializers
document and render the report dictionaries.
"""

from rest_framework import serializers

from apps.expenses.models import ExpenseCategory
from apps.programs.serializers import ProgramMinimalSerializer


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class ExpenseReportQuerySerializer(serializers.Serializer):
    """
    Query parameters for the expense report.

    Date ordering is checked by ReportQueries so that the error reaches the
    client as ``{'error': ...}``.
    """

    program = serializers.IntegerField(required=False, min_value=1)
    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)


class MonthlyQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=1900, max_value=2100)
    program = serializers.IntegerField(required=False, min_value=1)


# =============================================================================
# Response Serializers
# =============================================================================

MONEY = dict(max_digits=14, decimal_places=2)


class CategoryTotalSerializer(serializers.Serializer):
    total = serializers.DecimalField(**MONEY)
    count = serializers.IntegerField()


class ProgramTotalSerializer(serializers.Serializer):
    program_id = serializers.IntegerField()
    program_name = serializers.CharField()
    total = serializers.DecimalField(**MONEY)
    count = serializers.IntegerField()


class ExpenseReportSerializer(serializers.Serializer):
    total_expenses = serializers.DecimalField(**MONEY)
    expense_count = serializers.IntegerField()
    average_expense = serializers.DecimalField(**MONEY)
    allocated_budget = serializers.DecimalField(**MONEY)
    remaining_budget = serializers.DecimalField(**MONEY)
    by_category = serializers.DictField(child=CategoryTotalSerializer())
    by_program = ProgramTotalSerializer(many=True)
    filters = serializers.DictField()


class MonthlyPointSerializer(serializers.Serializer):
    month = serializers.CharField()
    total = serializers.DecimalField(**MONEY)
    count = serializers.IntegerField()


class DashboardResponseSerializer(serializers.Serializer):
    programs = serializers.DictField(child=serializers.IntegerField())
    total_participants = serializers.IntegerField()
    total_budget = serializers.DecimalField(**MONEY)
    total_spent = serializers.DecimalField(**MONEY)
    remaining_budget = serializers.DecimalField(**MONEY)
    registrations = serializers.DictField(child=serializers.IntegerField())
    upcoming_programs = ProgramMinimalSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
