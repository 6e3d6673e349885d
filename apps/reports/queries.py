"""
Reports Module
==============

Read-only aggregate queries behind the officials' expense report and
dashboard.

Classes:
    ReportQueries: Static methods for report and dashboard figures.

Example:
    Expense report for one program::

        from apps.reports.queries import ReportQueries

        report = ReportQueries.expense_report(program_id=program.id)
        print(f"Spent {report['total_expenses']} of {report['allocated_budget']}")
        for category, row in report['by_category'].items():
            print(f"  {category}: {row['total']} ({row['count']} expenses)")

Note:
    Nothing here writes. Money is returned as Decimal; the serializers
    render it.
"""

from datetime import date
from decimal import Decimal

from django.db.models import Sum, Count, DecimalField
from django.db.models.functions import Coalesce, TruncMonth

from apps.expenses.models import Expense
from apps.participants.models import Participant
from apps.programs.models import Program, ProgramStatus
from apps.registrations.models import Registration, RegistrationStatus
from .exceptions import InvalidDateRangeError, ProgramNotFoundError

ZERO = Decimal('0.00')


def _money_sum(field):
    return Coalesce(Sum(field), ZERO, output_field=DecimalField(max_digits=14, decimal_places=2))


class ReportQueries:
    """
    Aggregate queries for reports.

    Methods:
        expense_report: Totals and breakdowns of expenses against budget.
        monthly_expenses: Spending per month for charts.
        dashboard: Headline figures for the officials' dashboard.
    """

    @staticmethod
    def _check_range(start_date, end_date):
        if start_date and end_date and start_date > end_date:
            raise InvalidDateRangeError("Start date must be before end date")

    @staticmethod
    def expense_report(program_id=None, category=None, start_date=None, end_date=None):
        """
        Summarize expenses, optionally narrowed to one program, category or period.

        Args:
            program_id (int, optional): Limit to one program. The allocated
                budget is that program's budget; otherwise the sum over all
                programs.
            category (str, optional): Limit to one expense category.
            start_date (date, optional): First day included.
            end_date (date, optional): Last day included.

        Returns:
            dict: A dictionary containing:
                - total_expenses (Decimal): Sum of matching expenses.
                - expense_count (int): Number of matching expenses.
                - average_expense (Decimal): Mean amount, 0 when none.
                - allocated_budget (Decimal): Budget the spending is drawn against.
                - remaining_budget (Decimal): allocated_budget - total_expenses
                  (negative when overspent).
                - by_category (dict): category -> {'total', 'count'}.
                - by_program (list[dict]): program_id, program_name, total,
                  count, highest total first.
                - filters (dict): The arguments, echoed.

        Raises:
            InvalidDateRangeError: If start_date is after end_date.
            ProgramNotFoundError: If program_id doesn't exist.
        """
        ReportQueries._check_range(start_date, end_date)

        expenses = Expense.objects.all()
        programs = Program.objects.all()

        if program_id:
            if not programs.filter(id=program_id).exists():
                raise ProgramNotFoundError(f"Program with ID {program_id} not found")
            expenses = expenses.filter(program_id=program_id)
            programs = programs.filter(id=program_id)
        if category:
            expenses = expenses.filter(category=category)
        if start_date:
            expenses = expenses.filter(date__gte=start_date)
        if end_date:
            expenses = expenses.filter(date__lte=end_date)

        totals = expenses.aggregate(total=_money_sum('amount'), count=Count('id'))
        total = totals['total']
        count = totals['count']
        budget = programs.aggregate(total=_money_sum('budget'))['total']

        by_category = {
            row['category']: {'total': row['total'], 'count': row['count']}
            for row in expenses.values('category')
            .annotate(total=_money_sum('amount'), count=Count('id'))
            .order_by('-total')
        }

        by_program = [
            {
                'program_id': row['program_id'],
                'program_name': row['program__name'],
                'total': row['total'],
                'count': row['count'],
            }
            for row in expenses.values('program_id', 'program__name')
            .annotate(total=_money_sum('amount'), count=Count('id'))
            .order_by('-total')
        ]

        return {
            'total_expenses': total,
            'expense_count': count,
            'average_expense': round(total / count, 2) if count else ZERO,
            'allocated_budget': budget,
            'remaining_budget': budget - total,
            'by_category': by_category,
            'by_program': by_program,
            'filters': {
                'program_id': program_id,
                'category': category,
                'start_date': start_date,
                'end_date': end_date,
            },
        }

    @staticmethod
    def monthly_expenses(year, program_id=None):
        """
        Spending per calendar month of a year.

        Args:
            year (int): Calendar year.
            program_id (int, optional): Limit to one program.

        Returns:
            list[dict]: Twelve entries ``{'month': 'YYYY-MM', 'total', 'count'}``,
            months without expenses included with zeros.
        """
        expenses = Expense.objects.filter(date__year=year)
        if program_id:
            expenses = expenses.filter(program_id=program_id)

        rows = {
            row['month'].strftime('%Y-%m'): row
            for row in expenses.annotate(month=TruncMonth('date'))
            .values('month')
            .annotate(total=_money_sum('amount'), count=Count('id'))
        }

        series = []
        for month in range(1, 13):
            key = date(year, month, 1).strftime('%Y-%m')
            row = rows.get(key)
            series.append({
                'month': key,
                'total': row['total'] if row else ZERO,
                'count': row['count'] if row else 0,
            })
        return series

    @staticmethod
    def dashboard(today=None, upcoming_limit=5):
        """
        Headline figures for officials.

        Args:
            today (date, optional): Reference day for upcoming programs.
            upcoming_limit (int): How many upcoming programs to include.

        Returns:
            dict: A dictionary containing:
                - programs (dict): Count per program status plus 'total'.
                - total_participants (int)
                - total_budget (Decimal): Sum of all program budgets.
                - total_spent (Decimal): Sum of all expenses.
                - remaining_budget (Decimal)
                - registrations (dict): Count per registration status plus 'total'.
                - upcoming_programs (list[Program]): Next programs on or after today.
        """
        today = today or date.today()

        program_counts = {value: 0 for value in ProgramStatus.values}
        for row in Program.objects.values('status').annotate(count=Count('id')):
            program_counts[row['status']] = row['count']
        program_counts['total'] = sum(program_counts.values())

        registration_counts = {value: 0 for value in RegistrationStatus.values}
        for row in Registration.objects.values('status').annotate(count=Count('id')):
            registration_counts[row['status']] = row['count']
        registration_counts['total'] = sum(registration_counts.values())

        total_budget = Program.objects.aggregate(total=_money_sum('budget'))['total']
        total_spent = Expense.objects.aggregate(total=_money_sum('amount'))['total']

        upcoming = list(
            Program.objects
            .filter(date__gte=today)
            .exclude(status=ProgramStatus.COMPLETED)
            .order_by('date', 'time')[:upcoming_limit]
        )

        return {
            'programs': program_counts,
            'total_participants': Participant.objects.count(),
            'total_budget': total_budget,
            'total_spent': total_spent,
            'remaining_budget': total_budget - total_spent,
            'registrations': registration_counts,
            'upcoming_programs': upcoming,
        }
