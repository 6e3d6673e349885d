"""
Expense Services Module
=======================

Business logic for recording what each program spends.

Classes:
    ExpenseService: Create, update, delete and filter expenses.

Example:
    Recording an expense::

        from apps.expenses.services import ExpenseService

        expense = ExpenseService.create_expense(
            program_id=program.id,
            description='Basketballs',
            amount=Decimal('1500.00'),
            date=date.today(),
            category='Equipment',
            recorded_by=request.user,
        )
"""

from decimal import Decimal

from django.db import transaction

from apps.programs.models import Program
from config.logging_setup import get_logger
from .exceptions import ExpenseNotFoundError, ProgramNotFoundError, InvalidExpenseError
from .models import Expense, ExpenseCategory

logger = get_logger(__name__)


class ExpenseService:
    """
    Service for program expenses.

    Amounts are Decimals with two places and must be positive. Every
    expense belongs to exactly one program.
    """

    UPDATABLE_FIELDS = ('program_id', 'description', 'amount', 'date', 'category', 'notes')

    @staticmethod
    def _check_program(program_id):
        if not Program.objects.filter(id=program_id).exists():
            raise ProgramNotFoundError(f'Program with ID {program_id} not found.')

    @staticmethod
    def _check_values(amount=None, category=None):
        if amount is not None and Decimal(amount) <= 0:
            raise InvalidExpenseError('Amount must be greater than zero.')
        if category is not None and category not in ExpenseCategory.values:
            raise InvalidExpenseError(
                f"Invalid category: {category}. "
                f"Must be one of: {', '.join(ExpenseCategory.values)}"
            )

    @staticmethod
    @transaction.atomic
    def create_expense(*, program_id, description, amount, date, category, notes=None, recorded_by=None):
        """
        Record an expense against a program.

        Raises:
            ProgramNotFoundError: If program doesn't exist
            InvalidExpenseError: If amount is not positive or category unknown
        """
        ExpenseService._check_values(amount=amount, category=category)
        ExpenseService._check_program(program_id)

        expense = Expense.objects.create(
            program_id=program_id,
            description=description,
            amount=amount,
            date=date,
            category=category,
            notes=notes or None,
            recorded_by=recorded_by,
        )

        logger.info(
            "expense_created",
            expense_id=expense.id,
            program_id=program_id,
            amount=str(expense.amount),
            category=category,
        )
        return expense

    @staticmethod
    @transaction.atomic
    def update_expense(*, expense_id, **fields):
        """
        Update an expense.

        Raises:
            ExpenseNotFoundError: If expense doesn't exist
            ProgramNotFoundError: If moved to a program that doesn't exist
            InvalidExpenseError: If amount is not positive or category unknown
        """
        try:
            expense = Expense.objects.select_for_update().get(id=expense_id)
        except Expense.DoesNotExist:
            raise ExpenseNotFoundError()

        changes = {k: v for k, v in fields.items() if k in ExpenseService.UPDATABLE_FIELDS}
        ExpenseService._check_values(
            amount=changes.get('amount'),
            category=changes.get('category'),
        )
        if 'program_id' in changes:
            ExpenseService._check_program(changes['program_id'])

        for field, value in changes.items():
            setattr(expense, field, value)

        if changes:
            expense.save()
            logger.info("expense_updated", expense_id=expense.id, fields=sorted(changes))

        return expense

    @staticmethod
    @transaction.atomic
    def delete_expense(*, expense_id):
        """
        Raises:
            ExpenseNotFoundError: If expense doesn't exist
        """
        deleted, _ = Expense.objects.filter(id=expense_id).delete()
        if not deleted:
            raise ExpenseNotFoundError()
        logger.info("expense_deleted", expense_id=expense_id)

    @staticmethod
    def filter_expenses(queryset=None, *, program=None, category=None,
                        date_from=None, date_to=None, year=None, month=None):
        """
        Narrow an expense queryset by the list filters.

        ``month`` only applies together with ``year``.
        """
        if queryset is None:
            queryset = Expense.objects.select_related('program')

        if program:
            queryset = queryset.filter(program_id=program)
        if category:
            queryset = queryset.filter(category=category)
        if date_from:
            queryset = queryset.filter(date__gte=date_from)
        if date_to:
            queryset = queryset.filter(date__lte=date_to)
        if year:
            queryset = queryset.filter(date__year=year)
            if month:
                queryset = queryset.filter(date__month=month)

        return queryset
