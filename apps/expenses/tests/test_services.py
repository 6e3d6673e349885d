import pytest
from datetime import date
from decimal import Decimal

from apps.expenses.exceptions import ExpenseNotFoundError, ProgramNotFoundError, InvalidExpenseError
from apps.expenses.models import Expense
from apps.expenses.services import ExpenseService


@pytest.mark.django_db
class TestExpenseService:

    def test_create(self, program, sk_official):
        expense = ExpenseService.create_expense(
            program_id=program.id,
            description='Trophies',
            amount=Decimal('2500.00'),
            date=date(2026, 5, 1),
            category='Equipment',
            notes='',
            recorded_by=sk_official,
        )

        assert expense.program == program
        assert expense.notes is None
        assert expense.recorded_by == sk_official

    def test_create_unknown_program(self, db):
        with pytest.raises(ProgramNotFoundError):
            ExpenseService.create_expense(
                program_id=9999,
                description='x',
                amount=Decimal('1.00'),
                date=date(2026, 5, 1),
                category='Other',
            )

    @pytest.mark.parametrize('amount', [Decimal('0.00'), Decimal('-10.00')])
    def test_create_non_positive_amount(self, program, amount):
        with pytest.raises(InvalidExpenseError):
            ExpenseService.create_expense(
                program_id=program.id,
                description='x',
                amount=amount,
                date=date(2026, 5, 1),
                category='Other',
            )
        assert Expense.objects.count() == 0

    def test_create_unknown_category(self, program):
        with pytest.raises(InvalidExpenseError, match='Invalid category'):
            ExpenseService.create_expense(
                program_id=program.id,
                description='x',
                amount=Decimal('5.00'),
                date=date(2026, 5, 1),
                category='Bribes',
            )

    def test_update_moves_program(self, expenses, other_program):
        expense = ExpenseService.update_expense(
            expense_id=expenses[0].id,
            program_id=other_program.id,
            amount=Decimal('2999.99'),
        )

        assert expense.program_id == other_program.id
        expense.refresh_from_db()
        assert expense.amount == Decimal('2999.99')

    def test_update_missing(self, db):
        with pytest.raises(ExpenseNotFoundError):
            ExpenseService.update_expense(expense_id=9999, description='x')

    def test_delete(self, expenses):
        ExpenseService.delete_expense(expense_id=expenses[0].id)
        assert Expense.objects.count() == 2

        with pytest.raises(ExpenseNotFoundError):
            ExpenseService.delete_expense(expense_id=expenses[0].id)

    def test_filters(self, expenses, program):
        assert ExpenseService.filter_expenses(program=program.id).count() == 2
        assert ExpenseService.filter_expenses(category='Food').count() == 1
        assert ExpenseService.filter_expenses(date_from=date(2026, 4, 1)).count() == 2
        assert ExpenseService.filter_expenses(date_to=date(2026, 3, 31)).count() == 1
        assert ExpenseService.filter_expenses(year=2026, month=4).count() == 2
        assert ExpenseService.filter_expenses(year=2025).count() == 0
