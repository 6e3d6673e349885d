"""
Domain exceptions for expenses app.

Raised by the expenses service and rendered by DRF's exception handler.
"""
from rest_framework.exceptions import APIException


class ExpenseNotFoundError(APIException):
    """Expense record not found."""
    status_code = 404
    default_detail = 'Expense not found.'
    default_code = 'expense_not_found'


class ProgramNotFoundError(APIException):
    """Program the expense is charged to does not exist."""
    status_code = 404
    default_detail = 'Program not found.'
    default_code = 'program_not_found'


class InvalidExpenseError(APIException):
    """Expense data violates a business rule."""
    status_code = 400
    default_detail = 'Invalid expense.'
    default_code = 'invalid_expense'
