"""
Program management service.

Handles program CRUD operations with proper transaction safety.
"""

import calendar
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.programs.models import Program, ProgramStatus
from config.logging_setup import get_logger

from .exceptions import ProgramNotFoundError, ValidationError

logger = get_logger(__name__)

UPDATABLE_FIELDS = ('name', 'description', 'date', 'time', 'location', 'budget', 'status')


def _validate_budget(budget) -> None:
    if budget is not None and Decimal(budget) < 0:
        raise ValidationError("Budget cannot be negative")


def _validate_status(status) -> None:
    if status is not None and status not in ProgramStatus.values:
        raise ValidationError(
            f"Invalid program status: {status}. "
            f"Must be one of: {', '.join(ProgramStatus.values)}"
        )


@transaction.atomic
def create_program(
    *,
    name: str,
    description: str,
    date: date,
    time: str,
    location: str,
    budget: Decimal,
    status: str = ProgramStatus.PLANNING,
    created_by: Optional[User] = None
) -> Program:
    """
    Create a new program.

    Raises:
        ValidationError: If budget is negative or status is unknown
    """
    _validate_budget(budget)
    _validate_status(status)

    program = Program.objects.create(
        name=name,
        description=description,
        date=date,
        time=time,
        location=location,
        budget=budget,
        status=status,
        created_by=created_by,
    )

    logger.info("program_created", program_id=program.id, status=program.status)
    return program


def get_program_by_id(*, program_id: int) -> Program:
    """
    Get a program by ID.

    Raises:
        ProgramNotFoundError: If program doesn't exist
    """
    try:
        return Program.objects.select_related('created_by').get(id=program_id)
    except (Program.DoesNotExist, ValueError, TypeError):
        raise ProgramNotFoundError(f"Program with ID {program_id} not found")


@transaction.atomic
def update_program(*, program_id: int, **fields) -> Program:
    """
    Update program details.

    Only fields in ``UPDATABLE_FIELDS`` are applied; unknown keys are ignored.

    Raises:
        ProgramNotFoundError: If program doesn't exist
        ValidationError: If budget is negative or status is unknown
    """
    try:
        program = Program.objects.select_for_update().get(id=program_id)
    except Program.DoesNotExist:
        raise ProgramNotFoundError(f"Program with ID {program_id} not found")

    changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS and v is not None}
    _validate_budget(changes.get('budget'))
    _validate_status(changes.get('status'))

    for field, value in changes.items():
        setattr(program, field, value)

    if changes:
        program.save(update_fields=[*changes.keys(), 'updated_at'])
        logger.info("program_updated", program_id=program.id, fields=sorted(changes))

    return program


@transaction.atomic
def delete_program(*, program_id: int) -> None:
    """
    Delete a program together with its memberships, registrations and expenses.

    Raises:
        ProgramNotFoundError: If program doesn't exist
    """
    deleted, _ = Program.objects.filter(id=program_id).delete()
    if not deleted:
        raise ProgramNotFoundError(f"Program with ID {program_id} not found")

    logger.info("program_deleted", program_id=program_id)


def search_programs(
    *,
    search: Optional[str] = None,
    status: Optional[str] = None
) -> QuerySet[Program]:
    """
    Search and filter programs.

    Args:
        search: Search term for name, location, description
        status: Filter by program status
    """
    queryset = Program.objects.select_related('created_by')

    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(location__icontains=search) |
            Q(description__icontains=search)
        )

    if status:
        queryset = queryset.filter(status=status)

    return queryset


def get_program_calendar(*, year: int, month: Optional[int] = None) -> "OrderedDict[str, list]":
    """
    Programs grouped by date for a calendar view.

    Args:
        year: Calendar year
        month: Optional month (1-12); whole year when omitted

    Returns:
        Ordered mapping of ISO date -> list of programs on that day
    """
    if month is not None:
        start = date(year, month, 1)
        end = date(year, month, calendar.monthrange(year, month)[1])
    else:
        start = date(year, 1, 1)
        end = date(year, 12, 31)

    programs = (
        Program.objects
        .filter(date__gte=start, date__lte=end)
        .order_by('date', 'time', 'name')
    )

    days = OrderedDict()
    for program in programs:
        days.setdefault(program.date.isoformat(), []).append(program)
    return days
