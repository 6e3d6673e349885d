import pytest
from datetime import date, timedelta
from decimal import Decimal

from apps.programs.models import Program, ProgramStatus
from apps.registrations.models import Registration, RegistrationStatus
from apps.reports.exceptions import InvalidDateRangeError, ProgramNotFoundError
from apps.reports.queries import ReportQueries


@pytest.mark.django_db
class TestExpenseReport:

    def test_all_programs(self, expenses, program, other_program):
        report = ReportQueries.expense_report()

        assert report['total_expenses'] == Decimal('4650.50')
        assert report['expense_count'] == 3
        assert report['average_expense'] == Decimal('1550.17')
        assert report['allocated_budget'] == Decimal('30000.00')
        assert report['remaining_budget'] == Decimal('25349.50')
        assert report['by_category']['Food'] == {'total': Decimal('1200.50'), 'count': 1}
        assert [row['program_id'] for row in report['by_program']] == [program.id, other_program.id]

    def test_single_program(self, expenses, program):
        report = ReportQueries.expense_report(program_id=program.id)

        assert report['total_expenses'] == Decimal('4200.50')
        assert report['allocated_budget'] == Decimal('25000.00')
        assert report['remaining_budget'] == Decimal('20799.50')
        assert set(report['by_category']) == {'Equipment', 'Food'}

    def test_date_window(self, expenses):
        report = ReportQueries.expense_report(start_date=date(2026, 4, 1), end_date=date(2026, 4, 30))

        assert report['expense_count'] == 2
        assert report['total_expenses'] == Decimal('1650.50')

    def test_no_expenses(self, program):
        report = ReportQueries.expense_report()

        assert report['total_expenses'] == Decimal('0.00')
        assert report['average_expense'] == Decimal('0.00')
        assert report['remaining_budget'] == Decimal('25000.00')
        assert report['by_category'] == {}

    def test_inverted_range(self, db):
        with pytest.raises(InvalidDateRangeError):
            ReportQueries.expense_report(start_date=date(2026, 5, 1), end_date=date(2026, 4, 1))

    def test_unknown_program(self, db):
        with pytest.raises(ProgramNotFoundError):
            ReportQueries.expense_report(program_id=9999)


@pytest.mark.django_db
class TestMonthlyExpenses:

    def test_twelve_months(self, expenses):
        series = ReportQueries.monthly_expenses(year=2026)

        assert len(series) == 12
        assert series[0] == {'month': '2026-01', 'total': Decimal('0.00'), 'count': 0}
        assert series[2]['total'] == Decimal('3000.00')
        assert series[3] == {'month': '2026-04', 'total': Decimal('1650.50'), 'count': 2}

    def test_program_filter(self, expenses, other_program):
        series = ReportQueries.monthly_expenses(year=2026, program_id=other_program.id)

        assert sum(point['count'] for point in series) == 1


@pytest.mark.django_db
class TestDashboard:

    def test_figures(self, expenses, program, other_program, youth_participant, walk_in_participant):
        Registration.objects.create(program=program, participant=youth_participant,
                                    status=RegistrationStatus.APPROVED)
        Registration.objects.create(program=program, participant=walk_in_participant)
        Program.objects.create(
            name='Sportsfest 2025',
            description='Done',
            date=date.today() - timedelta(days=200),
            time='7:00 AM',
            location='Plaza',
            budget=Decimal('1000.00'),
            status=ProgramStatus.COMPLETED,
        )

        data = ReportQueries.dashboard()

        assert data['programs']['total'] == 3
        assert data['programs']['Completed'] == 1
        assert data['total_participants'] == 2
        assert data['total_budget'] == Decimal('31000.00')
        assert data['total_spent'] == Decimal('4650.50')
        assert data['registrations'] == {
            'Approved': 1, 'Pending': 1, 'Rejected': 0, 'Waitlisted': 0, 'total': 2,
        }
        assert [p.id for p in data['upcoming_programs']] == [program.id, other_program.id]

    def test_upcoming_limit(self, program, other_program):
        data = ReportQueries.dashboard(upcoming_limit=1)
        assert [p.id for p in data['upcoming_programs']] == [program.id]
