"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 4 users (admin, sk chair, two youth members)
- 4 programs across all statuses
- 6 participants, two of them linked to the youth accounts
- Registrations in every status
- Program memberships for the youth accounts
- Expenses charged to the programs
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal
from datetime import date, timedelta
import random

from apps.accounts.models import User, UserRole
from apps.expenses.models import Expense, ExpenseCategory
from apps.participants.models import Participant
from apps.programs.models import Program, ProgramMembership, ProgramStatus
from apps.registrations.models import Registration, RegistrationStatus


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        programs = self.create_programs(users['chair'])
        participants = self.create_participants(users)
        self.create_registrations(programs, participants)
        self.create_memberships(programs, participants)
        self.create_expenses(programs, users['chair'])

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  chair@example.com / password123 (SK official)')
        self.stdout.write('  juan@example.com / password123')
        self.stdout.write('  maria@example.com / password123')

    def clear_data(self):
        """Clear all data from the database."""
        Expense.objects.all().delete()
        Registration.objects.all().delete()
        ProgramMembership.objects.all().delete()
        Participant.objects.all().delete()
        Program.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        User.objects.filter(email='admin@example.com').delete()

    def _user(self, email, password, **defaults):
        user, _ = User.objects.get_or_create(email=email, defaults=defaults)
        user.set_password(password)
        user.save()
        return user

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        return {
            'admin': self._user(
                'admin@example.com', 'admin123',
                username='admin',
                display_name='Admin User',
                role=UserRole.ADMIN,
                is_staff=True,
                is_superuser=True,
            ),
            'chair': self._user(
                'chair@example.com', 'password123',
                username='skchair',
                display_name='SK Chairperson',
                role=UserRole.SK_OFFICIAL,
            ),
            'juan': self._user(
                'juan@example.com', 'password123',
                username='juan',
                display_name='Juan Dela Cruz',
            ),
            'maria': self._user(
                'maria@example.com', 'password123',
                username='maria',
                display_name='Maria Santos',
            ),
        }

    def create_programs(self, created_by):
        """Create programs, one per status and a second active one."""
        self.stdout.write('  Creating programs...')

        today = date.today()
        programs_data = [
            {
                'name': 'Inter-Purok Basketball League',
                'description': 'Summer basketball tournament for youth aged 15-24.',
                'date': today + timedelta(days=10),
                'time': '8:00 AM',
                'location': 'Barangay Covered Court',
                'budget': Decimal('25000.00'),
                'status': ProgramStatus.ACTIVE,
            },
            {
                'name': 'Coastal Cleanup Drive',
                'description': 'Shoreline cleanup with the municipal environment office.',
                'date': today + timedelta(days=24),
                'time': '6:00 AM',
                'location': 'Municipal Beach',
                'budget': Decimal('5000.00'),
                'status': ProgramStatus.PLANNING,
            },
            {
                'name': 'Financial Literacy Seminar',
                'description': 'Budgeting and savings workshop.',
                'date': today + timedelta(days=3),
                'time': '1:00 PM',
                'location': 'Barangay Hall',
                'budget': Decimal('8000.00'),
                'status': ProgramStatus.ACTIVE,
            },
            {
                'name': 'Christmas Outreach',
                'description': 'Gift giving for children in the barangay.',
                'date': today - timedelta(days=120),
                'time': '3:00 PM',
                'location': 'Barangay Plaza',
                'budget': Decimal('15000.00'),
                'status': ProgramStatus.COMPLETED,
            },
        ]

        programs = []
        for data in programs_data:
            program, _ = Program.objects.get_or_create(
                name=data.pop('name'),
                defaults={**data, 'created_by': created_by},
            )
            programs.append(program)

        return programs

    def create_participants(self, users):
        """Create participants; Juan and Maria get linked profiles."""
        self.stdout.write('  Creating participants...')

        participants_data = [
            ('Juan', 'Dela Cruz', 19, '09171234567', 'Purok 3', users['juan']),
            ('Maria', 'Santos', 21, '09179876543', 'Purok 2', users['maria']),
            ('Ana', 'Reyes', 17, '09181112222', 'Purok 1', None),
            ('Paolo', 'Garcia', 23, '09182223333', 'Purok 4', None),
            ('Liza', 'Mendoza', 16, '09183334444', 'Purok 5', None),
            ('Carlo', 'Bautista', 20, '09184445555', 'Purok 2', None),
        ]

        participants = []
        for first_name, last_name, age, contact, address, user in participants_data:
            participant, _ = Participant.objects.get_or_create(
                first_name=first_name,
                last_name=last_name,
                contact=contact,
                defaults={
                    'age': age,
                    'address': address,
                    'user': user,
                    'email': user.email if user else None,
                },
            )
            participants.append(participant)

        return participants

    def create_registrations(self, programs, participants):
        """Register participants for programs with mixed statuses."""
        self.stdout.write('  Creating registrations...')

        statuses = RegistrationStatus.values
        for program in programs[:3]:
            for participant in random.sample(participants, 4):
                Registration.objects.get_or_create(
                    program=program,
                    participant=participant,
                    defaults={'status': random.choice(statuses)},
                )

    def create_memberships(self, programs, participants):
        """Youth accounts join the active programs."""
        self.stdout.write('  Creating memberships...')

        linked = [p for p in participants if p.user_id]
        for program in programs:
            if program.status != ProgramStatus.ACTIVE:
                continue
            for participant in linked:
                ProgramMembership.objects.get_or_create(program=program, participant=participant)

    def create_expenses(self, programs, recorded_by):
        """Charge a few expenses to each program."""
        self.stdout.write('  Creating expenses...')

        expense_templates = [
            ('Basketballs and nets', ExpenseCategory.EQUIPMENT, (1500, 4000)),
            ('Snacks and water', ExpenseCategory.FOOD, (800, 2500)),
            ('Tarpaulin and printing', ExpenseCategory.SUPPLIES, (500, 1500)),
            ('Tricycle rental', ExpenseCategory.TRANSPORTATION, (300, 900)),
            ('Sound system rental', ExpenseCategory.VENUE, (1000, 3000)),
        ]

        for program in programs:
            for description, category, (low, high) in random.sample(expense_templates, 3):
                Expense.objects.get_or_create(
                    program=program,
                    description=description,
                    defaults={
                        'amount': Decimal(random.randint(low, high)).quantize(Decimal('0.01')),
                        'date': program.date - timedelta(days=random.randint(1, 14)),
                        'category': category,
                        'recorded_by': recorded_by,
                    },
                )
