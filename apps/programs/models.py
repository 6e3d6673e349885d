from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class ProgramStatus(models.TextChoices):
    ACTIVE = 'Active', 'Active'
    PLANNING = 'Planning', 'Planning'
    COMPLETED = 'Completed', 'Completed'


class Program(models.Model):
    """SK youth program run by the council."""

    name = models.CharField(max_length=200)
    description = models.TextField()
    date = models.DateField()
    time = models.CharField(max_length=50)
    location = models.CharField(max_length=255)
    budget = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(
        max_length=20,
        choices=ProgramStatus.choices,
        default=ProgramStatus.PLANNING
    )
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_programs'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'programs'
        indexes = [
            models.Index(fields=['status', 'date'], name='programs_status_date_idx'),
            models.Index(fields=['date'], name='programs_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return self.name

    def has_participant(self, participant):
        return self.memberships.filter(participant=participant).exists()


class ProgramMembership(models.Model):
    """A participant's enrollment in a program (existence is the whole state)."""

    program = models.ForeignKey(Program, on_delete=models.CASCADE, related_name='memberships')
    participant = models.ForeignKey(
        'participants.Participant',
        on_delete=models.CASCADE,
        related_name='program_memberships'
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'program_participants'
        constraints = [
            models.UniqueConstraint(
                fields=['program', 'participant'],
                name='unique_program_participant',
            ),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.participant} in {self.program.name}"
