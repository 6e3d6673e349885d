from django.db import models


class RegistrationStatus(models.TextChoices):
    APPROVED = 'Approved', 'Approved'
    PENDING = 'Pending', 'Pending'
    REJECTED = 'Rejected', 'Rejected'
    WAITLISTED = 'Waitlisted', 'Waitlisted'


class Registration(models.Model):
    """Status of a participant's request to attend a program."""

    program = models.ForeignKey(
        'programs.Program',
        on_delete=models.CASCADE,
        related_name='registrations'
    )
    participant = models.ForeignKey(
        'participants.Participant',
        on_delete=models.CASCADE,
        related_name='registrations'
    )
    status = models.CharField(
        max_length=20,
        choices=RegistrationStatus.choices,
        default=RegistrationStatus.PENDING
    )
    registration_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'registrations'
        constraints = [
            models.UniqueConstraint(
                fields=['program', 'participant'],
                name='unique_registration_per_program',
            ),
        ]
        indexes = [
            models.Index(fields=['status', 'registration_date'], name='registrations_status_idx'),
        ]
        ordering = ['-registration_date']

    def __str__(self):
        return f"{self.participant} -> {self.program.name} ({self.status})"
