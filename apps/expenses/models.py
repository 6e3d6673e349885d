from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal


class ExpenseCategory(models.TextChoices):
    SUPPLIES = 'Supplies', 'Supplies'
    EQUIPMENT = 'Equipment', 'Equipment'
    VENUE = 'Venue', 'Venue'
    FOOD = 'Food', 'Food'
    TRANSPORTATION = 'Transportation', 'Transportation'
    OTHER = 'Other', 'Other'


class Expense(models.Model):
    """Money spent on a program, drawn against its budget."""

    program = models.ForeignKey(
        'programs.Program',
        on_delete=models.CASCADE,
        related_name='expenses'
    )
    description = models.CharField(max_length=255)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    date = models.DateField()
    category = models.CharField(max_length=30, choices=ExpenseCategory.choices)
    notes = models.TextField(blank=True, null=True)

    recorded_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses_recorded'
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['program', 'date'], name='expenses_program_date_idx'),
            models.Index(fields=['category'], name='expenses_category_idx'),
        ]

    def __str__(self):
        return f"{self.description} - {self.amount} ({self.program.name})"
