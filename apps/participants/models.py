from django.db import models

from apps.participants.normalization import normalize_text


class Participant(models.Model):
    """A youth registered with the council, optionally linked to a login."""

    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='participant_profile'
    )
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    age = models.PositiveIntegerField(default=0)
    contact = models.CharField(max_length=50, blank=True)
    email = models.EmailField(max_length=100, blank=True, null=True)
    address = models.CharField(max_length=255, blank=True)

    # Lowercased "first last" used for duplicate detection
    name_normalized = models.CharField(max_length=201, db_index=True, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'participants'
        indexes = [
            models.Index(fields=['last_name', 'first_name'], name='participants_name_idx'),
            models.Index(fields=['created_at'], name='participants_created_at_idx'),
        ]
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def save(self, *args, **kwargs):
        self.name_normalized = normalize_text(self.full_name)
        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            kwargs['update_fields'] = {*update_fields, 'name_normalized'}
        super().save(*args, **kwargs)
