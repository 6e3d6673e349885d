from django.contrib import admin

from apps.participants.models import Participant
from apps.registrations.models import Registration


class RegistrationInline(admin.TabularInline):
    model = Registration
    extra = 0
    fields = ['program', 'status', 'registration_date']
    readonly_fields = ['registration_date']
    autocomplete_fields = ['program']


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    """Admin interface for Participants."""

    list_display = ['full_name', 'age', 'contact', 'email', 'user', 'created_at']
    list_filter = ['created_at']
    search_fields = ['first_name', 'last_name', 'contact', 'email', 'user__email']
    readonly_fields = ['name_normalized', 'created_at', 'updated_at']
    raw_id_fields = ['user']
    inlines = [RegistrationInline]
    ordering = ['last_name', 'first_name']
