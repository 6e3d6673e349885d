from django.contrib import admin
from django.utils import timezone

from apps.registrations.models import Registration, RegistrationStatus


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    """Admin interface for Registrations."""

    list_display = ['participant', 'program', 'status', 'registration_date', 'updated_at']
    list_filter = ['status', 'registration_date']
    search_fields = ['participant__first_name', 'participant__last_name', 'program__name']
    readonly_fields = ['registration_date', 'updated_at']
    autocomplete_fields = ['program', 'participant']
    ordering = ['-registration_date']
    actions = ['approve', 'waitlist', 'reject']

    def _set_status(self, request, queryset, value):
        # queryset.update() skips auto_now
        updated = queryset.update(status=value, updated_at=timezone.now())
        self.message_user(request, f'{updated} registration(s) marked {value}.')

    @admin.action(description='Approve selected registrations')
    def approve(self, request, queryset):
        self._set_status(request, queryset, RegistrationStatus.APPROVED)

    @admin.action(description='Waitlist selected registrations')
    def waitlist(self, request, queryset):
        self._set_status(request, queryset, RegistrationStatus.WAITLISTED)

    @admin.action(description='Reject selected registrations')
    def reject(self, request, queryset):
        self._set_status(request, queryset, RegistrationStatus.REJECTED)
