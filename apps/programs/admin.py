from django.contrib import admin
from apps.programs.models import Program, ProgramMembership


class ProgramMembershipInline(admin.TabularInline):
    """Inline admin for program memberships."""
    model = ProgramMembership
    extra = 0
    fields = ['participant', 'joined_at']
    readonly_fields = ['joined_at']
    autocomplete_fields = ['participant']


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    """Admin interface for Programs."""

    list_display = [
        'name',
        'date',
        'location',
        'status',
        'budget',
        'member_count',
        'created_by',
    ]
    list_filter = ['status', 'date']
    search_fields = ['name', 'description', 'location']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ProgramMembershipInline]
    date_hierarchy = 'date'
    ordering = ['-date']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'status', 'created_by')
        }),
        ('Schedule', {
            'fields': ('date', 'time', 'location')
        }),
        ('Budget', {
            'fields': ('budget',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def member_count(self, obj):
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(ProgramMembership)
class ProgramMembershipAdmin(admin.ModelAdmin):
    """Admin interface for Program Memberships."""

    list_display = ['participant', 'program', 'joined_at']
    search_fields = ['participant__first_name', 'participant__last_name', 'program__name']
    readonly_fields = ['joined_at']
    autocomplete_fields = ['program', 'participant']
    date_hierarchy = 'joined_at'
