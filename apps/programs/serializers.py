from django.utils import timezone
from rest_framework import serializers

from apps.participants.serializers import ParticipantMinimalSerializer
from .models import Program, ProgramMembership, ProgramStatus


class ProgramMinimalSerializer(serializers.ModelSerializer):
    """Minimal program info for nested serialization."""

    class Meta:
        model = Program
        fields = ['id', 'name', 'date', 'time', 'location', 'status']
        read_only_fields = fields


class ProgramSerializer(serializers.ModelSerializer):
    """Main serializer for programs."""

    created_by = serializers.SerializerMethodField()
    participant_count = serializers.SerializerMethodField()

    class Meta:
        model = Program
        fields = [
            'id',
            'name',
            'description',
            'date',
            'time',
            'location',
            'budget',
            'status',
            'created_by',
            'participant_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']

    def get_created_by(self, obj):
        if obj.created_by is None:
            return None
        return {'id': obj.created_by.id, 'display_name': obj.created_by.get_display_name()}

    def get_participant_count(self, obj):
        """Approved registrations for the program."""
        return obj.registrations.filter(status='Approved').count()


class ProgramWriteSerializer(serializers.ModelSerializer):
    """Serializer for creating and updating programs."""

    class Meta:
        model = Program
        fields = ['name', 'description', 'date', 'time', 'location', 'budget', 'status']

    def validate_budget(self, value):
        if value < 0:
            raise serializers.ValidationError('Budget cannot be negative')
        return value


class ProgramMembershipSerializer(serializers.ModelSerializer):
    """Serializer for program memberships."""

    participant = ParticipantMinimalSerializer(read_only=True)
    program_id = serializers.IntegerField(source='program.id', read_only=True)

    class Meta:
        model = ProgramMembership
        fields = ['id', 'program_id', 'participant', 'joined_at']
        read_only_fields = fields


class JoinProgramSerializer(serializers.Serializer):
    """Request body for joining a program."""

    userId = serializers.IntegerField(required=False, allow_null=True)
    programId = serializers.IntegerField(required=False, allow_null=True)


class ProgramCalendarQuerySerializer(serializers.Serializer):
    """Query parameters for the calendar view; year defaults to the current one."""

    year = serializers.IntegerField(min_value=1900, max_value=2100, required=False)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)

    def validate(self, attrs):
        attrs.setdefault('year', timezone.localdate().year)
        return attrs


class ProgramStatusFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ProgramStatus.choices, required=False)
    search = serializers.CharField(required=False, allow_blank=True)
