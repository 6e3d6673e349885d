from rest_framework import serializers

from apps.participants.serializers import ParticipantMinimalSerializer
from apps.programs.serializers import ProgramMinimalSerializer
from .models import Registration


class RegistrationSerializer(serializers.ModelSerializer):
    """Registration with nested participant and program."""

    participant = ParticipantMinimalSerializer(read_only=True)
    program = ProgramMinimalSerializer(read_only=True)

    class Meta:
        model = Registration
        fields = ['id', 'program', 'participant', 'status', 'registration_date', 'updated_at']
        read_only_fields = fields


class RegistrationRecordSerializer(serializers.ModelSerializer):
    """Flat registration row as stored."""

    class Meta:
        model = Registration
        fields = ['id', 'program_id', 'participant_id', 'status', 'registration_date', 'updated_at']
        read_only_fields = fields


class UpdateStatusSerializer(serializers.Serializer):
    """
    Request body for a status change.

    Fields are optional here so that missing values reach the service and
    produce its error message.
    """

    program_id = serializers.IntegerField(default=None, allow_null=True)
    participant_id = serializers.IntegerField(default=None, allow_null=True)
    status = serializers.JSONField(default=None, allow_null=True)


class StatusUpdateResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    data = RegistrationRecordSerializer()
    current_status = serializers.CharField(allow_null=True)
    timestamp = serializers.DateTimeField()


class RegisterParticipantSerializer(serializers.Serializer):
    program_id = serializers.IntegerField(default=None, allow_null=True)
    participant_id = serializers.IntegerField(default=None, allow_null=True)


class RequestRegistrationSerializer(serializers.Serializer):
    program_id = serializers.IntegerField(default=None, allow_null=True)


class RegistrationFilterSerializer(serializers.Serializer):
    """Input serializer for the review queue."""

    program = serializers.IntegerField(required=False)
    status = serializers.CharField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)


class StatusCountsSerializer(serializers.Serializer):
    Approved = serializers.IntegerField()
    Pending = serializers.IntegerField()
    Rejected = serializers.IntegerField()
    Waitlisted = serializers.IntegerField()
    total = serializers.IntegerField()


class RegistrationQueueSerializer(serializers.Serializer):
    counts = StatusCountsSerializer()
    results = RegistrationSerializer(many=True)
