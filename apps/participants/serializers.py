from rest_framework import serializers

from .models import Participant


class ParticipantMinimalSerializer(serializers.ModelSerializer):
    """Minimal participant info for nested serialization."""

    class Meta:
        model = Participant
        fields = ['id', 'first_name', 'last_name', 'age', 'contact', 'email']
        read_only_fields = fields


class ParticipantSerializer(serializers.ModelSerializer):
    """Main serializer for participants."""

    full_name = serializers.CharField(read_only=True)
    user_id = serializers.IntegerField(source='user.id', read_only=True, allow_null=True)
    program_ids = serializers.SerializerMethodField()

    class Meta:
        model = Participant
        fields = [
            'id',
            'user_id',
            'first_name',
            'last_name',
            'full_name',
            'age',
            'contact',
            'email',
            'address',
            'program_ids',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'user_id', 'created_at', 'updated_at']

    def get_program_ids(self, obj):
        return sorted(reg.program_id for reg in obj.registrations.all())


class ParticipantWriteSerializer(serializers.Serializer):
    """Input for creating or updating a participant."""

    first_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    age = serializers.IntegerField(required=False, allow_null=True)
    contact = serializers.CharField(max_length=50, required=False, allow_blank=True)
    email = serializers.EmailField(max_length=100, required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    program_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        required=False,
        allow_empty=True
    )


class DuplicateCheckSerializer(serializers.Serializer):
    """Query parameters for duplicate lookup."""

    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    contact = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    threshold = serializers.IntegerField(min_value=0, max_value=100, required=False, default=80)


class DuplicateMatchSerializer(serializers.Serializer):
    """A participant who may be the same person."""

    participant = ParticipantMinimalSerializer()
    similarity = serializers.IntegerField()
    match_type = serializers.CharField()
