from rest_framework import serializers

from .models import Expense, ExpenseCategory


class ExpenseSerializer(serializers.ModelSerializer):
    """Serializer for expenses."""

    program_name = serializers.CharField(source='program.name', read_only=True)
    recorded_by = serializers.SerializerMethodField()

    class Meta:
        model = Expense
        fields = [
            'id',
            'program',
            'program_name',
            'description',
            'amount',
            'date',
            'category',
            'notes',
            'recorded_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'program_name', 'recorded_by', 'created_at', 'updated_at']

    def get_recorded_by(self, obj):
        if obj.recorded_by is None:
            return None
        return obj.recorded_by.get_display_name()


class ExpenseWriteSerializer(serializers.Serializer):
    """Input for creating and updating expenses."""

    program = serializers.IntegerField(min_value=1)
    description = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    date = serializers.DateField()
    category = serializers.ChoiceField(choices=ExpenseCategory.choices)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Amount must be greater than zero.')
        return value


class ExpenseFilterSerializer(serializers.Serializer):
    """Input serializer for filtering expenses."""

    program = serializers.IntegerField(required=False, help_text="Filter by program ID")
    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)
    date_from = serializers.DateField(required=False, help_text="Filter expenses from this date")
    date_to = serializers.DateField(required=False, help_text="Filter expenses until this date")
    year = serializers.IntegerField(required=False, min_value=1900, max_value=2100)
    month = serializers.IntegerField(required=False, min_value=1, max_value=12)

    def validate(self, attrs):
        if attrs.get('date_from') and attrs.get('date_to') and attrs['date_from'] > attrs['date_to']:
            raise serializers.ValidationError({'date_to': 'date_to must be on or after date_from'})
        if attrs.get('month') and not attrs.get('year'):
            raise serializers.ValidationError({'month': 'month requires year'})
        return attrs
