from django.db.models import Sum
from decimal import Decimal
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.context import AuthContext
from apps.accounts.permissions import IsOfficial, IsOfficialOrReadOnly
from apps.expenses.serializers import ExpenseSerializer
from apps.registrations.serializers import RegistrationSerializer
from apps.registrations.services import list_registrations, status_counts
from config.logging_setup import get_logger
from .models import Program
from .serializers import (
    ProgramSerializer,
    ProgramWriteSerializer,
    ProgramMembershipSerializer,
    ProgramMinimalSerializer,
    JoinProgramSerializer,
    ProgramCalendarQuerySerializer,
    ProgramStatusFilterSerializer,
)
from .services import (
    create_program,
    update_program,
    delete_program,
    search_programs,
    get_program_calendar,
    join_program,
    get_program_members,
    ProgramsServiceError,
)

logger = get_logger(__name__)


class ProgramPagination(PageNumberPagination):
    """Custom pagination for programs."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error(exc):
    if exc.status_code >= 500:
        logger.error("request_failed", error=str(exc), error_type=type(exc).__name__)
    return Response({'error': str(exc)}, status=exc.status_code)


@extend_schema(tags=['programs'])
class ProgramViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Program CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get programs (filter by status, search)
    create: Create a program (official)
    retrieve: Get a specific program
    update: Update a program (official)
    partial_update: Partially update a program (official)
    destroy: Delete a program (official)
    """

    queryset = Program.objects.select_related('created_by')
    serializer_class = ProgramSerializer
    permission_classes = [IsAuthenticated, IsOfficialOrReadOnly]
    pagination_class = ProgramPagination

    def get_queryset(self):
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = ProgramStatusFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return search_programs(**filter_serializer.validated_data)

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return ProgramWriteSerializer
        return ProgramSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['registrations', 'expenses']:
            return [IsAuthenticated(), IsOfficial()]
        if self.action == 'join':
            return [IsAuthenticated()]
        return super().get_permissions()

    @extend_schema(
        parameters=[
            OpenApiParameter('status', OpenApiTypes.STR, description='Active, Planning or Completed'),
            OpenApiParameter('search', OpenApiTypes.STR, description='Name, location or description'),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=ProgramWriteSerializer, responses={201: ProgramSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new program."""
        serializer = ProgramWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            program = create_program(created_by=request.user, **serializer.validated_data)
        except ProgramsServiceError as e:
            return _error(e)

        return Response(ProgramSerializer(program).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProgramWriteSerializer, responses={200: ProgramSerializer})
    def update(self, request, *args, **kwargs):
        """Update a program."""
        partial = kwargs.pop('partial', False)
        serializer = ProgramWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            program = update_program(program_id=self.kwargs['pk'], **serializer.validated_data)
        except ProgramsServiceError as e:
            return _error(e)

        return Response(ProgramSerializer(program).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a program."""
        try:
            delete_program(program_id=self.kwargs['pk'])
        except ProgramsServiceError as e:
            return _error(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=JoinProgramSerializer,
        responses={201: ProgramMembershipSerializer},
        description="Enroll a user's participant profile in a program. "
                    "Non-officials may only join as themselves.",
    )
    @action(detail=False, methods=['post'])
    def join(self, request):
        """Join a program."""
        serializer = JoinProgramSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'User ID and Program ID are required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        user_id = serializer.validated_data.get('userId')
        program_id = serializer.validated_data.get('programId')

        if user_id and user_id != request.user.id and not AuthContext.from_request(request).is_official:
            return Response(
                {'error': 'You can only join programs as yourself'},
                status=status.HTTP_403_FORBIDDEN
            )

        try:
            membership = join_program(user_id=user_id, program_id=program_id)
        except ProgramsServiceError as e:
            return _error(e)

        return Response(
            ProgramMembershipSerializer(membership).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: ProgramMembershipSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the program."""
        try:
            memberships = get_program_members(program_id=pk)
        except ProgramsServiceError as e:
            return _error(e)
        return Response(ProgramMembershipSerializer(memberships, many=True).data)

    @extend_schema(responses={200: RegistrationSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def registrations(self, request, pk=None):
        """Registrations for the program with counts per status."""
        program = self.get_object()
        queryset = list_registrations(program_id=program.id)
        return Response({
            'counts': status_counts(program_id=program.id),
            'results': RegistrationSerializer(queryset, many=True).data,
        })

    @extend_schema(responses={200: ExpenseSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def expenses(self, request, pk=None):
        """Expenses charged to the program against its budget."""
        program = self.get_object()
        expenses = program.expenses.select_related('recorded_by').order_by('-date')
        total = expenses.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')

        return Response({
            'budget': program.budget,
            'total_spent': total,
            'remaining_budget': program.budget - total,
            'results': ExpenseSerializer(expenses, many=True).data,
        })

    @extend_schema(
        parameters=[
            OpenApiParameter('year', OpenApiTypes.INT, description='Defaults to the current year'),
            OpenApiParameter('month', OpenApiTypes.INT),
        ],
        description="Programs grouped by date.",
    )
    @action(detail=False, methods=['get'])
    def calendar(self, request):
        """Programs grouped by day for the calendar."""
        query_serializer = ProgramCalendarQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        days = get_program_calendar(**query_serializer.validated_data)
        return Response({
            'days': [
                {'date': day, 'programs': ProgramMinimalSerializer(programs, many=True).data}
                for day, programs in days.items()
            ]
        })
