from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsOfficial
from apps.programs.services import ProgramsServiceError
from config.logging_setup import get_logger
from .serializers import (
    RegistrationSerializer,
    RegistrationRecordSerializer,
    UpdateStatusSerializer,
    StatusUpdateResponseSerializer,
    RegisterParticipantSerializer,
    RequestRegistrationSerializer,
    RegistrationFilterSerializer,
    RegistrationQueueSerializer,
)
from .services import (
    set_registration_status,
    register_participant,
    request_registration,
    list_registrations,
    status_counts,
    get_user_registrations,
    remove_registration,
)

logger = get_logger(__name__)


def _error(exc):
    """Render a service error as ``{'error': message}`` with its status code."""
    if exc.status_code >= 500:
        logger.error("request_failed", error=str(exc), error_type=type(exc).__name__)
    return Response({'error': str(exc)}, status=exc.status_code)


def _bad_ids():
    return Response(
        {'error': 'program_id and participant_id must be integers'},
        status=status.HTTP_400_BAD_REQUEST
    )


@extend_schema(
    request=UpdateStatusSerializer,
    responses={200: StatusUpdateResponseSerializer},
    description="Set a registration's status, creating the registration if needed. "
                "`current_status` is the status read back after the write; when it "
                "differs from the requested status another update got in between.",
    tags=['registrations'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsOfficial])
def update_status(request):
    """Set registration status for a (program, participant) pair."""
    serializer = UpdateStatusSerializer(data=request.data)
    if not serializer.is_valid():
        return _bad_ids()

    try:
        result = set_registration_status(**serializer.validated_data)
    except ProgramsServiceError as e:
        return _error(e)

    return Response({
        'success': True,
        'message': result.message,
        'data': RegistrationRecordSerializer(result.record).data,
        'current_status': result.current_status,
        'timestamp': result.timestamp,
    })


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('program', OpenApiTypes.INT, description='Filter by program ID'),
        OpenApiParameter('status', OpenApiTypes.STR, description='Approved, Pending, Rejected or Waitlisted'),
        OpenApiParameter('search', OpenApiTypes.STR, description='Participant or program name'),
    ],
    responses={200: RegistrationQueueSerializer},
    description="Registration review queue with counts per status.",
    tags=['registrations'],
)
@extend_schema(
    methods=['POST'],
    request=RegisterParticipantSerializer,
    responses={201: RegistrationSerializer},
    description="Register a participant for a program (Approved).",
    tags=['registrations'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsOfficial])
def registrations(request):
    """List registrations for review, or add a participant to a program."""
    if request.method == 'POST':
        serializer = RegisterParticipantSerializer(data=request.data)
        if not serializer.is_valid():
            return _bad_ids()
        try:
            registration = register_participant(**serializer.validated_data)
        except ProgramsServiceError as e:
            return _error(e)
        return Response(RegistrationSerializer(registration).data, status=status.HTTP_201_CREATED)

    filter_serializer = RegistrationFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    params = filter_serializer.validated_data

    try:
        queryset = list_registrations(
            program_id=params.get('program'),
            status=params.get('status'),
            search=params.get('search'),
        )
    except ProgramsServiceError as e:
        return _error(e)

    return Response({
        'counts': status_counts(program_id=params.get('program')),
        'results': RegistrationSerializer(queryset, many=True).data,
    })


@extend_schema(
    request=RequestRegistrationSerializer,
    responses={201: RegistrationSerializer},
    description="Ask to join a program with your participant profile. "
                "The registration starts as Pending.",
    tags=['registrations'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def request_to_join(request):
    """Self-service registration request."""
    serializer = RequestRegistrationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({'error': 'program_id must be an integer'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        registration = request_registration(
            user=request.user,
            program_id=serializer.validated_data.get('program_id'),
        )
    except ProgramsServiceError as e:
        return _error(e)

    return Response(RegistrationSerializer(registration).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: RegistrationSerializer(many=True)},
    description="Registrations of the current user's participant profile.",
    tags=['registrations'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_registrations(request):
    """Get current user's registrations."""
    queryset = get_user_registrations(user=request.user)
    return Response(RegistrationSerializer(queryset, many=True).data)


@extend_schema(
    responses={204: None},
    description="Remove a participant's registration from a program.",
    tags=['registrations'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsOfficial])
def remove(request, program_id, participant_id):
    """Delete a registration."""
    try:
        remove_registration(program_id=program_id, participant_id=participant_id)
    except ProgramsServiceError as e:
        return _error(e)
    return Response(status=status.HTTP_204_NO_CONTENT)
