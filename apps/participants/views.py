from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.context import AuthContext
from apps.accounts.permissions import IsOfficial
from apps.registrations.serializers import RegistrationSerializer
from .models import Participant
from .serializers import (
    ParticipantSerializer,
    ParticipantWriteSerializer,
    DuplicateCheckSerializer,
    DuplicateMatchSerializer,
)
from .services import (
    create_participant,
    get_participant_by_id,
    update_participant,
    delete_participant,
    get_participant_for_user,
    create_participant_from_user,
    search_participants,
    get_participant_programs,
    find_potential_duplicates,
    ParticipantsServiceError,
    ParticipantNotFoundError,
)


class ParticipantPagination(PageNumberPagination):
    """Custom pagination for participants."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class ParticipantViewSet(viewsets.ModelViewSet):
    """
    ViewSet for participants.

    Officials manage every participant. Other users can only see and edit
    their own profile through ``me``.
    """

    queryset = Participant.objects.select_related('user').prefetch_related('registrations')
    serializer_class = ParticipantSerializer
    permission_classes = [IsAuthenticated, IsOfficial]
    pagination_class = ParticipantPagination

    def get_permissions(self):
        if self.action in ['me', 'programs']:
            return [IsAuthenticated()]
        return super().get_permissions()

    def get_queryset(self):
        if self.action != 'list':
            return super().get_queryset()

        program_id = self.request.query_params.get('program')
        return search_participants(
            search=self.request.query_params.get('search'),
            program_id=int(program_id) if program_id and program_id.isdigit() else None,
        ).prefetch_related('registrations')

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR, description='Name, contact or email'),
            OpenApiParameter('program', OpenApiTypes.INT, description='Registered for program'),
        ],
        tags=['participants'],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(tags=['participants'])
    def retrieve(self, request, *args, **kwargs):
        try:
            participant = get_participant_by_id(participant_id=kwargs['pk'])
        except ParticipantNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(ParticipantSerializer(participant).data)

    @extend_schema(request=ParticipantWriteSerializer, responses={201: ParticipantSerializer},
                   tags=['participants'])
    def create(self, request, *args, **kwargs):
        """Create a participant, registering them (Approved) for program_ids."""
        serializer = ParticipantWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            participant = create_participant(
                first_name=data.get('first_name', ''),
                last_name=data.get('last_name', ''),
                age=data.get('age'),
                contact=data.get('contact', ''),
                address=data.get('address', ''),
                email=data.get('email'),
                program_ids=data.get('program_ids', []),
            )
        except ParticipantsServiceError as e:
            return Response({'error': str(e)}, status=e.status_code)

        return Response(ParticipantSerializer(participant).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ParticipantWriteSerializer, responses={200: ParticipantSerializer},
                   tags=['participants'])
    def update(self, request, *args, **kwargs):
        """Update a participant; program_ids, when sent, replaces their registrations."""
        kwargs.pop('partial', None)
        serializer = ParticipantWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            participant = update_participant(participant_id=self.kwargs['pk'], **serializer.validated_data)
        except ParticipantsServiceError as e:
            return Response({'error': str(e)}, status=e.status_code)

        return Response(ParticipantSerializer(participant).data)

    @extend_schema(tags=['participants'])
    def destroy(self, request, *args, **kwargs):
        try:
            delete_participant(participant_id=self.kwargs['pk'])
        except ParticipantNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        methods=['GET'],
        responses={200: ParticipantSerializer},
        description="Your own participant profile.",
        tags=['participants'],
    )
    @extend_schema(
        methods=['POST'],
        request=None,
        responses={200: ParticipantSerializer, 201: ParticipantSerializer},
        description="Create your participant profile from your account if you have none.",
        tags=['participants'],
    )
    @extend_schema(
        methods=['PATCH'],
        request=ParticipantWriteSerializer,
        responses={200: ParticipantSerializer},
        description="Update your own participant profile.",
        tags=['participants'],
    )
    @action(detail=False, methods=['get', 'post', 'patch'])
    def me(self, request):
        """Current user's participant profile."""
        if request.method == 'POST':
            participant, created = create_participant_from_user(user=request.user)
            return Response(
                ParticipantSerializer(participant).data,
                status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
            )

        try:
            participant = get_participant_for_user(user=request.user)
        except ParticipantNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        if request.method == 'PATCH':
            serializer = ParticipantWriteSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            fields = dict(serializer.validated_data)
            # Program enrollment goes through registration requests
            fields.pop('program_ids', None)
            try:
                participant = update_participant(participant_id=participant.id, **fields)
            except ParticipantsServiceError as e:
                return Response({'error': str(e)}, status=e.status_code)

        return Response(ParticipantSerializer(participant).data)

    @extend_schema(
        responses={200: RegistrationSerializer(many=True)},
        description="Programs the participant is registered for, with registration status.",
        tags=['participants'],
    )
    @action(detail=True, methods=['get'])
    def programs(self, request, pk=None):
        """Get participant's programs."""
        ctx = AuthContext.from_request(request)
        if not ctx.is_official:
            own = Participant.objects.filter(id=pk, user=request.user).exists()
            if not own:
                return Response(
                    {'error': 'You can only view your own programs'},
                    status=status.HTTP_403_FORBIDDEN
                )

        try:
            registrations = get_participant_programs(participant_id=pk)
        except ParticipantNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(RegistrationSerializer(registrations, many=True).data)

    @extend_schema(
        parameters=[
            OpenApiParameter('first_name', OpenApiTypes.STR, required=True),
            OpenApiParameter('last_name', OpenApiTypes.STR, required=True),
            OpenApiParameter('contact', OpenApiTypes.STR),
            OpenApiParameter('threshold', OpenApiTypes.INT, description='Minimum similarity (0-100)'),
        ],
        responses={200: DuplicateMatchSerializer(many=True)},
        description="Participants who may be the same person as the given name and contact.",
        tags=['participants'],
    )
    @action(detail=False, methods=['get'])
    def duplicates(self, request):
        """Find potential duplicate participants."""
        query_serializer = DuplicateCheckSerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        matches = find_potential_duplicates(**query_serializer.validated_data)
        return Response(DuplicateMatchSerializer([
            {'participant': participant, 'similarity': score, 'match_type': match_type}
            for participant, score, match_type in matches
        ], many=True).data)
