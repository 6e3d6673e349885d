from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsOfficial
from .models import Expense
from .serializers import ExpenseSerializer, ExpenseWriteSerializer, ExpenseFilterSerializer
from .services import ExpenseService


class ExpensePagination(PageNumberPagination):
    """Custom pagination for expenses."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


@extend_schema(tags=['expenses'])
class ExpenseViewSet(viewsets.ModelViewSet):
    """
    ViewSet for program expenses. Officials only.

    list: Expenses, filterable by program, category, date range, year/month
    create: Record an expense
    retrieve: Get an expense
    update / partial_update: Change an expense
    destroy: Delete an expense
    """

    queryset = Expense.objects.select_related('program', 'recorded_by')
    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated, IsOfficial]
    pagination_class = ExpensePagination

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filter_serializer = ExpenseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return ExpenseService.filter_expenses(queryset, **filter_serializer.validated_data)

    @extend_schema(
        parameters=[
            OpenApiParameter('program', OpenApiTypes.INT),
            OpenApiParameter('category', OpenApiTypes.STR),
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
            OpenApiParameter('year', OpenApiTypes.INT),
            OpenApiParameter('month', OpenApiTypes.INT),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=ExpenseWriteSerializer, responses={201: ExpenseSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ExpenseWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        expense = ExpenseService.create_expense(
            program_id=data['program'],
            description=data['description'],
            amount=data['amount'],
            date=data['date'],
            category=data['category'],
            notes=data.get('notes'),
            recorded_by=request.user,
        )
        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ExpenseWriteSerializer, responses={200: ExpenseSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = ExpenseWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        fields = dict(serializer.validated_data)
        if 'program' in fields:
            fields['program_id'] = fields.pop('program')

        expense = ExpenseService.update_expense(expense_id=self.kwargs['pk'], **fields)
        return Response(ExpenseSerializer(expense).data)

    def destroy(self, request, *args, **kwargs):
        ExpenseService.delete_expense(expense_id=self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)
