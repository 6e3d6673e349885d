from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsOfficial
from .queries import ReportQueries
from .serializers import (
    ExpenseReportQuerySerializer,
    MonthlyQuerySerializer,
    ExpenseReportSerializer,
    MonthlyPointSerializer,
    DashboardResponseSerializer,
    ErrorSerializer,
)
from .exceptions import ReportsServiceError


@extend_schema(
    parameters=[
        OpenApiParameter('program', OpenApiTypes.INT, description='Program ID'),
        OpenApiParameter('category', OpenApiTypes.STR, description='Expense category'),
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
    ],
    responses={
        200: ExpenseReportSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Expense totals against budget, broken down by category and program.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsOfficial])
def expense_report(request):
    """Expense report - thin HTTP handler."""
    query_serializer = ExpenseReportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = ReportQueries.expense_report(
            program_id=params.get('program'),
            category=params.get('category'),
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
    except ReportsServiceError as e:
        return Response({'error': str(e)}, status=e.status_code)

    return Response(ExpenseReportSerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('year', OpenApiTypes.INT, required=True),
        OpenApiParameter('program', OpenApiTypes.INT, description='Program ID'),
    ],
    responses={200: MonthlyPointSerializer(many=True)},
    description="Spending per month of a year.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsOfficial])
def monthly_expenses(request):
    query_serializer = MonthlyQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = ReportQueries.monthly_expenses(year=params['year'], program_id=params.get('program'))
    return Response(MonthlyPointSerializer(data, many=True).data)


@extend_schema(
    responses={200: DashboardResponseSerializer},
    description="Program, participant, budget and registration figures for officials.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsOfficial])
def dashboard(request):
    """Officials' dashboard."""
    return Response(DashboardResponseSerializer(ReportQueries.dashboard()).data)
