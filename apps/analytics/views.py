from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from .analytics import AnalyticsQueries
from .serializers import (
    # Input serializers
    DateRangeQuerySerializer,
    LimitQuerySerializer,
    SalesTrendQuerySerializer,
    # Response serializers
    DashboardStatsSerializer,
    TopProductSerializer,
    TopCustomerSerializer,
    SalesTrendPointSerializer,
    CountrySalesSerializer,
)


@extend_schema(
    parameters=[DateRangeQuerySerializer],
    responses={200: DashboardStatsSerializer},
    description="Dashboard KPI tiles; cancelled orders are excluded.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def dashboard(request):
    query_serializer = DateRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = AnalyticsQueries.dashboard_stats(
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )
    return Response(data)


@extend_schema(
    parameters=[LimitQuerySerializer],
    responses={200: TopProductSerializer(many=True)},
    description="Best-selling products by quantity.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def top_products(request):
    query_serializer = LimitQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    return Response(AnalyticsQueries.top_products(limit=query_serializer.validated_data['limit']))


@extend_schema(
    parameters=[LimitQuerySerializer],
    responses={200: TopCustomerSerializer(many=True)},
    description="Customers with the highest total spent.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def top_customers(request):
    query_serializer = LimitQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    return Response(AnalyticsQueries.top_customers(limit=query_serializer.validated_data['limit']))


@extend_schema(
    parameters=[SalesTrendQuerySerializer],
    responses={200: SalesTrendPointSerializer(many=True)},
    description="Daily sales for the period; days without orders are zero.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def sales_trend(request):
    query_serializer = SalesTrendQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    return Response(AnalyticsQueries.sales_trend(period=query_serializer.validated_data['period']))


@extend_schema(
    responses={200: CountrySalesSerializer(many=True)},
    description="Revenue per country of origin.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def sales_by_country(request):
    return Response(AnalyticsQueries.sales_by_country())
