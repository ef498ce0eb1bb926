from django.db.models import Q
from django.http import HttpResponse
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from apps.configuration.store_config import load_store_config
from apps.orders.serializers import OrderListSerializer
from apps.orders.services import get_customer_orders
from .models import Customer
from .serializers import (
    CustomerSerializer,
    CustomerFilterSerializer,
    CustomerCreateInputSerializer,
    CustomerBlockInputSerializer,
)
from .services import (
    get_customer_by_id,
    get_or_create_customer,
    set_customer_blocked,
    write_customers_csv,
)


class CustomerPagination(PageNumberPagination):
    """Custom pagination for customers."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CustomerViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Customers and their loyalty standing.

    list: Get customers (searchable)
    create: Register a customer (existing one returned for a known telegram_id)
    retrieve: Get a customer with eligibility flags
    orders: Get the customer's orders
    block: Block or unblock the customer
    export: Download customers with their counters as CSV
    """

    serializer_class = CustomerSerializer
    permission_classes = [IsAdminUser]
    pagination_class = CustomerPagination

    def get_queryset(self):
        """Filter customers using input serializer validation."""
        queryset = Customer.objects.all().order_by('-created_at')

        filter_serializer = CustomerFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        search = params.get('search')
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) |
                Q(shop_name__icontains=search) |
                Q(phone__icontains=search) |
                Q(city__icontains=search)
            )
        if 'customer_type' in params:
            queryset = queryset.filter(customer_type=params['customer_type'])
        if params.get('is_blocked') is not None:
            queryset = queryset.filter(is_blocked=params['is_blocked'])
        return queryset

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['store_config'] = load_store_config()
        return context

    @extend_schema(
        request=CustomerCreateInputSerializer,
        responses={201: CustomerSerializer, 200: CustomerSerializer},
    )
    def create(self, request):
        serializer = CustomerCreateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer, created = get_or_create_customer(**serializer.validated_data)
        return Response(
            self.get_serializer(customer).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @extend_schema(responses={200: CustomerSerializer})
    def retrieve(self, request, pk=None):
        customer = get_customer_by_id(customer_id=pk)
        return Response(self.get_serializer(customer).data)

    @extend_schema(responses={200: OrderListSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def orders(self, request, pk=None):
        customer = get_customer_by_id(customer_id=pk)
        orders = get_customer_orders(customer_id=customer.id)

        page = self.paginate_queryset(orders)
        if page is not None:
            return self.get_paginated_response(OrderListSerializer(page, many=True).data)
        return Response(OrderListSerializer(orders, many=True).data)

    @extend_schema(request=CustomerBlockInputSerializer, responses={200: CustomerSerializer})
    @action(detail=True, methods=['patch'])
    def block(self, request, pk=None):
        serializer = CustomerBlockInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = set_customer_blocked(
            customer_id=pk,
            is_blocked=serializer.validated_data['is_blocked'],
        )
        return Response(self.get_serializer(customer).data)

    @extend_schema(parameters=[CustomerFilterSerializer], responses={(200, 'text/csv'): OpenApiTypes.STR})
    @action(detail=False, methods=['get'])
    def export(self, request):
        """Same filters as the list, as a CSV attachment."""
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = 'attachment; filename="customers.csv"'
        write_customers_csv(response, self.get_queryset())
        return response
