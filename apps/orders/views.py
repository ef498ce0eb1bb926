from django.http import HttpResponse
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter
from .serializers import (
    OrderSerializer,
    OrderListSerializer,
    OrderFilterSerializer,
    OrderCreateInputSerializer,
    OrderStatusInputSerializer,
    RecentOrdersQuerySerializer,
)
from .services import (
    create_order,
    transition_order_status,
    get_order_by_id,
    get_recent_orders,
    write_orders_csv,
)
from .services.order_queries import order_queryset


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class OrderViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Orders for the back-office dashboard.

    list: Get orders (filterable by status/customer)
    create: Place an order (settles the customer ledger)
    retrieve: Get an order with items
    change_status: Move an order through its lifecycle
    recent: Latest orders for the dashboard feed
    export: Download orders as CSV
    """

    serializer_class = OrderSerializer
    permission_classes = [IsAdminUser]
    pagination_class = OrderPagination

    def get_queryset(self):
        """Filter orders using input serializer validation."""
        queryset = order_queryset().order_by('-created_at')

        filter_serializer = OrderFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'customer' in params:
            queryset = queryset.filter(customer_id=params['customer'])
        return queryset

    def get_serializer_class(self):
        if self.action == 'list':
            return OrderListSerializer
        return OrderSerializer

    @extend_schema(
        request=OrderCreateInputSerializer,
        responses={201: OrderSerializer},
        parameters=[
            OpenApiParameter(
                'Idempotency-Key',
                str,
                OpenApiParameter.HEADER,
                required=False,
                description='Repeat a request with the same key to get the original order back',
            ),
        ],
    )
    def create(self, request):
        serializer = OrderCreateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = create_order(
            customer_id=data['customer_id'],
            lines=[dict(item) for item in data['items']],
            comment=data.get('comment') or None,
            idempotency_key=request.headers.get('Idempotency-Key') or None,
        )
        order = get_order_by_id(order_id=order.id)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: OrderSerializer})
    def retrieve(self, request, pk=None):
        order = get_order_by_id(order_id=pk)
        return Response(OrderSerializer(order).data)

    @extend_schema(request=OrderStatusInputSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=['patch'], url_path='status', url_name='status')
    def change_status(self, request, pk=None):
        """Change order status; cancelling reverses the loyalty settlement."""
        serializer = OrderStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        transition_order_status(order_id=pk, new_status=serializer.validated_data['status'])
        order = get_order_by_id(order_id=pk)
        return Response(OrderSerializer(order).data)

    @extend_schema(
        parameters=[RecentOrdersQuerySerializer],
        responses={200: OrderListSerializer(many=True)},
    )
    @action(detail=False, methods=['get'])
    def recent(self, request):
        query = RecentOrdersQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        orders = get_recent_orders(limit=query.validated_data['limit'])
        return Response(OrderListSerializer(orders, many=True).data)

    @extend_schema(parameters=[OrderFilterSerializer], responses={(200, 'text/csv'): OpenApiTypes.STR})
    @action(detail=False, methods=['get'])
    def export(self, request):
        """Same filters as the list, as a CSV attachment."""
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = 'attachment; filename="orders.csv"'
        write_orders_csv(response, self.get_queryset())
        return response
