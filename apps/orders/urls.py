from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'orders'

router = SimpleRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET   /api/orders/              - List orders
    # POST  /api/orders/              - Place order (Idempotency-Key header)
    # GET   /api/orders/recent/       - Latest orders
    # GET   /api/orders/{id}/         - Order with items
    # PATCH /api/orders/{id}/status/  - Change status
    path('', include(router.urls)),
]
