from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'customers'

router = SimpleRouter()
router.register(r'', views.CustomerViewSet, basename='customer')

urlpatterns = [
    # GET   /api/customers/              - List customers
    # GET   /api/customers/{id}/         - Customer detail
    # GET   /api/customers/{id}/orders/  - Customer orders
    # PATCH /api/customers/{id}/block/   - Block / unblock
    path('', include(router.urls)),
]
