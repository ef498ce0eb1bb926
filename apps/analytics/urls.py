from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),

    # Rankings
    path('top-products/', views.top_products, name='top-products'),
    path('top-customers/', views.top_customers, name='top-customers'),

    # Charts
    path('sales-trend/', views.sales_trend, name='sales-trend'),
    path('sales-by-country/', views.sales_by_country, name='sales-by-country'),
]
