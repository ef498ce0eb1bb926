from django.urls import path
from . import views

app_name = 'configuration'

urlpatterns = [
    # GET  /api/settings/       - List settings
    # POST /api/settings/bulk/  - Bulk upsert
    path('', views.settings_list, name='settings-list'),
    path('bulk/', views.settings_bulk_update, name='settings-bulk'),
]
