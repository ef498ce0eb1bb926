import pytest
from django.conf import settings
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestHealthCheck:

    def test_health_is_public(self, api_client):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok', 'database': True}

    def test_plain_http_is_not_redirected_under_tests(self, api_client):
        assert settings.SECURE_SSL_REDIRECT is False

        response = api_client.get(reverse('health-check'), secure=False)

        assert response.status_code != status.HTTP_301_MOVED_PERMANENTLY
