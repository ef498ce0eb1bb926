from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from .serializers import SettingSerializer, BulkSettingsInputSerializer
from .services import list_settings, update_settings_bulk


@extend_schema(
    responses={200: SettingSerializer(many=True)},
    description="List all store settings.",
    tags=['settings'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def settings_list(request):
    return Response(SettingSerializer(list_settings(), many=True).data)


@extend_schema(
    request=BulkSettingsInputSerializer,
    responses={200: SettingSerializer(many=True)},
    description="Create or update several settings at once.",
    tags=['settings'],
)
@api_view(['POST'])
@permission_classes([IsAdminUser])
def settings_bulk_update(request):
    """Admin form save: all values are validated before any is written."""
    serializer = BulkSettingsInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    saved = update_settings_bulk(serializer.validated_data['settings'])
    return Response(SettingSerializer(saved, many=True).data, status=status.HTTP_200_OK)
