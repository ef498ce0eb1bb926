from rest_framework import serializers
from .models import Setting


class SettingSerializer(serializers.ModelSerializer):
    """Serializer for a single store setting."""

    class Meta:
        model = Setting
        fields = ['key', 'value', 'description']
        read_only_fields = fields


class SettingInputSerializer(serializers.Serializer):
    key = serializers.CharField(max_length=100)
    value = serializers.CharField(max_length=255, allow_blank=True)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)


class BulkSettingsInputSerializer(serializers.Serializer):
    """
    Validate the admin form payload.

    Fields:
        settings (list): ``[{key, value, description?}, ...]``, at least one entry
    """

    settings = SettingInputSerializer(many=True, allow_empty=False)

    def validate_settings(self, value):
        keys = [item['key'] for item in value]
        if len(keys) != len(set(keys)):
            raise serializers.ValidationError('Duplicate keys in payload')
        return value
