from rest_framework import serializers

from .models import Document, DocumentEdit
from .s3_utils import generate_presigned_url_for_key


class DocumentSerializer(serializers.ModelSerializer):
    owner_id = serializers.UUIDField(source='owner.id', read_only=True)
    owner_name = serializers.CharField(source='owner.name', read_only=True)
    premium = serializers.CharField(source='premium_amount', read_only=True)
    due_date = serializers.DateField(source='end_date', read_only=True)
    download_url = serializers.SerializerMethodField()

    class Meta:
        model = Document
        fields = [
            'id', 'owner_id', 'owner_name', 'name', 'type', 'provider',
            'policy_number', 'premium', 'coverage_amount', 'start_date',
            'due_date', 'upload_date', 'file_url', 'download_url',
            'file_type', 'file_size', 'shared',
        ]
        read_only_fields = fields

    def get_download_url(self, obj):
        if obj.s3_key:
            return generate_presigned_url_for_key(obj.s3_key)
        return None


class DocumentDetailsSerializer(serializers.Serializer):
    """Optional metadata sent alongside an upload. Anything missing is filled from extraction."""
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=Document.TYPE_CHOICES, required=False)
    provider = serializers.CharField(max_length=255, required=False, allow_blank=True)
    policy_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    premium = serializers.CharField(max_length=100, required=False, allow_blank=True)
    due_date = serializers.DateField(required=False, allow_null=True)


class DocumentUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    type = serializers.ChoiceField(choices=Document.TYPE_CHOICES, required=False)
    provider = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    policy_number = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    premium = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    due_date = serializers.DateField(required=False, allow_null=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be empty.")
        return value


class DocumentEditSerializer(serializers.ModelSerializer):
    editor_id = serializers.UUIDField(source='editor.id', read_only=True, default=None)

    class Meta:
        model = DocumentEdit
        fields = ['id', 'document', 'editor_id', 'edit_type', 'previous_value', 'new_value', 'edited_at']
