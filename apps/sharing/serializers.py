from rest_framework import serializers

from .models import SharedAccess, InviteCode


class InviteCodeSerializer(serializers.ModelSerializer):
    document_id = serializers.UUIDField(source='document.id', read_only=True)
    is_expired = serializers.BooleanField(read_only=True)

    class Meta:
        model = InviteCode
        fields = ['code', 'document_id', 'created_at', 'expires_at', 'is_expired']


class RedeemInviteSerializer(serializers.Serializer):
    invite_code = serializers.CharField(max_length=16)

    def validate_invite_code(self, value):
        value = value.strip().upper()
        if not value:
            raise serializers.ValidationError("Invite code is required.")
        return value


class SharedAccessSerializer(serializers.ModelSerializer):
    document_id = serializers.UUIDField(source='document.id', read_only=True)
    document_name = serializers.CharField(source='document.name', read_only=True)
    user_id = serializers.UUIDField(source='shared_with.id', read_only=True)
    access_granted_date = serializers.DateTimeField(source='shared_at', read_only=True)

    class Meta:
        model = SharedAccess
        fields = ['id', 'document_id', 'document_name', 'user_id', 'user_name', 'access_granted_date']
