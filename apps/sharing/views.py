import logging
import uuid

from django.db import transaction
from rest_framework import views, status, permissions
from rest_framework.response import Response

from apps.authentication.rate_limiting import (
    check_code_attempt_limit, increment_failed_attempts, clear_failed_attempts,
)
from apps.documents.models import Document
from .models import SharedAccess, InviteCode
from .serializers import InviteCodeSerializer, RedeemInviteSerializer, SharedAccessSerializer

logger = logging.getLogger(__name__)


class InviteCodeView(views.APIView):
    """
    GET /api/documents/{id}/invite-code/ — Current invite code
    POST /api/documents/{id}/invite-code/ — Generate a new code, replacing the old one
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        invite = InviteCode.objects.filter(document_id=pk, document__owner=request.user).first()
        if not invite:
            return Response({"error": "No invite code for this document."}, status=status.HTTP_404_NOT_FOUND)
        return Response(InviteCodeSerializer(invite).data)

    def post(self, request, pk):
        try:
            doc = Document.objects.get(id=pk, owner=request.user)
        except Document.DoesNotExist:
            return Response({"error": "Document not found."}, status=status.HTTP_404_NOT_FOUND)

        with transaction.atomic():
            InviteCode.objects.filter(document=doc).delete()
            invite = InviteCode.objects.create(
                code=InviteCode.generate_code(),
                owner=request.user,
                document=doc,
            )

        logger.info("Invite code generated for document %s by user_id=%s", doc.id, request.user.id)
        return Response(InviteCodeSerializer(invite).data, status=status.HTTP_201_CREATED)


class ShareAccessView(views.APIView):
    """POST /api/documents/{id}/share/ — Recipient redeems an invite code for read access."""
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        serializer = RedeemInviteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = request.user
        code = serializer.validated_data['invite_code']

        is_allowed, attempts_remaining, reset_time = check_code_attempt_limit(
            user.id, action='invite_code', max_attempts=5, window_minutes=10
        )
        if not is_allowed:
            return Response({
                "error": f"Too many failed attempts. Please try again in {reset_time} seconds."
            }, status=status.HTTP_429_TOO_MANY_REQUESTS)

        doc = Document.objects.select_related('owner').filter(id=pk).first()
        if doc and doc.owner_id == user.id:
            return Response({"error": "You already own this document."}, status=status.HTTP_400_BAD_REQUEST)

        # Unknown documents get the same answer as a bad code
        invite = InviteCode.objects.filter(code=code, document=doc).first() if doc else None
        if not invite or invite.is_expired:
            remaining = increment_failed_attempts(user.id, action='invite_code')
            logger.warning("Invalid invite code for document %s by user_id=%s", pk, user.id)
            return Response({
                "error": "Invalid or expired invite code.",
                "attempts_remaining": remaining,
            }, status=status.HTTP_400_BAD_REQUEST)

        with transaction.atomic():
            share, created = SharedAccess.objects.get_or_create(
                document=doc,
                shared_with=user,
                defaults={
                    'shared_by': doc.owner,
                    'user_name': user.name,
                }
            )
            doc.refresh_shared_flag()

        clear_failed_attempts(user.id, action='invite_code')

        if not created:
            return Response({
                "message": "You already have access to this document.",
                "share": SharedAccessSerializer(share).data,
            }, status=status.HTTP_200_OK)

        logger.info("Document %s shared with user_id=%s", doc.id, user.id)
        return Response({
            "message": "Document access granted.",
            "share": SharedAccessSerializer(share).data,
        }, status=status.HTTP_201_CREATED)


class RevokeAccessView(views.APIView):
    """DELETE /api/documents/{id}/share/{user_id}/ — Owner revokes a grant."""
    permission_classes = [permissions.IsAuthenticated]

    def delete(self, request, pk, user_id):
        try:
            doc = Document.objects.get(id=pk, owner=request.user)
        except Document.DoesNotExist:
            return Response({"error": "Document not found."}, status=status.HTTP_404_NOT_FOUND)

        with transaction.atomic():
            deleted, _ = SharedAccess.objects.filter(document=doc, shared_with_id=user_id).delete()
            if not deleted:
                return Response({"error": "No access found for this user."}, status=status.HTTP_404_NOT_FOUND)
            doc.refresh_shared_flag()

        logger.info("Access to document %s revoked for user_id=%s", doc.id, user_id)
        return Response({"message": "Access revoked.", "shared": doc.shared})


class UsersWithAccessView(views.APIView):
    """GET /api/sharing/access/ — Grants on the caller's documents, ?document=<id> to narrow."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        shares = SharedAccess.objects.filter(
            document__owner=request.user
        ).select_related('document', 'shared_with')

        document_id = request.query_params.get('document')
        if document_id:
            try:
                uuid.UUID(document_id)
            except ValueError:
                return Response({"error": "Invalid document id."}, status=status.HTTP_400_BAD_REQUEST)
            shares = shares.filter(document_id=document_id)

        return Response(SharedAccessSerializer(shares, many=True).data)
