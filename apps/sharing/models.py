"""
Sharing models.
"""
import secrets
import string
import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.documents.models import Document


class SharedAccess(models.Model):
    """Read access granted to one user on one document."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    document = models.ForeignKey(Document, on_delete=models.CASCADE, related_name='shares')
    shared_with = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='received_shares'
    )
    shared_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='granted_shares'
    )
    user_name = models.CharField(max_length=255, blank=True, default='')
    shared_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'shared_documents'
        ordering = ['-shared_at']
        unique_together = ('document', 'shared_with')

    def __str__(self):
        return f"{self.document_id} -> {self.shared_with_id}"


def default_invite_expiry():
    return timezone.now() + timedelta(seconds=settings.INVITE_CODE_EXPIRY)


class InviteCode(models.Model):
    """Short code the owner hands out so a recipient can claim access to a document."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=16, unique=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='invite_codes'
    )
    document = models.OneToOneField(Document, on_delete=models.CASCADE, related_name='invite_code')
    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField(default=default_invite_expiry)

    class Meta:
        db_table = 'invite_codes'

    def __str__(self):
        return f"{self.code} ({self.document_id})"

    @property
    def is_expired(self):
        return timezone.now() > self.expires_at

    @staticmethod
    def generate_code(length=None):
        """Uppercase alphanumeric code not used by any stored invite."""
        length = length or settings.INVITE_CODE_LENGTH
        alphabet = string.ascii_uppercase + string.digits
        while True:
            code = ''.join(secrets.choice(alphabet) for _ in range(length))
            if not InviteCode.objects.filter(code=code).exists():
                return code
