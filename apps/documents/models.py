"""
Document models.
"""
from django.db import models
from django.conf import settings
from django.utils import timezone
import uuid


class Document(models.Model):
    """An insurance policy file plus its extracted or user-entered metadata."""
    TYPE_CHOICES = (
        ('Health', 'Health'),
        ('Auto', 'Auto'),
        ('Life', 'Life'),
        ('Home', 'Home'),
        ('General', 'General'),
        ('Other', 'Other'),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='documents'
    )

    name = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='General')
    provider = models.CharField(max_length=255, blank=True, default='')
    policy_number = models.CharField(max_length=100, blank=True, default='')
    # Free text, e.g. "$150/month"
    premium_amount = models.CharField(max_length=100, blank=True, default='')
    coverage_amount = models.CharField(max_length=100, blank=True, default='')
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)

    # S3 storage info
    file_url = models.CharField(max_length=1000, blank=True, default='')
    s3_key = models.CharField(max_length=500, blank=True, default='')
    file_type = models.CharField(max_length=100, blank=True, default='')
    file_size = models.BigIntegerField(default=0)
    upload_date = models.DateTimeField(default=timezone.now)

    # Derived from SharedAccess rows, see refresh_shared_flag()
    shared = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'documents'
        ordering = ['-upload_date']
        indexes = [
            models.Index(fields=['owner', 'upload_date'], name='documents_owner_upload_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.owner})"

    def refresh_shared_flag(self):
        """Recompute `shared` from the grants table and persist it."""
        shared = self.shares.exists()
        Document.objects.filter(pk=self.pk).update(shared=shared, updated_at=timezone.now())
        self.shared = shared
        return shared


class DocumentEdit(models.Model):
    """Audit row appended for each owner edit."""
    EDIT_TYPE_CHOICES = (
        ('update', 'Update'),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    document = models.ForeignKey(Document, on_delete=models.CASCADE, related_name='edits')
    editor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='document_edits'
    )
    edit_type = models.CharField(max_length=20, choices=EDIT_TYPE_CHOICES, default='update')
    previous_value = models.JSONField(null=True, blank=True)
    new_value = models.JSONField(default=dict)
    edited_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'document_edits'
        ordering = ['-edited_at']

    def __str__(self):
        return f"{self.edit_type}: {self.document_id}"
