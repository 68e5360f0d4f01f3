import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Document',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('type', models.CharField(choices=[('Health', 'Health'), ('Auto', 'Auto'), ('Life', 'Life'), ('Home', 'Home'), ('General', 'General'), ('Other', 'Other')], default='General', max_length=20)),
                ('provider', models.CharField(blank=True, default='', max_length=255)),
                ('policy_number', models.CharField(blank=True, default='', max_length=100)),
                ('premium_amount', models.CharField(blank=True, default='', max_length=100)),
                ('coverage_amount', models.CharField(blank=True, default='', max_length=100)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('file_url', models.CharField(blank=True, default='', max_length=1000)),
                ('s3_key', models.CharField(blank=True, default='', max_length=500)),
                ('file_type', models.CharField(blank=True, default='', max_length=100)),
                ('file_size', models.BigIntegerField(default=0)),
                ('upload_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('shared', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documents', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'documents',
                'ordering': ['-upload_date'],
                'indexes': [models.Index(fields=['owner', 'upload_date'], name='documents_owner_upload_idx')],
            },
        ),
        migrations.CreateModel(
            name='DocumentEdit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('edit_type', models.CharField(choices=[('update', 'Update')], default='update', max_length=20)),
                ('previous_value', models.JSONField(blank=True, null=True)),
                ('new_value', models.JSONField(default=dict)),
                ('edited_at', models.DateTimeField(auto_now_add=True)),
                ('document', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='edits', to='documents.document')),
                ('editor', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='document_edits', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'document_edits',
                'ordering': ['-edited_at'],
            },
        ),
    ]
