"""
Django management command to delete expired document invite codes.
Run this command periodically via cron (e.g., every hour).

Usage:
    python manage.py cleanup_expired_codes
"""
from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.sharing.models import InviteCode


class Command(BaseCommand):
    help = 'Delete expired document invite codes'

    def handle(self, *args, **options):
        expired = InviteCode.objects.filter(expires_at__lt=timezone.now())
        count, _ = expired.delete()

        if count == 0:
            self.stdout.write(self.style.SUCCESS('No expired codes found'))
        else:
            self.stdout.write(self.style.SUCCESS(f'Deleted {count} expired invite codes'))
