import uuid

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.utils.translation import gettext_lazy as _


class UserManager(BaseUserManager):
    def create_user(self, phone, password=None, **extra_fields):
        if not phone:
            raise ValueError('The phone number must be set')
        user = self.model(phone=phone, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, phone, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        return self.create_user(phone, password, **extra_fields)


class User(AbstractUser):
    """A registered DocuVault profile. Users log in with phone + OTP."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    username = None  # Disable username field
    name = models.CharField(_('name'), max_length=255, blank=True, default='')
    phone = models.CharField(_('phone number'), max_length=20, unique=True)
    email = models.EmailField(_('email address'), null=True, blank=True)
    age = models.PositiveIntegerField(null=True, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'phone'
    REQUIRED_FIELDS = []

    objects = UserManager()

    def __str__(self):
        return f"{self.name or 'Unnamed'} ({self.phone})"
