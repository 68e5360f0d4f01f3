from django.apps import AppConfig


class SharingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.sharing'
    label = 'sharing'
