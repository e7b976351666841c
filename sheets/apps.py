from django.apps import AppConfig


class SheetsAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'sheets'
    verbose_name = 'Google Sheets sync'

    def ready(self):
        from . import checks, receivers  # noqa: F401
