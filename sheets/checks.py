# sheets/checks.py
from django.core import checks
from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from .config import SheetsConfig


@checks.register()
def google_sheets_settings(app_configs, **kwargs):
    config = SheetsConfig.from_settings()
    messages = []

    if not (config.has_credentials and config.spreadsheet_id):
        messages.append(checks.Warning(
            "Google Sheets sync is not fully configured.",
            hint="Set GOOGLE_SERVICE_ACCOUNT_EMAIL, GOOGLE_PRIVATE_KEY and GOOGLE_SPREADSHEET_ID.",
            id='sheets.W001',
        ))

    if config.service_account_email:
        try:
            validate_email(config.service_account_email)
        except ValidationError:
            messages.append(checks.Error(
                "GOOGLE_SERVICE_ACCOUNT_EMAIL is not an email address.",
                id='sheets.E001',
            ))

    if config.private_key and 'PRIVATE KEY-----' not in config.private_key:
        messages.append(checks.Error(
            "GOOGLE_PRIVATE_KEY does not look like a PEM private key.",
            hint="Paste the private_key value of the service account JSON, keeping the BEGIN/END lines.",
            id='sheets.E002',
        ))

    if not 1 <= config.season_start_month <= 12:
        messages.append(checks.Error(
            "SHEETS_SEASON_START_MONTH must be between 1 and 12.",
            id='sheets.E003',
        ))

    return messages
