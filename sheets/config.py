# sheets/config.py
from dataclasses import dataclass

from django.conf import settings

SCOPES = (
    'https://www.googleapis.com/auth/spreadsheets',
    'https://www.googleapis.com/auth/drive',
)


@dataclass(frozen=True)
class SheetsConfig:
    """Everything the sync adapter needs, resolved once from settings."""
    service_account_email: str = ''
    private_key: str = ''
    spreadsheet_id: str = ''
    drive_folder_id: str = ''
    share_with: str = ''
    season_start_month: int = 7
    tab_prefix: str = 'TEMPORADA'
    locale: str = 'es'
    max_attempts: int = 5
    backoff_seconds: float = 1.0
    timeout_seconds: float = 45.0
    sync_on_submit: bool = False

    @classmethod
    def from_settings(cls, **overrides):
        values = dict(
            service_account_email=settings.GOOGLE_SERVICE_ACCOUNT_EMAIL.strip(),
            private_key=settings.GOOGLE_PRIVATE_KEY.replace('\\n', '\n'),
            spreadsheet_id=settings.GOOGLE_SPREADSHEET_ID.strip(),
            drive_folder_id=settings.GOOGLE_DRIVE_FOLDER_ID.strip(),
            share_with=settings.GOOGLE_SHARE_WITH.strip(),
            season_start_month=settings.SHEETS_SEASON_START_MONTH,
            tab_prefix=settings.SHEETS_TAB_PREFIX,
            locale=settings.SHEETS_LOCALE,
            max_attempts=max(1, settings.SHEETS_MAX_ATTEMPTS),
            backoff_seconds=settings.SHEETS_BACKOFF_SECONDS,
            timeout_seconds=settings.SHEETS_TIMEOUT_SECONDS,
            sync_on_submit=settings.SHEETS_SYNC_ON_SUBMIT,
        )
        values.update({k: v for k, v in overrides.items() if v not in (None, '')})
        return cls(**values)

    @property
    def has_credentials(self):
        return bool(self.service_account_email and self.private_key)

    def service_account_info(self):
        return {
            'type': 'service_account',
            'client_email': self.service_account_email,
            'private_key': self.private_key,
            'token_uri': 'https://oauth2.googleapis.com/token',
        }
