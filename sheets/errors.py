# sheets/errors.py
import requests
from google.auth.exceptions import RefreshError, TransportError
from gspread.exceptions import APIError, SpreadsheetNotFound, WorksheetNotFound

TRANSIENT_STATUSES = {429, 500, 502, 503, 504}


class SheetSyncError(Exception):
    """
    A spreadsheet failure classified into something an admin can act on.
    ``kind`` is one of the constants below; ``message`` is human readable.
    """
    NOT_CONFIGURED = 'not_configured'
    PERMISSION_DENIED = 'permission_denied'
    NOT_FOUND = 'not_found'
    TAB_MISSING = 'tab_missing'
    TIMEOUT = 'timeout'
    UNAVAILABLE = 'unavailable'
    OTHER = 'other'

    MESSAGES = {
        NOT_CONFIGURED: "Google Sheets is not configured: set the service account and spreadsheet id.",
        PERMISSION_DENIED: "Permission denied: share the spreadsheet with the service account as an editor.",
        NOT_FOUND: "Spreadsheet not found: check the spreadsheet id.",
        TAB_MISSING: "Spreadsheet tab not found: create it first (run a full sync).",
        TIMEOUT: "Google Sheets did not answer in time: try again in a moment.",
        UNAVAILABLE: "Google Sheets is temporarily unavailable: try again in a moment.",
        OTHER: "Google Sheets rejected the request.",
    }
    RETRYABLE = frozenset({TIMEOUT, UNAVAILABLE})

    def __init__(self, kind, detail=''):
        self.kind = kind
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self):
        base = self.MESSAGES.get(self.kind, self.MESSAGES[self.OTHER])
        return f"{base} ({self.detail})" if self.detail else base

    @property
    def retryable(self):
        return self.kind in self.RETRYABLE


def _status_of(exc):
    response = getattr(exc, 'response', None)
    status = getattr(response, 'status_code', None)
    if status is None:
        status = getattr(exc, 'code', None)
    return status


def classify(exc):
    """Map a gspread, google-auth or requests exception onto a SheetSyncError."""
    if isinstance(exc, SheetSyncError):
        return exc
    if isinstance(exc, WorksheetNotFound):
        return SheetSyncError(SheetSyncError.TAB_MISSING, str(exc))
    if isinstance(exc, SpreadsheetNotFound):
        return SheetSyncError(SheetSyncError.NOT_FOUND)
    if isinstance(exc, RefreshError):
        # Token exchange refused: revoked key, bad signature, disabled account
        return SheetSyncError(SheetSyncError.PERMISSION_DENIED, str(exc))
    if isinstance(exc, TransportError):
        return SheetSyncError(SheetSyncError.TIMEOUT, type(exc).__name__)
    if isinstance(exc, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
        return SheetSyncError(SheetSyncError.TIMEOUT, type(exc).__name__)
    if isinstance(exc, APIError):
        status = _status_of(exc)
        if status == 403:
            return SheetSyncError(SheetSyncError.PERMISSION_DENIED)
        if status == 404:
            return SheetSyncError(SheetSyncError.NOT_FOUND)
        if status in TRANSIENT_STATUSES:
            return SheetSyncError(SheetSyncError.UNAVAILABLE, f"HTTP {status}")
        if status == 400 and 'Unable to parse range' in str(exc):
            return SheetSyncError(SheetSyncError.TAB_MISSING)
        return SheetSyncError(SheetSyncError.OTHER, f"HTTP {status}")
    if isinstance(exc, requests.exceptions.RequestException):
        return SheetSyncError(SheetSyncError.OTHER, type(exc).__name__)
    raise TypeError(f"cannot classify {type(exc).__name__}")


# Exceptions the retry helper knows how to classify
EXTERNAL_ERRORS = (
    APIError, SpreadsheetNotFound, WorksheetNotFound,
    RefreshError, TransportError, requests.exceptions.RequestException,
)
