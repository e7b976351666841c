# sheets/client.py
import logging

import gspread
from google.oauth2.service_account import Credentials
from gspread.utils import absolute_range_name

from .config import SCOPES
from .errors import EXTERNAL_ERRORS, SheetSyncError, classify

logger = logging.getLogger(__name__)


def spreadsheet_url(spreadsheet_id):
    return f"https://docs.google.com/spreadsheets/d/{spreadsheet_id}/edit"


class SheetClient:
    """
    The few spreadsheet operations the sync adapter relies on.

    Tabs are addressed by title and ranges by A1 notation relative to the
    tab. Implementations raise the underlying gspread/requests exceptions;
    classification and retries happen in the adapter.
    """
    spreadsheet_id = ''

    @property
    def url(self):
        return spreadsheet_url(self.spreadsheet_id)

    def tab_exists(self, tab):
        raise NotImplementedError

    def add_tab(self, tab, rows, cols):
        raise NotImplementedError

    def tab_id(self, tab):
        raise NotImplementedError

    def grid_size(self, tab):
        """(row_count, column_count) of the tab's grid."""
        raise NotImplementedError

    def read_range(self, tab, a1):
        """Rows of cell values; trailing empty rows and cells are trimmed."""
        raise NotImplementedError

    def write_range(self, tab, a1, values):
        raise NotImplementedError

    def batch_write(self, tab, updates):
        """Write several (a1, values) pairs in one request."""
        raise NotImplementedError

    def batch_update(self, requests):
        """Raw spreadsheets.batchUpdate requests (formatting, resizing)."""
        raise NotImplementedError

    def clear_range(self, tab, a1=None):
        """Clear values in ``a1``, or in the whole tab when omitted."""
        raise NotImplementedError


class GspreadSheetClient(SheetClient):
    # Values are written RAW so date labels like "21-jul" stay text
    VALUE_INPUT = 'RAW'

    def __init__(self, spreadsheet):
        self.spreadsheet = spreadsheet
        self.spreadsheet_id = spreadsheet.id

    def _worksheet(self, tab):
        return self.spreadsheet.worksheet(tab)

    def tab_exists(self, tab):
        return any(ws.title == tab for ws in self.spreadsheet.worksheets())

    def add_tab(self, tab, rows, cols):
        self.spreadsheet.add_worksheet(title=tab, rows=rows, cols=cols)

    def tab_id(self, tab):
        return self._worksheet(tab).id

    def grid_size(self, tab):
        ws = self._worksheet(tab)
        return ws.row_count, ws.col_count

    def read_range(self, tab, a1):
        return self.spreadsheet.values_get(absolute_range_name(tab, a1)).get('values', [])

    def write_range(self, tab, a1, values):
        self.spreadsheet.values_update(
            absolute_range_name(tab, a1),
            params={'valueInputOption': self.VALUE_INPUT},
            body={'values': values},
        )

    def batch_write(self, tab, updates):
        self.spreadsheet.values_batch_update(body={
            'valueInputOption': self.VALUE_INPUT,
            'data': [
                {'range': absolute_range_name(tab, a1), 'values': values}
                for a1, values in updates
            ],
        })

    def batch_update(self, requests):
        self.spreadsheet.batch_update({'requests': requests})

    def clear_range(self, tab, a1=None):
        self.spreadsheet.values_clear(absolute_range_name(tab, a1))


# ---- Connecting ----
def authorize(config):
    if not config.has_credentials:
        raise SheetSyncError(SheetSyncError.NOT_CONFIGURED, "missing service account credentials")
    try:
        credentials = Credentials.from_service_account_info(
            config.service_account_info(), scopes=list(SCOPES),
        )
    except ValueError as exc:
        raise SheetSyncError(SheetSyncError.NOT_CONFIGURED, "unreadable private key") from exc
    gc = gspread.authorize(credentials)
    # Per-request timeout; a stalled call then raises requests Timeout
    gc.set_timeout(config.timeout_seconds)
    return gc


def open_client(config, spreadsheet_id=None):
    """Open the target spreadsheet (``spreadsheet_id`` or the configured one)."""
    key = spreadsheet_id or config.spreadsheet_id
    if not key:
        raise SheetSyncError(SheetSyncError.NOT_CONFIGURED, "missing spreadsheet id")
    gc = authorize(config)
    try:
        return GspreadSheetClient(gc.open_by_key(key))
    except EXTERNAL_ERRORS as exc:
        raise classify(exc) from exc


def create_spreadsheet(config, title):
    """
    Create a new spreadsheet, inside the configured Drive folder when there
    is one, and share it with the configured address.
    """
    gc = authorize(config)
    try:
        spreadsheet = gc.create(title, folder_id=config.drive_folder_id or None)
        if config.share_with:
            spreadsheet.share(config.share_with, perm_type='user', role='writer', notify=False)
    except EXTERNAL_ERRORS as exc:
        raise classify(exc) from exc
    logger.info("Created spreadsheet %r (%s)", title, spreadsheet.id)
    return GspreadSheetClient(spreadsheet)
