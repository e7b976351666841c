# sheets/receivers.py
import logging

from django.dispatch import receiver

from wellness.signals import entry_saved

from .config import SheetsConfig
from .errors import SheetSyncError
from .services import get_sync, push_entry

logger = logging.getLogger(__name__)


@receiver(entry_saved, dispatch_uid='sheets.push_submission')
def push_submission(sender, player, entry, fields, **kwargs):
    """Mirror a submission into the spreadsheet. Best-effort: never fails the request."""
    config = SheetsConfig.from_settings()
    if not (config.sync_on_submit and fields):
        return
    if not (config.has_credentials and config.spreadsheet_id):
        logger.debug("Sync on submit enabled but Google Sheets is not configured")
        return
    try:
        push_entry(entry, fields, sync=get_sync(config=config))
    except SheetSyncError as exc:
        logger.warning("Sheet sync for %s on %s failed: %s", player.name, entry.entry_date, exc.message)
