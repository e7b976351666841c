# sheets/services.py
import logging
import time

from django.db.models import Prefetch
from django.utils import timezone

from players.models import Player
from wellness.models import DailyEntry

from .client import create_spreadsheet, open_client
from .config import SheetsConfig
from .layout import PlayerRow, season_start
from .sync import SheetSync

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "CONTROL CARGA TQR-RPE"


def get_sync(spreadsheet_id=None, config=None):
    config = config or SheetsConfig.from_settings()
    return SheetSync(open_client(config, spreadsheet_id), config)


def player_rows(start, end):
    """Every player (by name) with their entries between start and end."""
    window = DailyEntry.objects.filter(entry_date__range=(start, end)).order_by('entry_date')
    players = Player.objects.order_by('name').prefetch_related(
        Prefetch('daily_entries', queryset=window, to_attr='window_entries')
    )
    return [
        PlayerRow(p.name, {e.entry_date: e.metrics() for e in p.window_entries})
        for p in players
    ]


def rebuild_from_store(spreadsheet_id=None, start_date=None, today=None, sync=None):
    started = time.monotonic()
    sync = sync or get_sync(spreadsheet_id)
    today = today or timezone.localdate()
    start = start_date or season_start(today, sync.config.season_start_month)
    result = sync.rebuild_season(player_rows(start, today), start=start, today=today)
    return {
        'sheet': result.sheet,
        'spreadsheet_url': sync.client.url,
        'players_count': result.players_count,
        'entries_count': result.entries_count,
        'dates_count': result.dates_count,
        'formatted': result.formatted,
        'duration_ms': int((time.monotonic() - started) * 1000),
    }


def push_entry(entry, fields=None, sync=None, today=None):
    """Send one stored entry (or just ``fields`` of it) in incremental mode."""
    metrics = entry.metrics()
    if fields is not None:
        metrics = {name: metrics[name] for name in fields}
    sync = sync or get_sync()
    return sync.sync_entry(entry.player.name, entry.entry_date, metrics, today=today)


def create_with_headers(title=None, config=None, today=None):
    config = config or SheetsConfig.from_settings()
    client = create_spreadsheet(config, title or DEFAULT_TITLE)
    tab = SheetSync(client, config).initialize_tab(today)
    return {
        'spreadsheet_id': client.spreadsheet_id,
        'spreadsheet_url': client.url,
        'sheet': tab,
    }
