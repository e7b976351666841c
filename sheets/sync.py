# sheets/sync.py
import logging
import time
from dataclasses import dataclass

from django.utils import timezone
from gspread.utils import rowcol_to_a1

from .errors import EXTERNAL_ERRORS, SheetSyncError, classify
from .layout import (
    FIRST_DATA_ROW,
    GROUP_WIDTH,
    HEADER_ROWS,
    METRIC_OFFSETS,
    NAME_COLUMN,
    SUB_LABELS,
    build_matrix,
    date_label,
    find_column_group,
    find_player_row,
    header_rows,
    next_group_column,
    next_player_row,
    season_dates,
    season_label,
    season_start,
)

logger = logging.getLogger(__name__)

MIN_GRID_ROWS = 100
HEADER_COLOR = {'red': 0.85, 'green': 0.89, 'blue': 0.95}


@dataclass
class CellUpdate:
    sheet: str
    row: int
    column: int
    cells_written: int
    created_column: bool
    created_row: bool


@dataclass
class RebuildResult:
    sheet: str
    players_count: int
    entries_count: int
    dates_count: int
    formatted: bool


class SheetSync:
    """
    Projects daily entries onto the season tab of a spreadsheet.

    Stateless between calls: row and column positions are read back from the
    sheet every time, so manual edits between syncs are tolerated. Two modes:
    ``sync_entry`` patches one player's cells for one date and
    ``rebuild_season`` rewrites the whole tab.
    """

    def __init__(self, client, config, sleep=time.sleep, clock=time.monotonic):
        self.client = client
        self.config = config
        self._sleep = sleep
        self._clock = clock
        self._deadline = None

    def tab_name(self, today=None):
        today = today or timezone.localdate()
        return season_label(today, self.config.season_start_month, self.config.tab_prefix)

    # ---- Incremental ----
    def sync_entry(self, player_name, entry_date, metrics, today=None):
        """
        Write the provided metrics of one player for one date.

        Finds (or appends) the date's column group and the player's row;
        metrics that are absent or None leave their cells untouched. All cell
        writes go out in one batch, which the API does not apply atomically.
        """
        self._begin()
        tab = self.tab_name(today)
        if not self._call(self.client.tab_exists, tab):
            raise SheetSyncError(SheetSyncError.TAB_MISSING, tab)

        staged = []
        headers = self._call(self.client.read_range, tab, f'1:{HEADER_ROWS}')
        top = headers[0] if headers else []
        subs = headers[1] if len(headers) > 1 else []

        label = date_label(entry_date, self.config.locale)
        column = find_column_group(top, label)
        created_column = column is None
        if created_column:
            column = next_group_column(top, subs)
            staged.append((rowcol_to_a1(1, column), [[label]]))
            staged.append((rowcol_to_a1(2, column), [SUB_LABELS]))

        names = self._call(self.client.read_range, tab, f'A{FIRST_DATA_ROW}:A')
        row = find_player_row(names, player_name)
        created_row = row is None
        if created_row:
            row = next_player_row(names)
            staged.append((rowcol_to_a1(row, NAME_COLUMN), [[player_name]]))

        cells = 0
        for name, value in metrics.items():
            if name not in METRIC_OFFSETS or value is None:
                continue
            staged.append((rowcol_to_a1(row, column + METRIC_OFFSETS[name]), [[value]]))
            cells += 1

        if staged:
            self._ensure_grid(tab, row, column + GROUP_WIDTH - 1)
            self._call(self.client.batch_write, tab, staged)

        logger.info(
            "Synced %s on %s to %s (row %d, column %d, %d cells)",
            player_name, entry_date, tab, row, column, cells,
        )
        return CellUpdate(tab, row, column, cells, created_column, created_row)

    # ---- Full rebuild ----
    def rebuild_season(self, players, start=None, today=None):
        """
        Rewrite the season tab from ``players`` (a list of PlayerRow).

        Window runs from ``start`` (default: season start) to ``today``.
        Data is written first; formatting is best-effort.
        """
        self._begin()
        today = today or timezone.localdate()
        tab = self.tab_name(today)
        start = start or season_start(today, self.config.season_start_month)
        dates = season_dates(start, today)
        matrix = build_matrix(players, dates, self.config.locale)
        rows, cols = len(matrix), len(matrix[0])

        if self._call(self.client.tab_exists, tab):
            self._ensure_grid(tab, rows, cols)
            self._call(self.client.clear_range, tab)
        else:
            logger.info("Creating sheet tab %s", tab)
            self._call(self.client.add_tab, tab, max(rows, MIN_GRID_ROWS), cols)

        formatted = self._publish(tab, matrix, len(dates))
        entries = sum(1 for p in players for day in p.entries if start <= day <= today)
        logger.info(
            "Rebuilt %s: %d players, %d entries over %d days%s",
            tab, len(players), entries, len(dates), "" if formatted else " (unformatted)",
        )
        return RebuildResult(tab, len(players), entries, len(dates), formatted)

    def initialize_tab(self, today=None):
        """Create the season tab if needed and write the empty headers."""
        self._begin()
        tab = self.tab_name(today)
        if not self._call(self.client.tab_exists, tab):
            self._call(self.client.add_tab, tab, MIN_GRID_ROWS, 1 + GROUP_WIDTH)
        self._call(self.client.write_range, tab, 'A1', header_rows([], self.config.locale))
        self._call(self._format_quietly, tab, [], 1)
        return tab

    # ---- Writing ----
    def _publish(self, tab, matrix, dates_count):
        try:
            return self._call(self._write_formatted, tab, matrix, dates_count)
        except SheetSyncError as exc:
            if not exc.retryable:
                raise
            logger.warning("Formatted write to %s gave up (%s); writing plain values", tab, exc.message)
        try:
            self.client.write_range(tab, 'A1', matrix)
        except EXTERNAL_ERRORS as exc:
            raise classify(exc) from exc
        return False

    def _write_formatted(self, tab, matrix, dates_count):
        self.client.write_range(tab, 'A1', matrix)
        return self._format_quietly(tab, range(dates_count), len(matrix[0]))

    def _format_quietly(self, tab, groups, cols):
        # Transient errors propagate so the caller retries; anything else is
        # only cosmetic once the values are in.
        try:
            self.client.batch_update(self._format_requests(self.client.tab_id(tab), groups, cols))
        except EXTERNAL_ERRORS as exc:
            error = classify(exc)
            if error.retryable:
                raise
            logger.warning("Could not format %s: %s", tab, error.message)
            return False
        return True

    def _format_requests(self, sheet_id, groups, cols):
        header = {'sheetId': sheet_id, 'startRowIndex': 0, 'endRowIndex': HEADER_ROWS,
                  'startColumnIndex': 0, 'endColumnIndex': cols}
        requests = [
            {'unmergeCells': {'range': {**header, 'endRowIndex': 1}}},
            {'repeatCell': {
                'range': header,
                'cell': {'userEnteredFormat': {
                    'backgroundColor': HEADER_COLOR,
                    'horizontalAlignment': 'CENTER',
                    'textFormat': {'bold': True},
                }},
                'fields': 'userEnteredFormat(backgroundColor,horizontalAlignment,textFormat)',
            }},
        ]
        for index in groups:
            first = NAME_COLUMN + index * GROUP_WIDTH
            requests.append({'mergeCells': {
                'range': {**header, 'endRowIndex': 1,
                          'startColumnIndex': first, 'endColumnIndex': first + GROUP_WIDTH},
                'mergeType': 'MERGE_ALL',
            }})
        requests.append({'updateSheetProperties': {
            'properties': {'sheetId': sheet_id,
                           'gridProperties': {'frozenRowCount': HEADER_ROWS, 'frozenColumnCount': 1}},
            'fields': 'gridProperties(frozenRowCount,frozenColumnCount)',
        }})
        return requests

    def _ensure_grid(self, tab, rows, cols):
        current_rows, current_cols = self._call(self.client.grid_size, tab)
        requests = []
        sheet_id = None
        if rows > current_rows or cols > current_cols:
            sheet_id = self._call(self.client.tab_id, tab)
        if rows > current_rows:
            requests.append({'appendDimension': {
                'sheetId': sheet_id, 'dimension': 'ROWS', 'length': rows - current_rows,
            }})
        if cols > current_cols:
            requests.append({'appendDimension': {
                'sheetId': sheet_id, 'dimension': 'COLUMNS', 'length': cols - current_cols,
            }})
        if requests:
            self._call(self.client.batch_update, requests)

    # ---- Retries ----
    def _begin(self):
        self._deadline = self._clock() + self.config.timeout_seconds

    def _call(self, fn, *args):
        """
        Run one client call, retrying timeouts and 429/5xx with exponential
        backoff until the attempt cap or the time budget runs out.
        """
        delay = self.config.backoff_seconds
        attempt = 1
        while True:
            try:
                return fn(*args)
            except EXTERNAL_ERRORS as exc:
                error = classify(exc)
                if not error.retryable:
                    raise error from exc
                if attempt >= self.config.max_attempts:
                    logger.warning("%s failed after %d attempts: %s", fn.__name__, attempt, error.message)
                    raise error from exc
                if self._deadline is not None and self._clock() + delay > self._deadline:
                    raise SheetSyncError(SheetSyncError.TIMEOUT, "time budget exhausted") from exc
                logger.warning(
                    "%s failed (%s), retry %d/%d in %.1fs",
                    fn.__name__, error.kind, attempt, self.config.max_attempts - 1, delay,
                )
            self._sleep(delay)
            delay *= 2
            attempt += 1
