from datetime import date

from django.core.management.base import BaseCommand, CommandError

from sheets.errors import SheetSyncError
from sheets.services import rebuild_from_store


class Command(BaseCommand):
    help = "Rebuild the season tab of the spreadsheet from the database."

    def add_arguments(self, parser):
        parser.add_argument('--spreadsheet-id', default=None)
        parser.add_argument('--start-date', type=date.fromisoformat, default=None,
                            help="First date to include (YYYY-MM-DD); defaults to the season start")

    def handle(self, *args, **options):
        try:
            summary = rebuild_from_store(
                spreadsheet_id=options['spreadsheet_id'],
                start_date=options['start_date'],
            )
        except SheetSyncError as exc:
            raise CommandError(f"[{exc.kind}] {exc.message}") from exc

        self.stdout.write(self.style.SUCCESS(
            f"Synced {summary['players_count']} players / {summary['entries_count']} entries "
            f"over {summary['dates_count']} days to '{summary['sheet']}' in {summary['duration_ms']} ms"
        ))
        if not summary['formatted']:
            self.stdout.write(self.style.WARNING("Data written without formatting."))
        self.stdout.write(summary['spreadsheet_url'])
