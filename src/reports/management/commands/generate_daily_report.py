"""Regenerate the daily report for one shift date from the command line."""
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from reports.exceptions import ReportError
from reports.services import run_report_pipeline
from reports.tasks import previous_shift_date


class Command(BaseCommand):
    help = "Compile, store and optionally email the daily report for a shift date (default: yesterday)"

    def add_arguments(self, parser):
        parser.add_argument("--date", dest="shift_date", help="Shift date as YYYY-MM-DD")
        parser.add_argument("--send-email", action="store_true", help="Email the report to DAILY_REPORT_RECIPIENTS")

    def handle(self, *args, **options):
        raw_date = options.get("shift_date")
        if raw_date:
            try:
                shift_date = date.fromisoformat(raw_date)
            except ValueError as exc:
                raise CommandError(f"Invalid --date {raw_date!r}; expected YYYY-MM-DD.") from exc
        else:
            shift_date = previous_shift_date()

        try:
            run = run_report_pipeline(shift_date, send_email=options["send_email"])
        except ReportError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(self.style.SUCCESS(
            f"Daily report {run.report_id} saved for {shift_date}"
            f"{' and emailed' if run.emailed else ''}."
        ))
