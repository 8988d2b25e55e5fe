import json
from pathlib import Path

from django.core.management.base import BaseCommand
from django.core.management.base import CommandError

from confapp.audit.utils import log_action
from confapp.schedule.services import ScheduleSyncError
from confapp.schedule.services import store_snapshot
from confapp.schedule.services import synchronize_with_sessionize


class Command(BaseCommand):
    help = "Import the conference schedule from Sessionize or a local JSON file."

    def add_arguments(self, parser):
        parser.add_argument(
            "--url",
            help="Sessionize 'all' endpoint (defaults to SESSIONIZE_URL)",
        )
        parser.add_argument(
            "--file",
            help="Path to a saved Sessionize JSON document",
        )

    def handle(self, *args, **options):
        path = options.get("file")
        try:
            if path:
                try:
                    document = json.loads(Path(path).read_text(encoding="utf-8"))
                except (OSError, json.JSONDecodeError) as exc:
                    msg = f"Cannot read {path}: {exc}"
                    raise CommandError(msg) from exc
                snapshot = store_snapshot(document, source_url=f"file:{path}")
            else:
                snapshot = synchronize_with_sessionize(options.get("url"))
        except ScheduleSyncError as exc:
            raise CommandError(str(exc)) from exc

        sessions = len(snapshot.document.get("sessions", []))
        log_action(
            "schedule_synchronized",
            message=f"source={snapshot.source_url} sessions={sessions}",
        )
        self.stdout.write(
            self.style.SUCCESS(f"Imported {sessions} sessions (snapshot {snapshot.pk})")
        )
