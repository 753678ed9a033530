"""
Management command: import_backup

Usage:
    python manage.py import_backup <snapshot_path> --owner <username>
        [--strategy skip|overwrite|merge] [--dry-run]

Imports a logbook backup (.json) into an account.
"""

import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from backup.exceptions import BackupError
from backup.preview import preview_snapshot
from backup.reconciler import run_backup_import
from backup.snapshot import validate_snapshot
from backup.strategies import STRATEGIES, STRATEGY_SKIP

User = get_user_model()


class Command(BaseCommand):
    help = "Import a logbook backup snapshot into an account."

    def add_arguments(self, parser):
        parser.add_argument(
            'snapshot_path',
            help="Path to the backup .json file to import.",
        )
        parser.add_argument(
            '--owner',
            required=True,
            help="Username of the account the records are imported into.",
        )
        parser.add_argument(
            '--strategy',
            choices=sorted(STRATEGIES),
            default=STRATEGY_SKIP,
            help="How to treat records that already exist (default: skip).",
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            default=False,
            help="Preview the snapshot without writing any records.",
        )

    def handle(self, *args, **options):
        snapshot_path = options['snapshot_path']
        username = options['owner']
        strategy = options['strategy']

        if not os.path.exists(snapshot_path):
            raise CommandError(f"Backup file not found: {snapshot_path}")

        try:
            owner = User.objects.get(username=username)
        except User.DoesNotExist:
            raise CommandError(f"User '{username}' not found.")

        with open(snapshot_path, 'rb') as fh:
            raw = fh.read()

        self.stdout.write(f"Validating {snapshot_path}…")

        if options['dry_run']:
            try:
                preview = preview_snapshot(owner, raw, file_name=os.path.basename(snapshot_path))
            except BackupError as exc:
                raise CommandError(f"Validation failed: {exc}") from exc
            backup = preview['backup']
            self.stdout.write(
                f"Backup version {backup['version']} exported {backup['exportDate']} by {backup['userEmail']}"
            )
            for key, count in preview['content'].items():
                duplicates = preview['potential_duplicates'].get(key)
                suffix = f" ({duplicates} already present)" if duplicates else ""
                self.stdout.write(f"  {key}: {count}{suffix}")
            self.stdout.write(self.style.SUCCESS("Dry run complete, no records written."))
            return

        try:
            snapshot = validate_snapshot(raw)
            self.stdout.write(f"Importing into '{owner.username}' with strategy '{strategy}'…")
            summary = run_backup_import(owner, snapshot, strategy, file_name=os.path.basename(snapshot_path))
        except BackupError as exc:
            raise CommandError(f"Import failed: {exc}") from exc

        result = summary.to_dict()
        for key, tally in result['results'].items():
            self.stdout.write(
                f"  {key}: {tally['imported']} imported, {tally['updated']} updated, "
                f"{tally['skipped']} skipped, {len(tally['errors'])} errors"
            )
            for error in tally['errors']:
                self.stderr.write(f"  [ERROR] {error}")

        totals = result['totals']
        message = (
            f"Import complete. {totals['imported']} imported, {totals['updated']} updated, "
            f"{totals['skipped']} skipped, {totals['errors']} errors."
        )
        if totals['errors']:
            self.stdout.write(self.style.WARNING(message))
        else:
            self.stdout.write(self.style.SUCCESS(message))
