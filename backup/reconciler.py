"""
Backup import — reconciles a validated snapshot against the owner's live records.

Public API:
    BackupReconciler(owner, strategy).run(snapshot) → ImportSummary
        Processes aircraft, crew members, flights and flight roles in that
        order, one record at a time. Each record commits on its own; a failed
        record is reported and the run moves on.

    run_backup_import(owner, snapshot, strategy, file_name='') → ImportSummary
        Same, wrapped in a BackupImport job that refuses to start while
        another import for the same owner is running.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from backup.duplicates import find_existing
from backup.entities import AIRCRAFT, CREW_MEMBER, ENTITY_TYPES, FLIGHT, FLIGHT_ROLE, as_uuid
from backup.exceptions import ImportInProgressError, RecordError
from backup.identity import IdentityMap
from backup.strategies import (
    IMPORTED, SKIPPED, UPDATED, apply_strategy, check_strategy, create_record,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 60 * 60  # seconds


@dataclass
class EntityTally:
    """Per-entity-type counters."""
    imported: int = 0
    updated: int = 0
    skipped: int = 0
    errors: List[str] = field(default_factory=list)

    def count(self, outcome):
        setattr(self, outcome, getattr(self, outcome) + 1)

    def to_dict(self):
        return {
            'imported': self.imported,
            'updated': self.updated,
            'skipped': self.skipped,
            'errors': list(self.errors),
        }


@dataclass
class ImportSummary:
    backup_date: str = ''
    backup_email: str = ''
    results: Dict[str, EntityTally] = field(
        default_factory=lambda: {entity.key: EntityTally() for entity in ENTITY_TYPES}
    )

    @property
    def totals(self):
        tallies = self.results.values()
        return {
            'imported': sum(t.imported for t in tallies),
            'updated': sum(t.updated for t in tallies),
            'skipped': sum(t.skipped for t in tallies),
            'errors': sum(len(t.errors) for t in tallies),
        }

    def to_dict(self):
        # success means "the import ran"; callers check totals['errors']
        return {
            'success': True,
            'backupDate': self.backup_date,
            'backupEmail': self.backup_email,
            'results': {key: tally.to_dict() for key, tally in self.results.items()},
            'totals': self.totals,
        }


class BackupReconciler:
    """Applies one snapshot to one owner's records with one strategy."""

    def __init__(self, owner, strategy):
        self.owner = owner
        self.strategy = check_strategy(strategy)
        self.id_maps = IdentityMap.for_run()

    def run(self, snapshot, heartbeat=None):
        """
        Import snapshot and return an ImportSummary. heartbeat, if given, is
        called after every record so a caller can show the run is alive.
        """
        self.id_maps = IdentityMap.for_run()
        summary = ImportSummary(
            backup_date=snapshot.get('exportDate') or '',
            backup_email=snapshot.get('userEmail') or '',
        )
        data = snapshot['data']
        logger.info(
            "Backup import for %s started (strategy=%s, %s)",
            self.owner, self.strategy,
            ', '.join(f"{len(data.get(e.key) or [])} {e.key}" for e in ENTITY_TYPES),
        )

        for entity in ENTITY_TYPES:
            tally = summary.results[entity.key]
            for record in data.get(entity.key) or []:
                self._process(entity, record, tally)
                if heartbeat is not None:
                    heartbeat()

        logger.info("Backup import for %s finished: %s", self.owner, summary.totals)
        return summary

    # ------------------------------------------------------------------
    # Per-record processing
    # ------------------------------------------------------------------

    def _process(self, entity, record, tally):
        ident = entity.describe(record) if isinstance(record, dict) else '?'
        try:
            with transaction.atomic():
                outcome = self._reconcile(entity, record, ident)
        except RecordError as exc:
            logger.warning("Backup import: %s", exc, exc_info=True)
            tally.errors.append(str(exc))
            return
        except Exception as exc:
            logger.warning("Backup import: error processing %s %s", entity.label, ident, exc_info=True)
            tally.errors.append(f"Error processing {entity.label} {ident}: {exc}")
            return
        tally.count(outcome)

    def _reconcile(self, entity, record, ident):
        if not isinstance(record, dict):
            raise RecordError(f"Error processing {entity.label}: record is not an object")

        candidate = entity.candidate(record)

        if entity is FLIGHT:
            candidate['aircraft_id'] = self._resolve_aircraft(record.get('aircraft_id'))
        elif entity is FLIGHT_ROLE:
            candidate['flight_id'] = self.id_maps[FLIGHT.key].resolve(record.get('flight_id'))
            candidate['crew_member_id'] = self.id_maps[CREW_MEMBER.key].resolve(record.get('crew_member_id'))
            if candidate['flight_id'] is None or candidate['crew_member_id'] is None:
                # Referenced flight or crew member never made it into the store
                return SKIPPED

        existing = find_existing(entity, self.owner, candidate)
        id_map = self.id_maps[entity.key]

        if existing is not None:
            id_map.record(record.get('id'), existing.pk)
            return apply_strategy(self.strategy, entity, existing, candidate, ident)

        created = create_record(entity, self.owner, candidate, ident)
        id_map.record(record.get('id'), created.pk)
        return IMPORTED

    def _resolve_aircraft(self, old_id):
        """
        Live aircraft id for a flight's snapshot aircraft reference. Falls back
        to the raw value when it already names one of the owner's live
        aircraft (same-account re-import); otherwise the flight is stored
        without an aircraft link.
        """
        live_id = self.id_maps[AIRCRAFT.key].resolve(old_id)
        if live_id is not None or old_id in (None, ''):
            return live_id
        raw_id = as_uuid(old_id)
        if raw_id is not None and AIRCRAFT.model.objects.filter(
            pk=raw_id, owner=self.owner, deleted=False,
        ).exists():
            return raw_id
        logger.debug("Aircraft reference %r not available; flight stored without aircraft", old_id)
        return None


# ---------------------------------------------------------------------------
# Job wrapper with per-owner lock
# ---------------------------------------------------------------------------

def _acquire_import_slot(owner, strategy, file_name, snapshot):
    """Create a running BackupImport for owner, or raise ImportInProgressError."""
    from backup.models import BackupImport

    timeout = getattr(settings, 'BACKUP_IMPORT_LOCK_TIMEOUT', DEFAULT_LOCK_TIMEOUT)
    stale_before = timezone.now() - timedelta(seconds=timeout)

    with transaction.atomic():
        # Serializes concurrent starts for the same owner
        get_user_model().objects.select_for_update().filter(pk=owner.pk).first()
        if BackupImport.objects.filter(
            user=owner, status='running', updated_at__gte=stale_before,
        ).exists():
            raise ImportInProgressError("Another backup import is already running for this account.")
        return BackupImport.objects.create(
            user=owner,
            status='running',
            strategy=strategy,
            file_name=(file_name or '')[:254],
            backup_date=str(snapshot.get('exportDate') or '')[:64],
            backup_email=str(snapshot.get('userEmail') or '')[:254],
        )


def _touch_job(job):
    """Keep a running job's lock fresh; it expires BACKUP_IMPORT_LOCK_TIMEOUT after the last touch."""
    from backup.models import BackupImport

    BackupImport.objects.filter(pk=job.pk, status='running').update(updated_at=timezone.now())


def run_backup_import(owner, snapshot, strategy, file_name=''):
    """
    Run a full import as a BackupImport job.

    owner     — User whose records are reconciled
    snapshot  — dict returned by validate_snapshot()
    strategy  — 'skip', 'overwrite' or 'merge'
    """
    reconciler = BackupReconciler(owner, strategy)
    job = _acquire_import_slot(owner, reconciler.strategy, file_name, snapshot)

    try:
        summary = reconciler.run(snapshot, heartbeat=lambda: _touch_job(job))
    except Exception:
        logger.exception("Unhandled error in backup import job %s", job.pk)
        job.status = 'failed'
        job.save(update_fields=['status', 'updated_at'])
        raise

    job.status = 'completed'
    job.result = summary.to_dict()
    job.save(update_fields=['status', 'result', 'updated_at'])
    return summary
