"""
Read-only preview of a backup snapshot before it is imported.

Aircraft and crew duplicates are counted exactly with one batched query
each. Flight duplicates are estimated from a fixed-size sample so the cost
of a preview does not grow with the snapshot.
"""

from django.conf import settings

from backup.duplicates import count_existing, find_existing
from backup.entities import AIRCRAFT, CREW_MEMBER, ENTITY_TYPES, FLIGHT
from backup.snapshot import validate_snapshot

DEFAULT_FLIGHT_SAMPLE_SIZE = 10


def estimate_flight_duplicates(owner, flights, sample_size=None):
    """Probe the first sample_size flights and extrapolate the duplicate ratio."""
    if sample_size is None:
        sample_size = getattr(settings, 'BACKUP_PREVIEW_FLIGHT_SAMPLE_SIZE', DEFAULT_FLIGHT_SAMPLE_SIZE)
    sample = [f for f in flights[:sample_size] if isinstance(f, dict)]
    if not sample:
        return 0
    duplicates = sum(
        1 for record in sample
        if find_existing(FLIGHT, owner, FLIGHT.candidate(record)) is not None
    )
    # Round half up
    return int(duplicates / len(sample) * len(flights) + 0.5)


def _natural_key_values(entity, records):
    field = entity.natural_key[0]
    convert = entity.fields[field]
    return [convert(record.get(field)) for record in records if isinstance(record, dict)]


def preview_snapshot(owner, raw, file_name='', max_size=None):
    """
    Validate raw and describe what an import would touch. Raises the same
    SnapshotError subclasses as validate_snapshot(); never writes.
    """
    snapshot = validate_snapshot(raw, max_size=max_size)
    data = snapshot['data']

    return {
        'valid': True,
        'backup': {
            'version': snapshot['version'],
            'exportDate': snapshot['exportDate'],
            'userEmail': snapshot['userEmail'],
            'metadata': snapshot.get('metadata'),
        },
        'content': {entity.key: len(data[entity.key]) for entity in ENTITY_TYPES},
        'potential_duplicates': {
            AIRCRAFT.key: count_existing(AIRCRAFT, owner, _natural_key_values(AIRCRAFT, data[AIRCRAFT.key])),
            CREW_MEMBER.key: count_existing(
                CREW_MEMBER, owner, _natural_key_values(CREW_MEMBER, data[CREW_MEMBER.key]),
            ),
            FLIGHT.key: estimate_flight_duplicates(owner, data[FLIGHT.key]),
        },
        'file_size': len(raw),
        'file_name': file_name,
    }
