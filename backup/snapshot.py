"""
Logbook backup snapshot — parsing and pre-flight validation.

Public API:
    validate_snapshot(raw, max_size=None) → dict
        Size, JSON, required-key and version checks. Returns the parsed
        snapshot untouched or raises a SnapshotError subclass.

    COLLECTION_KEYS
        The four entity collections under ``data``, in import order.
"""

import json

from django.conf import settings

from backup.exceptions import MalformedError, OversizeError, SchemaError, VersionError

DEFAULT_MAX_SIZE = 50 * 1024 * 1024  # 50 MB

SUPPORTED_MAJOR_VERSIONS = {'1'}

REQUIRED_KEYS = ('version', 'exportDate', 'userEmail', 'data')

# Dependency order: flights reference aircraft, roles reference flights and crew
COLLECTION_KEYS = ('aircrafts', 'crew_members', 'flights', 'flight_roles')


def get_max_size():
    return getattr(settings, 'BACKUP_IMPORT_MAX_SIZE', DEFAULT_MAX_SIZE)


def check_size(size, max_size=None):
    """Raise OversizeError when size (bytes) exceeds max_size."""
    if max_size is None:
        max_size = get_max_size()
    if size > max_size:
        limit = f"{max_size // (1024 ** 2)} MB" if max_size >= 1024 ** 2 else f"{max_size} bytes"
        raise OversizeError(f"File too large. Maximum size is {limit}.")


def major_version(version):
    """Return the major component of a version such as '1.2.0' → '1'."""
    return str(version).strip().split('.', 1)[0]


def validate_snapshot(raw, max_size=None):
    """
    Parse and sanity-check an uploaded snapshot.

    raw      — bytes (or str) as uploaded
    max_size — byte bound; defaults to settings.BACKUP_IMPORT_MAX_SIZE

    Raises OversizeError, MalformedError, SchemaError or VersionError.
    """
    # 1. Size, before touching the content
    check_size(len(raw), max_size)

    # 2. Must be a JSON object
    try:
        text = raw.decode('utf-8') if isinstance(raw, (bytes, bytearray)) else raw
        snapshot = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedError(f"Invalid JSON file: {exc}") from exc

    if not isinstance(snapshot, dict):
        raise MalformedError("Backup file must contain a JSON object.")

    # 3. Required top-level keys
    missing = [key for key in REQUIRED_KEYS if snapshot.get(key) in (None, '')]
    if missing:
        raise SchemaError(f"Invalid backup file structure: missing {', '.join(missing)}.")

    # 4. Only the major version gates compatibility; a newer layout may differ below
    version = snapshot['version']
    if isinstance(version, (dict, list, bool)) or major_version(version) not in SUPPORTED_MAJOR_VERSIONS:
        raise VersionError(f"Unsupported backup version: {version}")

    # 5. Entity collections
    data = snapshot['data']
    if not isinstance(data, dict):
        raise SchemaError("Invalid backup file structure: 'data' must be an object.")

    missing = [key for key in COLLECTION_KEYS if key not in data]
    if missing:
        raise SchemaError(f"Invalid backup file structure: data is missing {', '.join(missing)}.")
    for key in COLLECTION_KEYS:
        if not isinstance(data[key], list):
            raise SchemaError(f"Invalid backup file structure: data.{key} must be a list.")

    return snapshot
