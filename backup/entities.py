"""
Field tables for the four snapshot collections.

Each EntityType says how one collection maps onto a core model: the natural
key used for duplicate detection, the fields an import may write, and how a
raw JSON value becomes a model value. Snapshot ids, owner ids, timestamps and
soft-delete markers are never part of a field table, so they can't leak into
the live store.
"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Tuple

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from core.models import Aircraft, CrewMember, Flight, FlightRole


# ---------------------------------------------------------------------------
# Value converters
# ---------------------------------------------------------------------------

def _text(value):
    """Scalar → str, None → '' (no trimming: natural keys compare exactly)."""
    if value is None:
        return ''
    return str(value)


def _bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes')
    return bool(value)


def _parse_date(value):
    """Parse an ISO 8601 date string to date, or return None."""
    if value is None:
        return None
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(value).date()
    except (ValueError, TypeError):
        return None


def _parse_datetime(value):
    """Parse an ISO 8601 timestamp to an aware datetime, or return None."""
    if value in (None, ''):
        return None
    try:
        parsed = parse_datetime(value)
    except (ValueError, TypeError):
        return None
    if parsed is not None and timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def _parse_decimal(value):
    """Parse a string or number to Decimal, or return None."""
    if value is None or value == '':
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError):
        return None


def _count(value):
    """Landing counts: missing or unparseable → 0."""
    try:
        return max(int(value), 0)
    except (ValueError, TypeError):
        return 0


def _reference(value):
    """Snapshot-local id → str, None stays None."""
    if value in (None, ''):
        return None
    return str(value)


def is_empty(value):
    """Merge rule: only None and '' count as empty; False and 0 are values."""
    return value is None or value == ''


def as_uuid(value):
    """Return value as a UUID, or None if it isn't one."""
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


# ---------------------------------------------------------------------------
# Entity descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EntityType:
    key: str                          # collection name under snapshot['data']
    label: str                        # human name used in messages
    model: type
    natural_key: Tuple[str, ...]      # model attribute names, all must match
    fields: Dict[str, Callable]       # writable attribute → converter
    describe: Callable[[dict], str]   # identifying value for messages

    @property
    def mutable_fields(self):
        return tuple(name for name in self.fields if name not in self.natural_key)

    def candidate(self, record):
        """Build model values from a raw snapshot record."""
        return {name: convert(record.get(name)) for name, convert in self.fields.items()}

    def key_values(self, candidate):
        return {name: candidate[name] for name in self.natural_key}


def _describe_flight(record):
    route = f"{record.get('departure_airport') or '?'}-{record.get('arrival_airport') or '?'}"
    return f"on {record.get('flight_date')} ({route})"


AIRCRAFT = EntityType(
    key='aircrafts',
    label='aircraft',
    model=Aircraft,
    natural_key=('registration',),
    fields={
        'registration': _text,
        'type': _text,
        'model': _text,
        'aircraft_class': _text,
        'default_condition': _text,
        'complex_aircraft': _bool,
        'high_performance': _bool,
        'tailwheel': _bool,
        'glass_panel': _bool,
    },
    describe=lambda record: str(record.get('registration')),
)

CREW_MEMBER = EntityType(
    key='crew_members',
    label='crew',
    model=CrewMember,
    natural_key=('name',),
    fields={
        'name': _text,
        'email': _text,
        'phone': _text,
        'license_number': _text,
        'notes': _text,
    },
    describe=lambda record: str(record.get('name')),
)

FLIGHT = EntityType(
    key='flights',
    label='flight',
    model=Flight,
    natural_key=('flight_date', 'registration', 'departure_airport', 'arrival_airport'),
    fields={
        'flight_date': _parse_date,
        'registration': _text,
        'departure_airport': _text,
        'arrival_airport': _text,
        'flight_number': _text,
        'aircraft_type': _text,
        # Replaced by the remapped live id before any lookup or write
        'aircraft_id': _reference,
        'off_block': _parse_datetime,
        'takeoff': _parse_datetime,
        'landing': _parse_datetime,
        'on_block': _parse_datetime,
        'block_time': _parse_decimal,
        'pic_time': _parse_decimal,
        'sic_time': _parse_decimal,
        'multi_pilot_time': _parse_decimal,
        'ifr_time': _parse_decimal,
        'vfr_time': _parse_decimal,
        'night_time': _parse_decimal,
        'cross_country_time': _parse_decimal,
        'dual_given_time': _parse_decimal,
        'dual_received_time': _parse_decimal,
        'landings_day': _count,
        'landings_night': _count,
        'remarks': _text,
    },
    describe=_describe_flight,
)

FLIGHT_ROLE = EntityType(
    key='flight_roles',
    label='flight role',
    model=FlightRole,
    natural_key=('flight_id', 'crew_member_id', 'role_name'),
    fields={
        'flight_id': _reference,
        'crew_member_id': _reference,
        'role_name': _text,
    },
    describe=lambda record: str(record.get('role_name')),
)

# Import order
ENTITY_TYPES = (AIRCRAFT, CREW_MEMBER, FLIGHT, FLIGHT_ROLE)
