"""
Conflict-resolution strategies for snapshot records that already exist.

    skip       the live record is left alone
    overwrite  every mutable field takes the snapshot value, empty or not
    merge      only fields that are empty on the live record get filled

Matched records report SKIPPED or UPDATED; records with no match are
inserted by create_record() and report IMPORTED.
"""

from django.db import DatabaseError
from django.core.exceptions import ValidationError

from backup.entities import is_empty
from backup.exceptions import RecordError, StrategyError

STRATEGY_SKIP = 'skip'
STRATEGY_OVERWRITE = 'overwrite'
STRATEGY_MERGE = 'merge'

STRATEGY_CHOICES = (
    (STRATEGY_SKIP, 'Skip existing records'),
    (STRATEGY_OVERWRITE, 'Overwrite existing records'),
    (STRATEGY_MERGE, 'Fill empty fields of existing records'),
)
STRATEGIES = {value for value, _ in STRATEGY_CHOICES}

IMPORTED = 'imported'
UPDATED = 'updated'
SKIPPED = 'skipped'


def check_strategy(strategy):
    """Return strategy unchanged, or raise StrategyError for unknown values."""
    if strategy not in STRATEGIES:
        raise StrategyError(
            f"Unknown import strategy {strategy!r}. Expected one of: {', '.join(sorted(STRATEGIES))}."
        )
    return strategy


def overwrite_updates(entity, existing, candidate):
    return {name: candidate[name] for name in entity.mutable_fields}


def merge_updates(entity, existing, candidate):
    return {
        name: candidate[name]
        for name in entity.mutable_fields
        if is_empty(getattr(existing, name)) and not is_empty(candidate[name])
    }


def _save(entity, instance, fields, action, ident):
    try:
        instance.save(update_fields=[*fields, 'updated_at'])
    except (DatabaseError, ValidationError, ValueError, TypeError) as exc:
        raise RecordError(f"Failed to {action} {entity.label} {ident}: {exc}") from exc


def apply_strategy(strategy, entity, existing, candidate, ident=''):
    """
    Apply strategy to an existing live record. Returns UPDATED when a write
    happened, SKIPPED otherwise. created_at is never touched; updated_at
    advances only when something was written.
    """
    check_strategy(strategy)
    if strategy == STRATEGY_SKIP or not entity.mutable_fields:
        return SKIPPED

    if strategy == STRATEGY_OVERWRITE:
        updates, action = overwrite_updates(entity, existing, candidate), 'update'
    else:
        updates, action = merge_updates(entity, existing, candidate), 'merge'

    if not updates:
        return SKIPPED

    for name, value in updates.items():
        setattr(existing, name, value)
    _save(entity, existing, updates.keys(), action, ident)
    return UPDATED


def create_record(entity, owner, candidate, ident=''):
    """
    Insert candidate as a new live record for owner. The store assigns the
    id and both timestamps; the record is never created soft-deleted.
    """
    instance = entity.model(owner=owner, deleted=False, deleted_at=None, **candidate)
    try:
        instance.save(force_insert=True)
    except (DatabaseError, ValidationError, ValueError, TypeError) as exc:
        raise RecordError(f"Failed to create {entity.label} {ident}: {exc}") from exc
    return instance
