"""
Natural-key duplicate detection, always scoped to one owner and to records
that are not soft-deleted.
"""


def live_records(entity, owner):
    return entity.model.objects.filter(owner=owner, deleted=False)


def find_existing(entity, owner, candidate):
    """
    Return the live record matching every natural-key field of candidate
    exactly, or None. The unique constraints make more than one match
    impossible; if it ever happened the oldest record wins.
    """
    return (
        live_records(entity, owner)
        .filter(**entity.key_values(candidate))
        .order_by('created_at')
        .first()
    )


def count_existing(entity, owner, values):
    """
    Batched existence check for single-field natural keys: how many live
    records of this owner carry one of values.
    """
    assert len(entity.natural_key) == 1, f"{entity.label} has a composite natural key"
    values = {v for v in values if v not in (None, '')}
    if not values:
        return 0
    field = entity.natural_key[0]
    return live_records(entity, owner).filter(**{f'{field}__in': values}).count()
