from backup.entities import ENTITY_TYPES


class IdentityMap:
    """Snapshot-local id → live id for one entity type during one import run.

    Keys are stored as strings so an id read from JSON and the same id
    arriving as a UUID resolve identically.
    """

    def __init__(self, label=''):
        self.label = label
        self._ids = {}

    @classmethod
    def for_run(cls):
        """A fresh, empty map per entity type, keyed by collection name."""
        return {entity.key: cls(entity.label) for entity in ENTITY_TYPES}

    def record(self, old_id, new_id):
        if old_id in (None, ''):
            return
        self._ids[str(old_id)] = new_id

    def resolve(self, old_id):
        """Return the live id for old_id, or None if it was never imported."""
        if old_id in (None, ''):
            return None
        return self._ids.get(str(old_id))

    def __len__(self):
        return len(self._ids)

    def __repr__(self):
        return f"<IdentityMap {self.label}: {len(self)} ids>"
