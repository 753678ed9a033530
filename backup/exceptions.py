class BackupError(Exception):
    """Base class for every error raised by the backup import engine."""


class SnapshotError(BackupError):
    """The uploaded snapshot was rejected before any record was processed."""


class OversizeError(SnapshotError):
    pass


class MalformedError(SnapshotError):
    pass


class SchemaError(SnapshotError):
    pass


class VersionError(SnapshotError):
    pass


class StrategyError(BackupError):
    """Unknown conflict-resolution strategy."""


class ImportInProgressError(BackupError):
    """Another import for the same owner has not finished yet."""


class RecordError(BackupError):
    """A single snapshot record could not be written.

    The message names the action, the entity type and an identifying value,
    e.g. ``Failed to create aircraft D-EABC: ...``.
    """
