"""Error types for the training log core.

- ValidationError: a mutation was rejected before reaching the store.
- SyncError: a subscription failed to attach or delivered an error.
- BatchWriteError: an atomic batch write failed; nothing was written.

Referential problems (type mismatches, legacy records) are not exceptions;
see `tracklog.models.warnings.ReferentialWarning`.
"""


class TrackLogError(Exception):
    """Base exception for training log errors."""

    pass


class ValidationError(TrackLogError, ValueError):
    """Raised when form input is missing or malformed.

    Attributes:
        field: Name of the offending field, if known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class SyncError(TrackLogError):
    """Raised or reported when a collection subscription fails.

    Attributes:
        collection: Collection whose subscription failed.
    """

    def __init__(self, collection: str, message: str) -> None:
        self.collection = collection
        super().__init__(f"Subscription to '{collection}' failed: {message}")


class BatchWriteError(TrackLogError):
    """Raised when an atomic batch write fails as a whole.

    Attributes:
        operation_count: Number of writes in the rejected batch.
    """

    def __init__(self, message: str, operation_count: int = 0) -> None:
        self.operation_count = operation_count
        super().__init__(message)
