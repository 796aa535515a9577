"""Error types raised by workout-creator."""


class WorkoutCreatorError(Exception):
    """Base class for all workout-creator errors."""


class CorruptEncodingError(WorkoutCreatorError, ValueError):
    """A stored training method record carries an unknown discriminator.

    Signals storage corruption rather than user error. It is fatal to the
    reconstruction of that one exercise only.
    """

    def __init__(self, method_type: object):
        self.method_type = method_type
        super().__init__(f"Unknown training method type: {method_type!r}")


class PersistenceIOError(WorkoutCreatorError):
    """The storage layer failed to load or save workouts."""

    def __init__(self, operation: str, cause: BaseException | None = None):
        self.operation = operation
        self.cause = cause
        message = f"Failed to {operation} workouts"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class StaleBindingError(WorkoutCreatorError, LookupError):
    """An item binding was used after its item left the collection."""

    def __init__(self, item_id: object):
        self.item_id = item_id
        super().__init__(f"No item with id {item_id!r} in the collection")
