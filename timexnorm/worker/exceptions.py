class WorkerError(Exception):
    """Base exception for worker-related errors."""


class WorkerShutdownError(WorkerError):
    """Raised when a task is submitted to a worker that has been shut down."""


class TaskInterruptedError(WorkerError):
    """Raised by a task that observed its cancellation request."""
