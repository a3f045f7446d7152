import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from timexnorm.worker.exceptions import TaskInterruptedError


class CancelToken:
    """Cooperative interrupt flag shared between a runner and one task."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancellation is requested or *timeout* seconds pass."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise TaskInterruptedError("Interrupted: normalization task was cancelled")


@dataclass
class WorkerTask:
    """A unit of work queued on a Worker."""

    fn: Callable[[CancelToken], Any]
    token: CancelToken = field(default_factory=CancelToken)
    future: Future[Any] = field(default_factory=Future)


class WorkerStatus(str, Enum):
    IDLE = "idle"
    BUSY = "busy"
    CLOSED = "closed"


@dataclass(frozen=True)
class WorkerState:
    """Snapshot of worker occupancy.

    busy_since is a time.monotonic() reading taken when the current task
    started; cancel_requested is set once its runner gave up on it.
    """

    status: WorkerStatus
    busy_since: float | None = None
    cancel_requested: bool = False
    queued: int = 0


@dataclass(frozen=True)
class TaskCompleted:
    """The task returned a value within the deadline."""

    value: Any
    elapsed_millis: int = 0


@dataclass(frozen=True)
class TaskFailed:
    """The task raised, or was cancelled before it could run."""

    error: BaseException
    elapsed_millis: int = 0


@dataclass(frozen=True)
class TaskTimedOut:
    """The deadline passed first.

    cancelled is True only when the task was still queued and has been
    withdrawn; a running task was merely asked to stop.
    """

    timeout_millis: int
    cancelled: bool = False
    elapsed_millis: int = 0


TaskResult = TaskCompleted | TaskFailed | TaskTimedOut
