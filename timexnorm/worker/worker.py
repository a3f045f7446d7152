import queue
import threading
import time
from collections.abc import Callable
from typing import Any

from timexnorm.logging.logger import Log
from timexnorm.worker.exceptions import WorkerShutdownError
from timexnorm.worker.models import CancelToken, WorkerState, WorkerStatus, WorkerTask


class Worker:
    """Single execution context: claim -> run, strictly one task at a time.

    Tasks run on one daemon thread in submission order. A task that ignores
    its cancel token keeps the worker busy and everything submitted after it
    waits in the queue.
    """

    def __init__(
        self,
        name: str = "timexnorm-worker",
        poll_interval_seconds: float = 0.05,
    ) -> None:
        self._name = name
        self._poll_interval_seconds = poll_interval_seconds
        self._queue: queue.Queue[WorkerTask | None] = queue.Queue()
        self._lock = threading.Lock()
        self._closed = threading.Event()
        self._current: WorkerTask | None = None
        self._busy_since: float | None = None
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start the worker thread. Calling it again is a no-op."""
        with self._lock:
            if self._thread is not None:
                return
            if self._closed.is_set():
                raise WorkerShutdownError(f"Worker {self._name} has been shut down")
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()
        Log.debug(f"Worker {self._name} started")

    def submit(self, fn: Callable[[CancelToken], Any]) -> WorkerTask:
        """Queue *fn* behind any task already submitted.

        Raises:
            WorkerShutdownError: if the worker has been shut down.
        """
        if self._closed.is_set():
            raise WorkerShutdownError(f"Worker {self._name} has been shut down")
        task = WorkerTask(fn)
        self._queue.put(task)
        return task

    @property
    def state(self) -> WorkerState:
        with self._lock:
            if self._closed.is_set():
                return WorkerState(status=WorkerStatus.CLOSED)
            queued = self._queue.qsize()
            if self._current is None:
                return WorkerState(status=WorkerStatus.IDLE, queued=queued)
            return WorkerState(
                status=WorkerStatus.BUSY,
                busy_since=self._busy_since,
                cancel_requested=self._current.token.cancelled,
                queued=queued,
            )

    @property
    def is_closed(self) -> bool:
        return self._closed.is_set()

    def shutdown(self) -> None:
        """Stop accepting work, withdraw queued tasks and interrupt the running one.

        Does not wait for the running task: a task that ignores its cancel
        token finishes on the daemon thread and its result is dropped.
        """
        with self._lock:
            if self._closed.is_set():
                return
            self._closed.set()
            current = self._current
        if current is not None:
            current.token.cancel()
        withdrawn = self._drain()
        self._queue.put(None)
        Log.info(
            f"Worker {self._name} shut down "
            f"({withdrawn} queued task(s) cancelled, "
            f"{'1 running task interrupted' if current is not None else 'no running task'})"
        )

    def _run(self) -> None:
        while not self._closed.is_set():
            task = self._try_claim_task()
            if task is not None:
                self._execute(task)
        Log.debug(f"Worker {self._name} stopped")

    def _try_claim_task(self) -> WorkerTask | None:
        try:
            return self._queue.get(timeout=self._poll_interval_seconds)
        except queue.Empty:
            return None

    def _execute(self, task: WorkerTask) -> None:
        """Run one task and publish its outcome on the task's future."""
        if not task.future.set_running_or_notify_cancel():
            Log.debug("Skipping task cancelled while queued")
            return
        with self._lock:
            self._current = task
            self._busy_since = time.monotonic()
        try:
            task.future.set_result(task.fn(task.token))
        except Exception as exc:
            task.future.set_exception(exc)
        finally:
            with self._lock:
                if task.token.cancelled:
                    Log.debug(
                        f"Stale task finished after "
                        f"{self._elapsed_millis(self._busy_since)} ms; result discarded"
                    )
                self._current = None
                self._busy_since = None

    def _drain(self) -> int:
        withdrawn = 0
        while True:
            try:
                task = self._queue.get_nowait()
            except queue.Empty:
                return withdrawn
            if task is not None and task.future.cancel():
                withdrawn += 1

    @staticmethod
    def _elapsed_millis(since: float | None) -> int:
        if since is None:
            return 0
        return int((time.monotonic() - since) * 1000)
