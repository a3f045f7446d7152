import time
from concurrent.futures import CancelledError, wait

from timexnorm.logging.logger import Log
from timexnorm.normalization.models import NormalizationRequest
from timexnorm.parsing.base import BaseTemporalParser
from timexnorm.parsing.models import Temporal
from timexnorm.worker.models import (
    CancelToken,
    TaskCompleted,
    TaskFailed,
    TaskResult,
    TaskTimedOut,
    WorkerTask,
)
from timexnorm.worker.worker import Worker


class BoundedTaskRunner:
    """Run one normalization attempt on the worker under a hard deadline."""

    def __init__(
        self,
        worker: Worker,
        parser: BaseTemporalParser,
        timeout_millis: int,
    ) -> None:
        self._worker = worker
        self._parser = parser
        self._timeout_millis = timeout_millis

    def run(self, request: NormalizationRequest) -> TaskResult:
        """Submit *request* and wait at most timeout_millis for its result.

        Never retries. On expiry the task is withdrawn if it is still queued,
        otherwise it is asked to stop through its cancel token; either way the
        caller gets TaskTimedOut and any late result is dropped.

        Raises:
            WorkerShutdownError: if the worker no longer accepts tasks.
        """
        started = time.monotonic()
        task = self._worker.submit(lambda token: self._parse(request, token))
        Log.debug(f"Submitted normalization of {request.text!r} at {request.anchor.isoformat()}")

        done, _ = wait([task.future], timeout=self._timeout_millis / 1000)
        elapsed = self._elapsed_millis(started)
        if not done:
            return self._expire(request, task, elapsed)

        if task.future.cancelled():
            return TaskFailed(
                CancelledError("Normalization task was cancelled before it ran"),
                elapsed_millis=elapsed,
            )
        error = task.future.exception()
        if error is not None:
            Log.debug(f"Normalization of {request.text!r} failed after {elapsed} ms: {error}")
            return TaskFailed(error, elapsed_millis=elapsed)
        return TaskCompleted(task.future.result(), elapsed_millis=elapsed)

    def _parse(self, request: NormalizationRequest, token: CancelToken) -> Temporal:
        token.raise_if_cancelled()
        return self._parser.parse(request.text, request.anchor, cancel_token=token)

    def _expire(self, request: NormalizationRequest, task: WorkerTask, elapsed: int) -> TaskTimedOut:
        withdrawn = task.future.cancel()
        if not withdrawn:
            task.token.cancel()
        Log.warning(
            f"Normalization of {request.text!r} timed out after {elapsed} ms "
            f"({'withdrawn from queue' if withdrawn else 'interrupt requested'})",
            timeout_millis=self._timeout_millis,
        )
        return TaskTimedOut(
            timeout_millis=self._timeout_millis,
            cancelled=withdrawn,
            elapsed_millis=elapsed,
        )

    @staticmethod
    def _elapsed_millis(started: float) -> int:
        return int((time.monotonic() - started) * 1000)
