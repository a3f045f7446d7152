"""Timeout-bounded temporal expression normalizer."""

import threading
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from types import TracebackType
from typing import TypeVar

from timexnorm.logging.logger import Log
from timexnorm.normalization.anchor import AnchorLike, AnchorResolver, collapse_whitespace
from timexnorm.normalization.base import BaseNormalizer
from timexnorm.normalization.classifier import ResultClassifier
from timexnorm.normalization.exceptions import InvalidInputError, NormalizerClosedError
from timexnorm.normalization.models import (
    DEFAULT_TIMEOUT_MILLIS,
    FailurePolicy,
    InvalidInput,
    NormalizationRequest,
    NormalizerConfig,
    NormalizerState,
    Outcome,
    OutputFormat,
)
from timexnorm.parsing.base import BaseTemporalParser
from timexnorm.worker.exceptions import WorkerShutdownError
from timexnorm.worker.models import TaskCompleted, WorkerState, WorkerStatus
from timexnorm.worker.task_runner import BoundedTaskRunner
from timexnorm.worker.worker import Worker

_E = TypeVar("_E", bound=Enum)


class Normalizer(BaseNormalizer):
    """Normalizes temporal expressions with a grammar engine under a timeout.

    Each instance owns one Worker, started at construction and shut down by
    close(). Calls are serialized on that worker. If the engine ignores a
    cancellation after a timeout, later calls queue behind the stale task
    (and may time out themselves) until it finishes.
    """

    def __init__(
        self,
        *,
        parser: BaseTemporalParser,
        timeout_millis: int = DEFAULT_TIMEOUT_MILLIS,
        output_format: OutputFormat | str = OutputFormat.SIMPLE,
        failure_policy: FailurePolicy | str = FailurePolicy.STRICT,
        clock: Callable[[], datetime] | None = None,
        worker: Worker | None = None,
    ) -> None:
        self._state = NormalizerState.CONSTRUCTED
        self._config = NormalizerConfig(
            timeout_millis=timeout_millis,
            output_format=self._coerce(OutputFormat, output_format),
            failure_policy=self._coerce(FailurePolicy, failure_policy),
        )
        self._resolver = AnchorResolver(clock)
        self._classifier = ResultClassifier(self._config)
        self._lock = threading.Lock()
        self._worker = worker or Worker()
        self._worker.start()
        self._runner = BoundedTaskRunner(self._worker, parser, self._config.timeout_millis)
        self._state = NormalizerState.READY
        Log.debug(
            f"Normalizer ready: timeout={self._config.timeout_millis} ms, "
            f"format={self._config.output_format.value}, "
            f"policy={self._config.failure_policy.value}"
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def normalize(self, text: str, anchor: AnchorLike = None) -> str:
        return self._classifier.resolve(self.attempt(text, anchor))

    def normalize_at(
        self,
        text: str,
        year: int,
        month: int,
        day: int,
        hour: int | None = None,
        minute: int | None = None,
    ) -> str:
        """Normalize relative to a date, or a date and time when *hour* is given."""
        self._ensure_open()
        try:
            anchor = self._resolver.from_fields(year, month, day, hour, minute)
        except InvalidInputError as exc:
            return self._classifier.resolve(self._invalid(exc))
        return self.normalize(text, anchor)

    def attempt(self, text: str, anchor: AnchorLike = None) -> Outcome:
        self._ensure_open()
        if not text or not text.strip():
            return InvalidInput("Cannot normalize an empty temporal expression")
        try:
            anchor_point = self._resolver.resolve(anchor)
        except InvalidInputError as exc:
            return self._invalid(exc)

        request = NormalizationRequest(
            text=collapse_whitespace(text),
            original_text=text,
            anchor=anchor_point,
            output_format=self._config.output_format,
        )
        try:
            result = self._runner.run(request)
        except WorkerShutdownError as exc:
            raise NormalizerClosedError("Normalizer has been closed") from exc
        if self.is_closed and not isinstance(result, TaskCompleted):
            raise NormalizerClosedError(f"Normalizer was closed while normalizing {text!r}")
        return self._classifier.classify(request, result)

    @property
    def timeout_millis(self) -> int:
        return self._config.timeout_millis

    @property
    def output_format(self) -> OutputFormat:
        return self._config.output_format

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._config.failure_policy

    @property
    def is_simple_format(self) -> bool:
        return self._config.output_format is OutputFormat.SIMPLE

    @property
    def is_closed(self) -> bool:
        return self._state is NormalizerState.CLOSED

    @property
    def state(self) -> NormalizerState:
        if self._state is NormalizerState.READY and self.worker_state.status is WorkerStatus.BUSY:
            return NormalizerState.BUSY
        return self._state

    @property
    def worker_state(self) -> WorkerState:
        return self._worker.state

    def close(self) -> None:
        """Shut down the worker. Safe to call more than once."""
        with self._lock:
            if self._state is NormalizerState.CLOSED:
                return
            self._state = NormalizerState.CLOSED
        self._worker.shutdown()
        Log.info("Normalizer closed")

    def __enter__(self) -> "Normalizer":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self.is_closed:
            raise NormalizerClosedError("Normalizer has been closed")

    @staticmethod
    def _invalid(exc: InvalidInputError) -> InvalidInput:
        return InvalidInput(str(exc), cause=exc.__cause__ or exc)

    @staticmethod
    def _coerce(enum_cls: type[_E], value: object) -> _E:
        try:
            return enum_cls(value)
        except ValueError as exc:
            raise InvalidInputError(
                f"Unknown {enum_cls.__name__} {value!r}. "
                f"Choose from: {[member.value for member in enum_cls]}"
            ) from exc
