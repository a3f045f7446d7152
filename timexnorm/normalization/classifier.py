"""Maps worker task results to outcomes and outcomes to caller-facing results.

Engine failures are classified by their text, not their type: the table in
``_FAILURE_DESCRIPTIONS`` is the only place that knows which engine messages
mean what. A message it does not recognize is treated as unsupported.
"""

from enum import Enum

from timexnorm.logging.logger import Log
from timexnorm.normalization.exceptions import (
    InvalidInputError,
    NormalizationError,
    NormalizationTimeoutError,
    UnsupportedExpressionError,
)
from timexnorm.normalization.models import (
    FailurePolicy,
    InvalidInput,
    NormalizationRequest,
    NormalizerConfig,
    Outcome,
    OutputFormat,
    Success,
    TimedOut,
    Unsupported,
)
from timexnorm.parsing.models import Temporal
from timexnorm.worker.models import TaskCompleted, TaskFailed, TaskResult, TaskTimedOut


class FailureKind(str, Enum):
    UNSUPPORTED = "unsupported"
    TIMED_OUT = "timed_out"


# First match wins; matched case-insensitively against describe_failure().
_FAILURE_DESCRIPTIONS: tuple[tuple[str, FailureKind], ...] = (
    ("unparsableexpressionerror", FailureKind.UNSUPPORTED),
    ("unsupported temporal expression", FailureKind.UNSUPPORTED),
    ("interrupted", FailureKind.TIMED_OUT),
    ("cancelled", FailureKind.TIMED_OUT),
    ("timed out", FailureKind.TIMED_OUT),
)


def describe_failure(error: BaseException) -> str:
    """Render *error* and its chained causes as "Type: message" lines."""
    parts: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append(f"{type(current).__name__}: {current}")
        current = current.__cause__
    return "\n".join(parts)


def classify_failure(description: str) -> FailureKind:
    """Look *description* up in the failure table; unmatched means unsupported."""
    lowered = description.lower()
    for needle, kind in _FAILURE_DESCRIPTIONS:
        if needle in lowered:
            return kind
    Log.warning(f"Unrecognized engine failure, treating as unsupported: {description}")
    return FailureKind.UNSUPPORTED


class ResultClassifier:
    """Builds outcomes from task results and applies the failure policy."""

    def __init__(self, config: NormalizerConfig) -> None:
        self._config = config

    def classify(self, request: NormalizationRequest, result: TaskResult) -> Outcome:
        if isinstance(result, TaskCompleted):
            return Success(self._format(result.value))
        if isinstance(result, TaskTimedOut):
            return TimedOut(text=request.original_text, timeout_millis=result.timeout_millis)
        return self._classify_failure(request, result)

    def resolve(self, outcome: Outcome) -> str:
        """Return the normalized value, or handle a failure per the policy.

        Raises:
            InvalidInputError, UnsupportedExpressionError,
            NormalizationTimeoutError: under the strict policy.
        """
        if isinstance(outcome, Success):
            return outcome.value
        if self._config.failure_policy is FailurePolicy.LENIENT:
            Log.warning(
                f"Normalization failed: {self._message(outcome)}",
                outcome=type(outcome).__name__,
            )
            return ""
        cause = getattr(outcome, "cause", None)
        raise self._to_error(outcome) from cause

    def _classify_failure(self, request: NormalizationRequest, result: TaskFailed) -> Outcome:
        description = describe_failure(result.error)
        kind = classify_failure(description)
        if kind is FailureKind.TIMED_OUT:
            return TimedOut(text=request.original_text, timeout_millis=self._config.timeout_millis)
        return Unsupported(text=request.original_text, reason=description, cause=result.error)

    def _format(self, value: Temporal) -> str:
        if self._config.output_format is OutputFormat.SIMPLE:
            return value.timeml_value
        return value.structured

    def _to_error(self, outcome: Outcome) -> NormalizationError:
        message = self._message(outcome)
        if isinstance(outcome, TimedOut):
            return NormalizationTimeoutError(message, outcome.timeout_millis)
        if isinstance(outcome, Unsupported):
            return UnsupportedExpressionError(message)
        return InvalidInputError(message)

    @staticmethod
    def _message(outcome: Outcome) -> str:
        if isinstance(outcome, TimedOut):
            return (
                f"Normalization timed out at {outcome.timeout_millis} milliseconds "
                f"on temporal expression {outcome.text!r}"
            )
        if isinstance(outcome, Unsupported):
            return f"Unable to normalize temporal expression {outcome.text!r}"
        if isinstance(outcome, InvalidInput):
            return outcome.reason
        return ""
