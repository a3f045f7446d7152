from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from timexnorm.normalization.exceptions import InvalidInputError

MIN_TIMEOUT_MILLIS = 100
MAX_TIMEOUT_MILLIS = 10000
DEFAULT_TIMEOUT_MILLIS = 1000


class OutputFormat(str, Enum):
    """SIMPLE renders "2012-05-13"; STRUCTURED renders the full time span."""

    SIMPLE = "simple"
    STRUCTURED = "structured"


class FailurePolicy(str, Enum):
    """STRICT raises on every failure; LENIENT returns an empty string and logs."""

    STRICT = "strict"
    LENIENT = "lenient"


class NormalizerState(str, Enum):
    CONSTRUCTED = "constructed"
    READY = "ready"
    BUSY = "busy"
    CLOSED = "closed"


@dataclass(frozen=True)
class AnchorPoint:
    """Reference time for resolving relative expressions.

    A date-only anchor (hour is None) denotes the whole day and resolves
    to 00:00:00.
    """

    year: int
    month: int
    day: int
    hour: int | None = None
    minute: int = 0
    second: int = 0

    def __post_init__(self) -> None:
        if self.hour is None and (self.minute or self.second):
            raise InvalidInputError("Anchor minute and second require an hour")
        try:
            datetime(self.year, self.month, self.day, self.hour or 0, self.minute, self.second)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Invalid anchor {self._describe()}: {exc}") from exc

    @classmethod
    def from_date(cls, value: date) -> AnchorPoint:
        return cls(value.year, value.month, value.day)

    @classmethod
    def from_datetime(cls, value: datetime) -> AnchorPoint:
        return cls(value.year, value.month, value.day, value.hour, value.minute, value.second)

    @property
    def has_time(self) -> bool:
        return self.hour is not None

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour or 0, self.minute, self.second)

    def isoformat(self) -> str:
        if self.has_time:
            return self.to_datetime().isoformat()
        return self.to_datetime().date().isoformat()

    def _describe(self) -> str:
        fields = f"year={self.year}, month={self.month}, day={self.day}"
        if self.hour is not None:
            fields += f", hour={self.hour}, minute={self.minute}, second={self.second}"
        return f"({fields})"


@dataclass(frozen=True)
class NormalizerConfig:
    """Construction-time settings of one normalizer."""

    timeout_millis: int = DEFAULT_TIMEOUT_MILLIS
    output_format: OutputFormat = OutputFormat.SIMPLE
    failure_policy: FailurePolicy = FailurePolicy.STRICT

    def __post_init__(self) -> None:
        if not MIN_TIMEOUT_MILLIS <= self.timeout_millis <= MAX_TIMEOUT_MILLIS:
            raise InvalidInputError(
                f"Timeout must be between {MIN_TIMEOUT_MILLIS} and {MAX_TIMEOUT_MILLIS} "
                f"milliseconds, got {self.timeout_millis}"
            )


@dataclass(frozen=True)
class NormalizationRequest:
    """One normalization attempt: collapsed text, resolved anchor and format."""

    text: str
    original_text: str
    anchor: AnchorPoint
    output_format: OutputFormat


@dataclass(frozen=True)
class Success:
    value: str


@dataclass(frozen=True)
class Unsupported:
    text: str
    reason: str = ""
    cause: BaseException | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class TimedOut:
    text: str
    timeout_millis: int


@dataclass(frozen=True)
class InvalidInput:
    reason: str
    cause: BaseException | None = field(default=None, compare=False, repr=False)


Outcome = Success | Unsupported | TimedOut | InvalidInput
