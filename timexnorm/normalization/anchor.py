from collections.abc import Callable
from datetime import date, datetime

from timexnorm.normalization.exceptions import InvalidInputError
from timexnorm.normalization.models import AnchorPoint

AnchorLike = AnchorPoint | datetime | date | None


class AnchorResolver:
    """Turns every supported anchor shape into one AnchorPoint.

    Calendar validation happens only in AnchorPoint itself, so every call
    shape rejects Feb 30 the same way.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or datetime.now

    def resolve(self, anchor: AnchorLike = None) -> AnchorPoint:
        """Return the canonical anchor for *anchor*.

        None means "now", read from the clock on every call.

        Raises:
            InvalidInputError: for an unsupported anchor type.
        """
        if anchor is None:
            return AnchorPoint.from_datetime(self._clock())
        if isinstance(anchor, AnchorPoint):
            return anchor
        # datetime is a subclass of date and must be checked first.
        if isinstance(anchor, datetime):
            return AnchorPoint.from_datetime(anchor)
        if isinstance(anchor, date):
            return AnchorPoint.from_date(anchor)
        raise InvalidInputError(f"Unsupported anchor type: {type(anchor).__name__}")

    def from_fields(
        self,
        year: int,
        month: int,
        day: int,
        hour: int | None = None,
        minute: int | None = None,
    ) -> AnchorPoint:
        """Build a date anchor, or a date+time anchor when *hour* is given.

        Raises:
            InvalidInputError: if the fields do not form a valid calendar date/time.
        """
        if hour is None:
            if minute is not None:
                raise InvalidInputError("Anchor minute requires an hour")
            return AnchorPoint(year, month, day)
        return AnchorPoint(year, month, day, hour, minute or 0)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim the ends."""
    return " ".join(text.split())
