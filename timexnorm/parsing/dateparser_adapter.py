from dateparser import DateDataParser

from timexnorm.logging.logger import Log
from timexnorm.normalization.models import AnchorPoint
from timexnorm.parsing.base import BaseTemporalParser
from timexnorm.parsing.exceptions import TemporalParseError, UnparsableExpressionError
from timexnorm.parsing.models import Granularity, Temporal
from timexnorm.worker.models import CancelToken


class DateparserAdapter(BaseTemporalParser):
    """Resolves temporal expressions with the dateparser library.

    The period dateparser detects ("day", "week", "month", "year", "time")
    becomes the granularity of the returned span.
    """

    def __init__(
        self,
        languages: list[str] | None = None,
        prefer_dates_from: str = "current_period",
    ) -> None:
        self._languages = languages or ["en"]
        self._prefer_dates_from = prefer_dates_from

    def parse(
        self,
        text: str,
        anchor: AnchorPoint,
        *,
        cancel_token: CancelToken | None = None,
    ) -> Temporal:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        try:
            parser = DateDataParser(
                languages=self._languages,
                settings={
                    "RELATIVE_BASE": anchor.to_datetime(),
                    "PREFER_DATES_FROM": self._prefer_dates_from,
                    "RETURN_TIME_AS_PERIOD": True,
                },
            )
            data = parser.get_date_data(text)
        except Exception as exc:
            raise TemporalParseError(f"dateparser failed on {text!r}: {exc}") from exc

        if data.date_obj is None:
            raise UnparsableExpressionError(text)
        Log.debug(f"dateparser resolved {text!r} to {data.date_obj} ({data.period})")
        return Temporal.spanning(data.date_obj, self._granularity(data.period))

    @staticmethod
    def _granularity(period: str | None) -> Granularity:
        try:
            return Granularity(period)
        except ValueError:
            return Granularity.DAY
