"""Example temporal parser adapter.

Use this module as a reference when implementing new engine adapters.
Implement BaseTemporalParser and register the engine in ParserFactory.
"""

from datetime import timedelta
from typing import ClassVar

from timexnorm.normalization.models import AnchorPoint
from timexnorm.parsing.base import BaseTemporalParser
from timexnorm.parsing.exceptions import UnparsableExpressionError
from timexnorm.parsing.models import Granularity, Temporal
from timexnorm.worker.models import CancelToken


class ExampleParserAdapter(BaseTemporalParser):
    """Example adapter that knows a handful of anchor-relative words.

    No third-party engine. Useful for local development, tests, and as a
    template for building real engine adapters.
    """

    DAY_OFFSETS: ClassVar[dict[str, int]] = {
        "yesterday": -1,
        "today": 0,
        "tomorrow": 1,
    }

    def parse(
        self,
        text: str,
        anchor: AnchorPoint,
        *,
        cancel_token: CancelToken | None = None,
    ) -> Temporal:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        word = text.strip().lower()
        base = anchor.to_datetime()
        if word == "now":
            return Temporal.spanning(base, Granularity.TIME)
        offset = self.DAY_OFFSETS.get(word)
        if offset is None:
            raise UnparsableExpressionError(text)
        return Temporal.spanning(base + timedelta(days=offset), Granularity.DAY)
