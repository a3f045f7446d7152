from abc import ABC, abstractmethod

from timexnorm.normalization.models import AnchorPoint
from timexnorm.parsing.models import Temporal
from timexnorm.worker.models import CancelToken


class BaseTemporalParser(ABC):
    """Contract for all temporal grammar engine adapters."""

    @abstractmethod
    def parse(
        self,
        text: str,
        anchor: AnchorPoint,
        *,
        cancel_token: CancelToken | None = None,
    ) -> Temporal:
        """Resolve a temporal expression relative to *anchor*.

        Args:
            text: Whitespace-collapsed, non-blank temporal expression.
            anchor: Reference time for relative expressions ("tomorrow").
            cancel_token: Set when the caller stopped waiting. Engines that
                          loop should poll it and raise TaskInterruptedError.

        Returns:
            Temporal with compact and structured representations.

        Raises:
            UnparsableExpressionError: if the text is outside grammar coverage.
            TemporalParseError: on any other engine failure.
        """
