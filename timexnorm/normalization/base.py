from abc import ABC, abstractmethod

from timexnorm.normalization.anchor import AnchorLike
from timexnorm.normalization.models import Outcome


class BaseNormalizer(ABC):
    """Contract for temporal expression normalizers."""

    @abstractmethod
    def normalize(self, text: str, anchor: AnchorLike = None) -> str:
        """Normalize a temporal expression relative to an anchor.

        Args:
            text: Text containing a temporal expression.
            anchor: AnchorPoint, datetime, date, or None for "now".

        Returns:
            The normalized expression; an empty string for a failure under
            the lenient policy.

        Raises:
            NormalizationError: for a failure under the strict policy.
            NormalizerClosedError: after close(), under either policy.
        """

    @abstractmethod
    def attempt(self, text: str, anchor: AnchorLike = None) -> Outcome:
        """Like normalize(), but return the tagged outcome instead of applying the policy."""

    @abstractmethod
    def close(self) -> None:
        """Release the normalizer's worker."""
