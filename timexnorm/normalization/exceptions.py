class NormalizationError(Exception):
    """Raised when a temporal expression cannot be normalized."""


class InvalidInputError(NormalizationError, ValueError):
    """Raised for blank text, invalid anchor fields or an out-of-range timeout."""


class UnsupportedExpressionError(NormalizationError):
    """Raised when the grammar engine does not cover the expression."""


class NormalizationTimeoutError(NormalizationError):
    """Raised when normalization did not finish within the configured timeout."""

    def __init__(self, message: str, timeout_millis: int) -> None:
        super().__init__(message)
        self.timeout_millis = timeout_millis


class NormalizerClosedError(NormalizationError):
    """Raised when a normalizer is used after close()."""
