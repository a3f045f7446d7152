from timexnorm.normalization.base import BaseNormalizer
from timexnorm.normalization.exceptions import (
    InvalidInputError,
    NormalizationError,
    NormalizationTimeoutError,
    NormalizerClosedError,
    UnsupportedExpressionError,
)
from timexnorm.normalization.factory import NormalizerFactory
from timexnorm.normalization.models import (
    AnchorPoint,
    FailurePolicy,
    InvalidInput,
    Outcome,
    OutputFormat,
    Success,
    TimedOut,
    Unsupported,
)
from timexnorm.normalization.normalizer import Normalizer

__all__ = [
    "AnchorPoint",
    "BaseNormalizer",
    "FailurePolicy",
    "InvalidInput",
    "InvalidInputError",
    "NormalizationError",
    "NormalizationTimeoutError",
    "Normalizer",
    "NormalizerClosedError",
    "NormalizerFactory",
    "Outcome",
    "OutputFormat",
    "Success",
    "TimedOut",
    "Unsupported",
    "UnsupportedExpressionError",
]
