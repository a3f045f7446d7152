from timexnorm.config.settings import Settings
from timexnorm.normalization.base import BaseNormalizer
from timexnorm.normalization.normalizer import Normalizer
from timexnorm.parsing.factory import ParserFactory
from timexnorm.worker.worker import Worker


class NormalizerFactory:
    """Creates a normalizer from application settings."""

    @classmethod
    def create(cls, settings: Settings) -> BaseNormalizer:
        """Create a configured normalizer.

        Raises:
            ValueError: for an unknown parser engine, output format or
                        failure policy, or an out-of-range timeout.
        """
        parser = ParserFactory.create(settings)
        return Normalizer(
            parser=parser,
            timeout_millis=settings.normalizer_timeout_millis,
            output_format=settings.normalizer_output_format.strip().lower(),
            failure_policy=settings.normalizer_failure_policy.strip().lower(),
            worker=Worker(poll_interval_seconds=settings.worker_poll_interval_millis / 1000),
        )
