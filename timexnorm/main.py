import sys

from timexnorm.config.settings import Settings
from timexnorm.logging.logger import Log
from timexnorm.normalization.exceptions import NormalizationError
from timexnorm.normalization.factory import NormalizerFactory

_SAMPLE_EXPRESSIONS = ["tomorrow", "last week", "March, 2000", "noon", "6-15"]


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build normalizer -> normalize each argument."""
    settings = Settings()
    Log.configure(settings.log_level)
    expressions = (argv if argv is not None else sys.argv[1:]) or _SAMPLE_EXPRESSIONS

    failures = 0
    normalizer = NormalizerFactory.create(settings)
    try:
        for text in expressions:
            try:
                result = normalizer.normalize(text)
            except NormalizationError as exc:
                failures += 1
                cause = f" ({exc.__cause__})" if exc.__cause__ is not None else ""
                print(f"{exc}{cause}", file=sys.stderr)
                continue
            if result:
                print(f"{text} -> {result}")
    finally:
        normalizer.close()
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
