from collections.abc import Callable

from timexnorm.config.settings import Settings
from timexnorm.parsing.base import BaseTemporalParser
from timexnorm.parsing.dateparser_adapter import DateparserAdapter
from timexnorm.parsing.example_adapter import ExampleParserAdapter


class ParserFactory:
    """Creates the configured temporal grammar engine adapter."""

    ADAPTERS: dict[str, Callable[[Settings], BaseTemporalParser]] = {
        "dateparser": lambda settings: DateparserAdapter(
            languages=[settings.parser_language]
        ),
        "example": lambda settings: ExampleParserAdapter(),
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseTemporalParser:
        engine = settings.parser_engine.lower()
        builder = cls.ADAPTERS.get(engine)
        if builder is None:
            raise ValueError(
                f"Unknown parser engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return builder(settings)
