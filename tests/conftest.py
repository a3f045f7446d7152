from collections.abc import Generator
from unittest.mock import MagicMock

import pytest

from tests.fakes import GatedParser
from timexnorm.parsing.example_adapter import ExampleParserAdapter


@pytest.fixture()
def example_parser() -> MagicMock:
    """ExampleParserAdapter wrapped in a mock for call-count instrumentation."""
    return MagicMock(wraps=ExampleParserAdapter())


@pytest.fixture()
def stuck_parser() -> Generator[GatedParser, None, None]:
    parser = GatedParser(cooperative=False)
    yield parser
    parser.gate.set()


@pytest.fixture()
def interruptible_parser() -> Generator[GatedParser, None, None]:
    parser = GatedParser(cooperative=True)
    yield parser
    parser.gate.set()
