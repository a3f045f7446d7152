class TemporalParseError(Exception):
    """Raised when a temporal grammar engine fails."""


class UnparsableExpressionError(TemporalParseError):
    """Raised when the text is outside the engine's grammar coverage."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Unsupported temporal expression: {text!r}")
        self.text = text
