import threading

from timexnorm.normalization.models import AnchorPoint
from timexnorm.parsing.base import BaseTemporalParser
from timexnorm.parsing.models import Granularity, Temporal
from timexnorm.worker.models import CancelToken


class GatedParser(BaseTemporalParser):
    """Engine stand-in that blocks until its gate is opened.

    A cooperative instance also returns early by raising when its cancel
    token is set; a non-cooperative one ignores the token, like an engine
    stuck in a tight loop.
    """

    def __init__(self, *, cooperative: bool) -> None:
        self.cooperative = cooperative
        self.gate = threading.Event()
        self.started = threading.Event()
        self.finished = threading.Event()
        self.calls: list[str] = []

    def parse(
        self,
        text: str,
        anchor: AnchorPoint,
        *,
        cancel_token: CancelToken | None = None,
    ) -> Temporal:
        self.calls.append(text)
        self.started.set()
        try:
            while not self.gate.wait(0.01):
                if self.cooperative and cancel_token is not None:
                    cancel_token.raise_if_cancelled()
            return Temporal.spanning(anchor.to_datetime(), Granularity.DAY)
        finally:
            self.finished.set()
