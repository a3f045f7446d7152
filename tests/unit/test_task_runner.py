import time
from collections.abc import Callable, Generator
from unittest.mock import MagicMock, patch

import pytest

from tests.fakes import GatedParser
from timexnorm.normalization.models import AnchorPoint, NormalizationRequest, OutputFormat
from timexnorm.parsing.exceptions import UnparsableExpressionError
from timexnorm.parsing.models import Temporal
from timexnorm.worker.exceptions import TaskInterruptedError
from timexnorm.worker.models import TaskCompleted, TaskFailed, TaskTimedOut, WorkerStatus
from timexnorm.worker.task_runner import BoundedTaskRunner
from timexnorm.worker.worker import Worker


def _wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def _request(text: str = "tomorrow") -> NormalizationRequest:
    return NormalizationRequest(
        text=text,
        original_text=text,
        anchor=AnchorPoint(2024, 1, 1),
        output_format=OutputFormat.SIMPLE,
    )


@pytest.fixture()
def worker() -> Generator[Worker, None, None]:
    w = Worker(poll_interval_seconds=0.01)
    w.start()
    yield w
    w.shutdown()


class TestCompletion:
    def test_returns_engine_output(self, worker: Worker, example_parser: MagicMock) -> None:
        runner = BoundedTaskRunner(worker, example_parser, timeout_millis=1000)
        result = runner.run(_request())
        assert isinstance(result, TaskCompleted)
        assert isinstance(result.value, Temporal)
        assert result.value.timeml_value == "2024-01-02"

    def test_passes_text_anchor_and_token(self, worker: Worker, example_parser: MagicMock) -> None:
        runner = BoundedTaskRunner(worker, example_parser, timeout_millis=1000)
        runner.run(_request("today"))
        call = example_parser.parse.call_args
        assert call.args == ("today", AnchorPoint(2024, 1, 1))
        assert call.kwargs["cancel_token"] is not None


class TestFailure:
    def test_engine_error_is_returned(self, worker: Worker, example_parser: MagicMock) -> None:
        runner = BoundedTaskRunner(worker, example_parser, timeout_millis=1000)
        result = runner.run(_request("5 o'clock"))
        assert isinstance(result, TaskFailed)
        assert isinstance(result.error, UnparsableExpressionError)

    def test_engine_timeout_error_is_not_a_deadline(self, worker: Worker) -> None:
        parser = MagicMock()
        parser.parse.side_effect = TimeoutError("engine's own timeout")
        runner = BoundedTaskRunner(worker, parser, timeout_millis=1000)
        result = runner.run(_request())
        assert isinstance(result, TaskFailed)
        assert isinstance(result.error, TimeoutError)


class TestTimeout:
    def test_times_out_within_bound(self, worker: Worker, stuck_parser: GatedParser) -> None:
        runner = BoundedTaskRunner(worker, stuck_parser, timeout_millis=100)
        started = time.monotonic()
        result = runner.run(_request())
        assert time.monotonic() - started < 0.5
        assert isinstance(result, TaskTimedOut)
        assert result.timeout_millis == 100
        assert result.cancelled is False

    def test_interrupt_frees_worker_for_cooperative_engine(
        self, worker: Worker, interruptible_parser: GatedParser
    ) -> None:
        runner = BoundedTaskRunner(worker, interruptible_parser, timeout_millis=100)
        assert isinstance(runner.run(_request()), TaskTimedOut)
        assert _wait_until(lambda: worker.state.status is WorkerStatus.IDLE)

        interruptible_parser.gate.set()
        assert isinstance(runner.run(_request()), TaskCompleted)

    def test_stuck_engine_keeps_worker_busy(self, worker: Worker, stuck_parser: GatedParser) -> None:
        runner = BoundedTaskRunner(worker, stuck_parser, timeout_millis=100)
        runner.run(_request())

        state = worker.state
        assert state.status is WorkerStatus.BUSY
        assert state.cancel_requested is True

    def test_queued_submission_is_withdrawn(self, worker: Worker, stuck_parser: GatedParser) -> None:
        runner = BoundedTaskRunner(worker, stuck_parser, timeout_millis=100)
        runner.run(_request("first"))

        second = runner.run(_request("second"))

        assert isinstance(second, TaskTimedOut)
        assert second.cancelled is True
        assert stuck_parser.calls == ["first"]

    def test_logs_warning_on_timeout(self, worker: Worker, stuck_parser: GatedParser) -> None:
        runner = BoundedTaskRunner(worker, stuck_parser, timeout_millis=100)
        with patch("timexnorm.worker.task_runner.Log") as mock_log:
            runner.run(_request())
        assert any("timed out" in c.args[0] for c in mock_log.warning.call_args_list)

    def test_cancelled_before_start_never_reaches_engine(self, worker: Worker) -> None:
        parser = MagicMock()
        runner = BoundedTaskRunner(worker, parser, timeout_millis=1000)
        token = MagicMock()
        token.raise_if_cancelled.side_effect = TaskInterruptedError("Interrupted")

        with pytest.raises(TaskInterruptedError):
            runner._parse(_request(), token)
        parser.parse.assert_not_called()
