"""
Tests for the generation status state machine.
"""

import pytest

from biodata_toolkit.builder.controller import (
    IN_PROGRESS_MESSAGE,
    GenerationController,
    GenerationStatus,
)
from biodata_toolkit.builder.output.assembler import GenerationResult


class FakeTimer:
    """Timer that fires only when the test says so."""

    instances = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.instances.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


@pytest.fixture
def controller():
    FakeTimer.instances = []
    return GenerationController(reset_delay=3.0, timer_factory=FakeTimer)


class TestGenerationController:

    def test_starts_idle(self, controller):
        assert controller.status is GenerationStatus.IDLE
        assert controller.trigger_enabled

    def test_success_then_reset(self, controller):
        # Act
        result = controller.run(lambda: GenerationResult(success=True))

        # Assert
        assert result.success
        assert controller.status is GenerationStatus.SUCCESS
        timer = FakeTimer.instances[-1]
        assert timer.interval == 3.0
        assert timer.started and timer.daemon

        timer.fire()
        assert controller.status is GenerationStatus.IDLE

    def test_failure_result_sets_error(self, controller):
        controller.run(lambda: GenerationResult.failure("PDF libraries not loaded"))
        assert controller.status is GenerationStatus.ERROR

    def test_raising_job_sets_error(self, controller):
        def job():
            raise RuntimeError("boom")

        result = controller.run(job)

        assert not result.success
        assert result.error == "boom"
        assert controller.status is GenerationStatus.ERROR

    def test_rejects_while_loading(self, controller):
        nested = []

        def job():
            assert not controller.trigger_enabled
            nested.append(controller.run(lambda: GenerationResult(success=True)))
            return GenerationResult(success=True)

        controller.run(job)

        assert nested[0].error == IN_PROGRESS_MESSAGE
        assert controller.status is GenerationStatus.SUCCESS

    def test_listeners_see_every_transition(self, controller):
        seen = []
        controller.add_status_listener(seen.append)

        controller.run(lambda: GenerationResult(success=True))
        FakeTimer.instances[-1].fire()

        assert seen == [GenerationStatus.LOADING, GenerationStatus.SUCCESS, GenerationStatus.IDLE]

    def test_new_run_cancels_pending_reset(self, controller):
        controller.run(lambda: GenerationResult(success=True))
        first_timer = FakeTimer.instances[-1]

        controller.run(lambda: GenerationResult.failure("x"))

        assert first_timer.cancelled
        first_timer.fire()
        assert controller.status is GenerationStatus.ERROR

    def test_shutdown_cancels_reset(self, controller):
        controller.run(lambda: GenerationResult(success=True))
        controller.shutdown()
        assert FakeTimer.instances[-1].cancelled
