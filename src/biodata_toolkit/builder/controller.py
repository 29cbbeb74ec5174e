"""
Module: builder.controller

Purpose:
    Generation request state machine around the document assembler.

        IDLE -> LOADING -> {SUCCESS, ERROR} -> (after reset delay) -> IDLE

    Only one generation may be in flight. The trigger is disabled while
    LOADING. There are no retries and no mid-generation cancellation.

Key Classes:
    - GenerationStatus: State enum
    - GenerationController: Runs one generation job at a time

Dependencies:
    - threading (std): Status reset timer

Used By:
    - session.BiodataSession.generate_document()
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, List, Optional

from .output.assembler import GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_STATUS_RESET_DELAY = 3.0
IN_PROGRESS_MESSAGE = "Generation already in progress"

StatusListener = Callable[["GenerationStatus"], None]
TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class GenerationStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


class GenerationController:
    """
    Serializes generation requests and tracks their status.

    Example:
        >>> controller = GenerationController(reset_delay=3.0)
        >>> result = controller.run(lambda: GenerationResult(success=True))
        >>> controller.status
        <GenerationStatus.SUCCESS: 'success'>
    """

    def __init__(
        self,
        *,
        reset_delay: float = DEFAULT_STATUS_RESET_DELAY,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self._reset_delay = reset_delay
        self._timer_factory = timer_factory
        self._status = GenerationStatus.IDLE
        self._lock = threading.Lock()
        self._reset_timer: Optional[threading.Timer] = None
        self._listeners: List[StatusListener] = []

    @property
    def status(self) -> GenerationStatus:
        return self._status

    @property
    def trigger_enabled(self) -> bool:
        """The generate control is disabled while a request is in flight."""
        return self._status is not GenerationStatus.LOADING

    def add_status_listener(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def run(self, job: Callable[[], GenerationResult]) -> GenerationResult:
        """
        Run a generation job unless one is already in flight.

        Args:
            job: Callable producing the GenerationResult

        Returns:
            The job's result, or a failure if a job is already running
        """
        with self._lock:
            if self._status is GenerationStatus.LOADING:
                logger.warning(IN_PROGRESS_MESSAGE)
                return GenerationResult.failure(IN_PROGRESS_MESSAGE)
            if self._reset_timer is not None:
                self._reset_timer.cancel()
                self._reset_timer = None
            self._status = GenerationStatus.LOADING
        self._notify(GenerationStatus.LOADING)

        try:
            result = job()
        except Exception as e:
            logger.exception(f"Generation job raised: {e}")
            result = GenerationResult.failure(str(e))

        final = GenerationStatus.SUCCESS if result.success else GenerationStatus.ERROR
        with self._lock:
            self._status = final
            self._reset_timer = self._timer_factory(self._reset_delay, self._reset)
            self._reset_timer.daemon = True
            self._reset_timer.start()
        self._notify(final)
        return result

    def _reset(self) -> None:
        with self._lock:
            if self._status not in (GenerationStatus.SUCCESS, GenerationStatus.ERROR):
                return
            self._status = GenerationStatus.IDLE
            self._reset_timer = None
        self._notify(GenerationStatus.IDLE)

    def _notify(self, status: GenerationStatus) -> None:
        for listener in self._listeners:
            try:
                listener(status)
            except Exception as e:
                logger.error(f"Status listener failed: {e}")

    def shutdown(self) -> None:
        """Cancel a pending status reset."""
        with self._lock:
            if self._reset_timer is not None:
                self._reset_timer.cancel()
                self._reset_timer = None
