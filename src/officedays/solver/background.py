"""
Background Generation
=====================
Run the engine off the caller's thread (e.g. a UI event loop) and hand the
outcome back through a callback.

Cancellation only means "do not deliver": a job that already started runs to
completion and its result is dropped. Failures of any kind go to ``on_error``.
"""
import concurrent.futures
import threading
from typing import Callable, Optional, Sequence

from officedays.models.config import SchedulerConfig
from officedays.models.employee import Employee
from officedays.solver.engine import ScheduleResult, generate
from officedays.solver.errors import SchedulingError
from officedays.utils.logging_setup import get_logger

logger = get_logger("officedays.solver.background")

ResultCallback = Callable[[ScheduleResult], None]
ErrorCallback = Callable[[Exception], None]


class ScheduleJob:
    """Handle on a schedule generation running in an executor."""

    def __init__(
        self,
        future: concurrent.futures.Future,
        on_result: Optional[ResultCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        self._future = future
        self._on_result = on_result
        self._on_error = on_error
        self._cancelled = threading.Event()
        future.add_done_callback(self._deliver)

    def cancel(self) -> None:
        """Skip the run if still queued, otherwise drop its result once it finishes."""
        self._cancelled.set()
        self._future.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> ScheduleResult:
        """Block for the result; re-raises whatever the run raised."""
        return self._future.result(timeout=timeout)

    def _deliver(self, future: concurrent.futures.Future) -> None:
        if self.cancelled or future.cancelled():
            logger.debug("Discarding result of cancelled schedule job")
            return
        error = future.exception()
        if error is None:
            if self._on_result:
                self._on_result(future.result())
            return
        if not isinstance(error, SchedulingError):
            logger.error(f"Schedule job crashed: {type(error).__name__}: {error}")
        if self._on_error:
            self._on_error(error)


def submit_schedule(
    executor: concurrent.futures.Executor,
    employees: Sequence[Employee],
    month: int,
    year: int,
    config: Optional[SchedulerConfig] = None,
    on_result: Optional[ResultCallback] = None,
    on_error: Optional[ErrorCallback] = None,
) -> ScheduleJob:
    """
    Submit a generation to ``executor``.

    The employee sequence is copied at submit time, so later edits by the
    caller do not leak into the running job.
    """
    team = tuple(employees)
    future = executor.submit(generate, team, month, year, config)
    return ScheduleJob(future, on_result=on_result, on_error=on_error)
