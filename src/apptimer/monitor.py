"""Monitoring loop that terminates the target once the timer runs out."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import psutil

from apptimer.config import WatchdogConfig
from apptimer.countdown import MS_PER_MINUTE, TimerState
from apptimer.directory import ProcessDirectory
from apptimer.errors import SamplerError
from apptimer.estimator import estimate
from apptimer.models import CpuTimeSnapshot, UtilizationReading
from apptimer.sampler import SelfCpuSampler

logger = logging.getLogger(__name__)

NANOS_PER_MS = 1_000_000


class MonitorState(Enum):
    """States of the monitor loop. ABORTED and EXPIRED are terminal."""

    RUNNING = "running"
    ABORTED = "aborted"
    EXPIRED = "expired"


class Outcome(Enum):
    """How a watchdog run ended."""

    TERMINATED = "terminated"
    TARGET_GONE = "target_gone"
    TERMINATE_FAILED = "terminate_failed"
    ABORTED = "aborted"
    SAMPLER_FAILED = "sampler_failed"

    @property
    def succeeded(self) -> bool:
        """Whether the run ended the way it was meant to."""
        return self in (Outcome.TERMINATED, Outcome.TARGET_GONE, Outcome.ABORTED)


@dataclass(slots=True, frozen=True)
class CycleReport:
    """Result of one monitor cycle."""

    state: MonitorState
    remaining_minutes: float
    reading: UtilizationReading


def decide(reading: UtilizationReading, timer: TimerState, max_cpu_percent: float) -> MonitorState:
    """
    Pick the next state of the loop.

    Overload is checked before expiry, so an overloaded watchdog never
    touches the target.
    """
    if reading.percentage > max_cpu_percent:
        return MonitorState.ABORTED
    if timer.expired:
        return MonitorState.EXPIRED
    return MonitorState.RUNNING


class MonitorLoop:
    """
    Counts down the configured minutes and terminates the target at expiry.

    Runs in the calling thread, sleeping one cadence between cycles. Each
    cycle samples wall time and the watchdog's own CPU time; if the
    watchdog uses more CPU than allowed it exits without touching the target.
    """

    def __init__(
        self,
        config: WatchdogConfig,
        directory: ProcessDirectory | None = None,
        sampler: SelfCpuSampler | None = None,
        core_count: int | None = None,
        clock: Callable[[], int] = time.monotonic_ns,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the MonitorLoop.

        Args:
            config: Validated run configuration.
            directory: Used to find and terminate the target.
            sampler: Source of the watchdog's CPU times.
            core_count: Logical cores. Defaults to psutil.cpu_count().
            clock: Monotonic wall clock in nanoseconds.
            sleep: Blocking sleep taking seconds.
        """
        self._config = config
        self._directory = directory if directory is not None else ProcessDirectory()
        self._sampler = sampler if sampler is not None else SelfCpuSampler()
        self._core_count = core_count or psutil.cpu_count() or 1
        self._clock = clock
        self._sleep = sleep
        self._timer = TimerState.start(config.timer_minutes)
        self._last_time: int | None = None
        self._last_snapshot: CpuTimeSnapshot | None = None

    @property
    def timer(self) -> TimerState:
        """The countdown of this run."""
        return self._timer

    @property
    def core_count(self) -> int:
        """Logical cores used to normalize utilization."""
        return self._core_count

    def prime(self) -> None:
        """Record the starting wall time and CPU times."""
        self._last_time = self._clock()
        self._last_snapshot = self._sampler.sample()

    def step(self) -> CycleReport:
        """
        Run one cycle without sleeping.

        Raises:
            SamplerError: If the CPU times can't be read.
            ValueError: If no wall time passed since the previous cycle.
        """
        if self._last_time is None or self._last_snapshot is None:
            self.prime()

        now = self._clock()
        snapshot = self._sampler.sample()

        wall_elapsed_nanos = now - self._last_time
        self._timer.advance(wall_elapsed_nanos // NANOS_PER_MS)
        reading = estimate(self._last_snapshot, snapshot, wall_elapsed_nanos, self._core_count)

        self._last_time = now
        self._last_snapshot = snapshot

        if self._config.verbose:
            logger.info(
                "Time left: %.2f / %.2f minutes. CPU util: %.2f%%",
                self._timer.remaining_minutes,
                float(self._timer.total_minutes),
                reading.percentage,
            )

        state = decide(reading, self._timer, self._config.max_cpu_percent)
        return CycleReport(state=state, remaining_minutes=self._timer.remaining_minutes, reading=reading)

    def run(self) -> Outcome:
        """Run cycles until the watchdog aborts or the timer expires."""
        cadence_seconds = self._config.cadence_minutes * MS_PER_MINUTE / 1000
        try:
            self.prime()
            while True:
                self._sleep(cadence_seconds)
                report = self.step()
                if report.state is MonitorState.ABORTED:
                    logger.warning(
                        "CPU utilization is %.2f%%, max allowed is %.2f%%. Leaving %s running",
                        report.reading.percentage,
                        self._config.max_cpu_percent,
                        self._config.target_name,
                    )
                    return Outcome.ABORTED
                if report.state is MonitorState.EXPIRED:
                    return self._fire()
        except SamplerError as exc:
            logger.error("Cannot read own CPU times, stopping: %s", exc)
            return Outcome.SAMPLER_FAILED
        except ValueError as exc:
            logger.error("Cannot measure utilization, stopping: %s", exc)
            return Outcome.SAMPLER_FAILED

    def _fire(self) -> Outcome:
        """Terminate the target once. No retry."""
        name = self._config.target_name
        record = self._directory.find_by_name(name)
        if record is None:
            logger.warning("Target process %s is not running, it already exited", name)
            return Outcome.TARGET_GONE

        if self._directory.terminate(record.pid):
            logger.info(
                "Process %s (pid %d) terminated after %d minutes",
                name,
                record.pid,
                self._config.timer_minutes,
            )
            return Outcome.TERMINATED

        logger.error("Could not terminate process %s (pid %d)", name, record.pid)
        return Outcome.TERMINATE_FAILED
