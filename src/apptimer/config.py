"""Validated watchdog configuration."""

import logging
from dataclasses import dataclass

from apptimer.directory import ProcessDirectory
from apptimer.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_MAX_CPU_PERCENT = 1.0
# Above this the watchdog will practically never trip the overload check.
IMPRACTICAL_CPU_PERCENT = 25.0
CADENCE_MINUTES = 1


@dataclass(slots=True, frozen=True)
class WatchdogConfig:
    """Immutable settings for one watchdog run."""

    target_name: str
    timer_minutes: int
    max_cpu_percent: float = DEFAULT_MAX_CPU_PERCENT
    verbose: bool = True
    cadence_minutes: int = CADENCE_MINUTES

    @classmethod
    def validate(
        cls,
        target_name: str,
        timer_minutes: int,
        max_cpu_percent: float = DEFAULT_MAX_CPU_PERCENT,
        verbose: bool = True,
        directory: ProcessDirectory | None = None,
    ) -> "WatchdogConfig":
        """
        Build a configuration, checking every value.

        Args:
            target_name: Executable name of the process to terminate.
            timer_minutes: Whole minutes before the target is terminated.
            max_cpu_percent: Self utilization above which the watchdog gives up.
            verbose: Whether to log a progress line every cycle.
            directory: Used to check that the target is running.

        Raises:
            ConfigError: If any value is invalid or the target is not running.
        """
        if not target_name:
            raise ConfigError("target process name can't be empty")

        if isinstance(timer_minutes, bool) or not isinstance(timer_minutes, int):
            raise ConfigError(f"timer must be a whole number of minutes, got {timer_minutes!r}")
        if timer_minutes < 1:
            raise ConfigError(f"timer for {timer_minutes} minutes can't be set, timer must be >= 1")

        if not max_cpu_percent > 0.0:
            raise ConfigError(f"invalid CPU utilization value {max_cpu_percent:.2f}, must be > 0")
        if max_cpu_percent >= IMPRACTICAL_CPU_PERCENT:
            logger.warning(
                "%.2f%% is not practical, the watchdog will never reach that level. "
                "Try something between 0.1%% and 5%%",
                max_cpu_percent,
            )

        directory = directory if directory is not None else ProcessDirectory()
        if directory.find_by_name(target_name) is None:
            raise ConfigError(f"process {target_name} is not running")

        return cls(
            target_name=target_name,
            timer_minutes=timer_minutes,
            max_cpu_percent=float(max_cpu_percent),
            verbose=verbose,
        )
