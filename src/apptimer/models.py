"""Data models for apptimer."""

from dataclasses import dataclass

# psutil reports CPU times in seconds; the monitor works in 100 ns ticks.
TICKS_PER_SECOND = 10_000_000
NANOS_PER_TICK = 100


def seconds_to_ticks(seconds: float) -> int:
    """Convert a duration in seconds to whole 100 ns ticks."""
    return round(seconds * TICKS_PER_SECOND)


@dataclass(slots=True, frozen=True)
class CpuTimeSnapshot:
    """Cumulative CPU times of the watchdog process at one instant."""

    creation_time: int  # ticks since the epoch
    kernel_time: int  # ticks
    user_time: int  # ticks

    @property
    def busy_time(self) -> int:
        """Kernel plus user ticks."""
        return self.kernel_time + self.user_time


@dataclass(slots=True, frozen=True)
class UtilizationReading:
    """CPU utilization of the watchdog over one cycle."""

    percentage: float  # normalized over all logical cores


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """A process found while enumerating the system."""

    pid: int
    name: str
