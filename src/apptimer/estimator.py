"""CPU utilization derived from two CPU time snapshots."""

from apptimer.models import NANOS_PER_TICK, CpuTimeSnapshot, UtilizationReading


def estimate(
    prev: CpuTimeSnapshot,
    curr: CpuTimeSnapshot,
    wall_elapsed_nanos: int,
    core_count: int,
) -> UtilizationReading:
    """
    Estimate the utilization of the whole machine caused by the watchdog.

    The CPU time spent between the two snapshots is divided by the wall time
    between them and spread across all logical cores, so a process saturating
    one core of an 8-core machine reads 12.5%.

    Args:
        prev: Snapshot taken at the start of the interval.
        curr: Snapshot taken at the end of the interval.
        wall_elapsed_nanos: Wall time of the interval in nanoseconds (> 0).
        core_count: Number of logical cores (>= 1).

    Returns:
        The utilization reading for the interval.
    """
    if wall_elapsed_nanos <= 0:
        raise ValueError(f"wall interval must be positive, got {wall_elapsed_nanos} ns")
    if core_count < 1:
        raise ValueError(f"core count must be at least 1, got {core_count}")

    cpu_elapsed_ticks = max(0, curr.busy_time - prev.busy_time)
    cpu_elapsed_nanos = cpu_elapsed_ticks * NANOS_PER_TICK

    raw_utilization = cpu_elapsed_nanos / wall_elapsed_nanos
    per_core_utilization = raw_utilization / core_count
    return UtilizationReading(percentage=per_core_utilization * 100.0)
