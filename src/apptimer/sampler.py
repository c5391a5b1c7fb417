"""CPU time sampling of the watchdog's own process."""

import psutil

from apptimer.errors import SamplerError
from apptimer.models import CpuTimeSnapshot, seconds_to_ticks


class SelfCpuSampler:
    """
    Reads the cumulative kernel and user CPU time of the current process.

    Values are cumulative since process start; only deltas between two
    samples are meaningful for utilization.
    """

    def __init__(self, process: psutil.Process | None = None) -> None:
        """
        Initialize the sampler.

        Args:
            process: Process to sample. Defaults to the current process.
        """
        self._process = process if process is not None else psutil.Process()

    def sample(self) -> CpuTimeSnapshot:
        """Take a snapshot of the process CPU times."""
        try:
            with self._process.oneshot():
                times = self._process.cpu_times()
                created = self._process.create_time()
        except psutil.Error as exc:
            raise SamplerError(f"cannot read CPU times of pid {self._process.pid}: {exc}") from exc

        return CpuTimeSnapshot(
            creation_time=seconds_to_ticks(created),
            kernel_time=seconds_to_ticks(times.system),
            user_time=seconds_to_ticks(times.user),
        )
