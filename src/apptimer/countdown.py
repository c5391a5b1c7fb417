"""Countdown bookkeeping for the watchdog timer."""

from dataclasses import dataclass

MS_PER_MINUTE = 60_000


def tick(remaining_minutes: float, elapsed_wall_ms: int) -> float:
    """
    Subtract elapsed wall time from the remaining minutes.

    Args:
        remaining_minutes: Minutes left before expiry.
        elapsed_wall_ms: Wall time elapsed since the last tick, in milliseconds.

    Returns:
        The new remaining minutes, never below 0.0.
    """
    elapsed_minutes = max(0, elapsed_wall_ms) / MS_PER_MINUTE
    return max(0.0, remaining_minutes - elapsed_minutes)


def is_expired(remaining_minutes: float) -> bool:
    """Check whether the timer has run out."""
    return remaining_minutes <= 0.0


@dataclass(slots=True)
class TimerState:
    """Remaining time of a running countdown."""

    total_minutes: int
    remaining_minutes: float

    @classmethod
    def start(cls, total_minutes: int) -> "TimerState":
        """Create a full timer of ``total_minutes``."""
        if total_minutes < 1:
            raise ValueError(f"timer must be at least 1 minute, got {total_minutes}")
        return cls(total_minutes=total_minutes, remaining_minutes=float(total_minutes))

    @property
    def expired(self) -> bool:
        """Check whether the timer has run out."""
        return is_expired(self.remaining_minutes)

    def advance(self, elapsed_wall_ms: int) -> float:
        """Apply one cycle of elapsed wall time and return the remaining minutes."""
        self.remaining_minutes = tick(self.remaining_minutes, elapsed_wall_ms)
        return self.remaining_minutes
