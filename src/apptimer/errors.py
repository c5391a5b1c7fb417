"""Exceptions raised by apptimer."""


class AppTimerError(Exception):
    """Base class for apptimer errors."""


class ConfigError(AppTimerError):
    """Raised when the watchdog configuration is invalid."""


class SamplerError(AppTimerError):
    """Raised when the CPU times of the watchdog process cannot be read."""
