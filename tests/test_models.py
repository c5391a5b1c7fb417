"""Tests for apptimer data models."""

import pytest

from apptimer.models import (
    CpuTimeSnapshot,
    ProcessRecord,
    UtilizationReading,
    seconds_to_ticks,
)


def test_seconds_to_ticks():
    """Test seconds are converted to 100 ns ticks."""
    assert seconds_to_ticks(1.0) == 10_000_000
    assert seconds_to_ticks(0.3) == 3_000_000
    assert seconds_to_ticks(0.0) == 0


def test_cpu_time_snapshot_busy_time():
    """Test busy_time adds kernel and user ticks."""
    snapshot = CpuTimeSnapshot(creation_time=5, kernel_time=100, user_time=250)
    assert snapshot.busy_time == 350


def test_cpu_time_snapshot_is_frozen():
    """Test that CpuTimeSnapshot is immutable (frozen)."""
    snapshot = CpuTimeSnapshot(creation_time=0, kernel_time=0, user_time=0)

    with pytest.raises(AttributeError):
        snapshot.kernel_time = 10


def test_process_record_creation():
    """Test ProcessRecord dataclass creation."""
    record = ProcessRecord(pid=123, name="notepad.exe")

    assert record.pid == 123
    assert record.name == "notepad.exe"


def test_models_use_slots():
    """Test that models use __slots__ for memory efficiency."""
    for value in (
        CpuTimeSnapshot(creation_time=0, kernel_time=0, user_time=0),
        UtilizationReading(percentage=0.0),
        ProcessRecord(pid=1, name="init"),
    ):
        # Slots-based dataclasses don't have __dict__
        assert not hasattr(value, "__dict__")
