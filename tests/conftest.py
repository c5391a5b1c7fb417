"""Shared fixtures for apptimer tests."""

import pytest

from apptimer.directory import ProcessDirectory
from apptimer.models import ProcessRecord


class FakeDirectory(ProcessDirectory):
    """In-memory process directory that records lookups and terminations."""

    def __init__(self, records: list[ProcessRecord] | None = None, terminate_ok: bool = True) -> None:
        self.records = list(records or [])
        self.terminate_ok = terminate_ok
        self.lookups: list[str] = []
        self.terminated: list[int] = []

    def list_processes(self) -> list[ProcessRecord]:
        return list(self.records)

    def find_by_name(self, name: str) -> ProcessRecord | None:
        self.lookups.append(name)
        for record in self.records:
            if record.name == name:
                return record
        return None

    def terminate(self, pid: int) -> bool:
        self.terminated.append(pid)
        if self.terminate_ok:
            self.records = [record for record in self.records if record.pid != pid]
        return self.terminate_ok


@pytest.fixture
def directory() -> FakeDirectory:
    """A directory with a running ``game.exe`` target."""
    return FakeDirectory(
        [
            ProcessRecord(pid=1, name="init"),
            ProcessRecord(pid=4321, name="game.exe"),
            ProcessRecord(pid=77, name="bash"),
        ]
    )
