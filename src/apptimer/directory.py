"""Process lookup and termination for apptimer."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

import psutil

from apptimer.models import ProcessRecord

logger = logging.getLogger(__name__)


class ProcessDirectory:
    """
    Enumerates running processes and terminates them by pid.

    Handles NoSuchProcess and AccessDenied errors gracefully: processes that
    vanish or cannot be inspected while enumerating are skipped.
    """

    @contextmanager
    def iter_processes(self) -> Iterator[Iterator[ProcessRecord]]:
        """
        Iterate over the running processes.

        The underlying psutil iterator is closed when the block exits, even
        if the caller stops early or an error is raised.
        """
        records = self._records()
        try:
            yield records
        finally:
            records.close()

    def _records(self) -> Generator[ProcessRecord, None, None]:
        procs = psutil.process_iter(attrs=["pid", "name"])
        try:
            for proc in procs:
                try:
                    info = proc.info
                    yield ProcessRecord(pid=info["pid"], name=info.get("name") or "")
                except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                    continue
        finally:
            procs.close()

    def list_processes(self) -> list[ProcessRecord]:
        """
        Collect a record for every running process.

        If enumeration fails partway the error is logged and the records
        collected so far are returned.
        """
        processes: list[ProcessRecord] = []
        try:
            with self.iter_processes() as records:
                for record in records:
                    processes.append(record)
        except (psutil.Error, OSError) as exc:
            logger.error("Process enumeration failed: %s", exc)
        return processes

    def find_by_name(self, name: str) -> ProcessRecord | None:
        """
        Find a process by its executable name.

        The match is exact and case-sensitive. When several processes share
        the name, the first one in enumeration order is returned.

        Returns:
            The matching record, or None if there is none or enumeration failed.
        """
        if not name:
            return None
        try:
            with self.iter_processes() as records:
                for record in records:
                    if record.name == name:
                        return record
        except (psutil.Error, OSError) as exc:
            logger.error("Process enumeration failed while looking for %s: %s", name, exc)
        return None

    def terminate(self, pid: int) -> bool:
        """
        Ask a process to terminate.

        Sends a single terminate request without waiting for the process to
        exit and without escalating to a kill.

        Returns:
            True if the request was delivered.
        """
        try:
            psutil.Process(pid).terminate()
        except psutil.NoSuchProcess:
            logger.warning("Process %d no longer exists", pid)
            return False
        except psutil.AccessDenied:
            logger.warning("Access denied terminating process %d", pid)
            return False
        return True
