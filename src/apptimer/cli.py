"""apptimer command line: terminate a process after a set number of minutes."""

import argparse
import logging
import sys

from apptimer.app import ProcessBrowserApp
from apptimer.config import DEFAULT_MAX_CPU_PERCENT, WatchdogConfig
from apptimer.directory import ProcessDirectory
from apptimer.errors import ConfigError
from apptimer.log_setup import setup_logging
from apptimer.monitor import MonitorLoop

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_TERMINATED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def parse_bool(value: str) -> bool:
    """Parse ``true`` or ``false``, ignoring case."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise argparse.ArgumentTypeError(f"invalid value {value!r}, expected true or false")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="apptimer",
        description="Close an application after a set number of minutes.",
    )
    parser.add_argument("-t", "--target", help="name of the target process's executable")
    parser.add_argument("-c", "--timer", type=int, help="timer in whole minutes")
    parser.add_argument(
        "-m",
        "--max-cpu",
        type=float,
        default=DEFAULT_MAX_CPU_PERCENT,
        help="max CPU utilization of apptimer itself before it gives up (default: %(default)s)",
    )
    parser.add_argument(
        "-l",
        "--log",
        type=parse_bool,
        default=True,
        metavar="{true,false}",
        help="print progress every minute (default: true)",
    )
    parser.add_argument("-p", "--list", action="store_true", help="dump the list of running processes")
    parser.add_argument("-b", "--browse", action="store_true", help="browse running processes interactively")
    return parser


def dump_processes(directory: ProcessDirectory) -> None:
    """Print the id and name of every running process."""
    for record in directory.list_processes():
        print(f"PID : {record.pid:6d}, Name : {record.name}")


def main(argv: list[str] | None = None, directory: ProcessDirectory | None = None) -> int:
    """Entry point for the apptimer command."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    if not argv:
        parser.print_help()
        return EXIT_OK

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_USAGE

    setup_logging()
    directory = directory if directory is not None else ProcessDirectory()

    if args.list:
        dump_processes(directory)
        return EXIT_OK
    if args.browse:
        ProcessBrowserApp(directory=directory).run()
        return EXIT_OK

    if args.target is None or args.timer is None:
        parser.print_usage()
        logger.error("Both --target and --timer are required. Use -h for help")
        return EXIT_USAGE

    try:
        config = WatchdogConfig.validate(
            target_name=args.target,
            timer_minutes=args.timer,
            max_cpu_percent=args.max_cpu,
            verbose=args.log,
            directory=directory,
        )
    except ConfigError as exc:
        logger.error("%s. Use -h for help", exc)
        return EXIT_USAGE

    loop = MonitorLoop(config, directory=directory)
    logger.info(
        "Starting: target %s, timer %d minutes, max CPU util %.2f%%, logs %s, cores %d",
        config.target_name,
        config.timer_minutes,
        config.max_cpu_percent,
        config.verbose,
        loop.core_count,
    )

    try:
        outcome = loop.run()
    except KeyboardInterrupt:
        logger.warning("Interrupted, %s was left running", config.target_name)
        return EXIT_INTERRUPTED

    logger.info("Closing (%s)", outcome.value)
    return EXIT_OK if outcome.succeeded else EXIT_NOT_TERMINATED


if __name__ == "__main__":
    sys.exit(main())
