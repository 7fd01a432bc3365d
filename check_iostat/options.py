"""
Command-line option handling.

Turns the probe's switches (plus defaults from the config layer) into a
validated Configuration. Nothing is measured until this succeeds.
"""

import argparse
from dataclasses import dataclass
from typing import Any

from check_iostat.core.config import DEFAULTS


USAGE = """\
Usage: check_iostat -d <devices> | -p <paths> [-w readKB,writeKB -c readKB,writeKB] [-i interval] [-h]

Check block device I/O throughput in KB/s against thresholds.

Options:
  -d <devices>          Comma-separated devices to check (e.g. sda,sdb)
  -p <paths>            Comma-separated mount paths whose devices are checked
  -w <readKB,writeKB>   Warning thresholds in KB/s (default: 1000,5000)
  -c <readKB,writeKB>   Critical thresholds in KB/s (default: 2000,10000)
  -i <interval>         Sampling interval in seconds (default: 8)
  -h                    Show this help

-w and -c must be given together.
"""


class UsageError(Exception):
    """Invalid, missing or conflicting command-line arguments."""

    pass


class HelpRequested(Exception):
    """-h was given."""

    pass


@dataclass(frozen=True)
class Thresholds:
    """Read and write rates in KB/s."""

    read_kb: int
    write_kb: int


@dataclass(frozen=True)
class Configuration:
    """Validated probe settings for one run."""

    devices: tuple[str, ...]
    paths: tuple[str, ...]
    interval: int
    warning: Thresholds
    critical: Thresholds


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting."""

    def error(self, message: str):
        raise UsageError(message)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = _Parser(prog="check_iostat", add_help=False, allow_abbrev=False)
    parser.add_argument("-d", dest="devices", metavar="devices")
    parser.add_argument("-p", dest="paths", metavar="paths")
    parser.add_argument("-w", dest="warning", metavar="readKB,writeKB")
    parser.add_argument("-c", dest="critical", metavar="readKB,writeKB")
    parser.add_argument("-i", dest="interval", metavar="interval")
    parser.add_argument("-h", dest="help", action="store_true")
    return parser


def split_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated option value, dropping empty tokens."""
    if not value:
        return ()
    return tuple(token.strip() for token in value.split(",") if token.strip())


def parse_positive_int(value: Any, name: str) -> int:
    """Parse an integer that must be greater than zero."""
    if isinstance(value, bool):
        raise UsageError(f"{name} must be an integer, got {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise UsageError(f"{name} must be an integer, got {value!r}") from None
    if number <= 0:
        raise UsageError(f"{name} must be greater than 0, got {number}")
    return number


def parse_thresholds(value: Any, name: str) -> Thresholds:
    """
    Parse a "readKB,writeKB" pair.

    Accepts the string form used on the command line or a two-item
    list as written in a YAML config file.
    """
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = list(value)
    else:
        raise UsageError(f"{name} must be readKB,writeKB, got {value!r}")

    if len(parts) != 2:
        raise UsageError(f"{name} must be readKB,writeKB, got {value!r}")

    read_kb = parse_positive_int(parts[0], f"{name} read threshold")
    write_kb = parse_positive_int(parts[1], f"{name} write threshold")
    return Thresholds(read_kb=read_kb, write_kb=write_kb)


def resolve_options(args: list[str], defaults: dict[str, Any] | None = None) -> Configuration:
    """
    Validate the command line.

    Args:
        args: Command-line arguments (without the program name)
        defaults: Effective settings from the config layer (default: DEFAULTS)

    Returns:
        Fully populated Configuration

    Raises:
        HelpRequested: -h was given
        UsageError: Arguments are missing, malformed or conflicting
    """
    if defaults is None:
        defaults = DEFAULTS

    opts, extra = create_parser().parse_known_args(args)
    if extra:
        raise UsageError(f"unrecognized arguments: {' '.join(extra)}")

    if opts.help:
        raise HelpRequested()

    # A value that looks like a switch means the real value was left out
    for flag, value in (
        ("-d", opts.devices),
        ("-p", opts.paths),
        ("-w", opts.warning),
        ("-c", opts.critical),
        ("-i", opts.interval),
    ):
        if value is not None and value.startswith("-"):
            raise UsageError(f"option {flag} requires an argument")

    devices = split_list(opts.devices)
    paths = split_list(opts.paths)
    if not devices and not paths:
        raise UsageError("at least one of -d or -p is required")

    if (opts.warning is None) != (opts.critical is None):
        raise UsageError("-w and -c must be given together")

    if opts.warning is not None:
        warning = parse_thresholds(opts.warning, "-w")
        critical = parse_thresholds(opts.critical, "-c")
    else:
        warning = parse_thresholds(defaults["warning"], "warning")
        critical = parse_thresholds(defaults["critical"], "critical")

    if opts.interval is not None:
        interval = parse_positive_int(opts.interval, "-i")
    else:
        interval = parse_positive_int(defaults["interval"], "interval")

    return Configuration(
        devices=devices,
        paths=paths,
        interval=interval,
        warning=warning,
        critical=critical,
    )
