"""Shared utility library for check_iostat."""

from check_iostat.lib.process import CommandError, check_tool, run_command

__all__ = [
    "CommandError",
    "check_tool",
    "run_command",
]
