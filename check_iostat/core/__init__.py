"""Core check_iostat functionality."""

from check_iostat.core.context import Context
from check_iostat.core.logging import ScriptLogger
from check_iostat.core.output import Output, format_report

__all__ = [
    "Context",
    "Output",
    "ScriptLogger",
    "format_report",
]
