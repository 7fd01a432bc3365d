"""Process utilities for the probe."""

import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from check_iostat.core.context import Context


class CommandError(Exception):
    """Error running a command."""

    pass


def run_command(
    cmd: list[str],
    context: "Context | None" = None,
    timeout: int | None = None,
) -> str:
    """
    Run a command and return its output.

    Args:
        cmd: Command and arguments
        context: Execution context (for testing)
        timeout: Timeout in seconds, None to wait for completion

    Returns:
        Command stdout

    Raises:
        CommandError: If the command cannot be started or exits non-zero
    """
    if context is None:
        from check_iostat.core.context import Context
        context = Context()

    try:
        result = context.run(cmd, check=False, timeout=timeout)
    except (OSError, subprocess.SubprocessError) as e:
        raise CommandError(f"Command failed: {' '.join(cmd)}: {e}") from e

    if result.returncode != 0:
        detail = (result.stderr or "").strip() or f"exit code {result.returncode}"
        raise CommandError(f"Command failed: {' '.join(cmd)}: {detail}")

    return result.stdout


def check_tool(
    name: str,
    context: "Context | None" = None,
) -> bool:
    """
    Check if a tool exists in PATH.

    Args:
        name: Tool name to check
        context: Execution context (for testing)

    Returns:
        True if tool exists
    """
    if context is None:
        from check_iostat.core.context import Context
        context = Context()

    return context.check_tool(name)
