"""Command-line entry point for check_iostat."""

import sys
from pathlib import Path

from check_iostat.core.config import load_config
from check_iostat.core.context import Context
from check_iostat.core.logging import ScriptLogger, get_log_path
from check_iostat.core.output import Output
from check_iostat.devices import UnmountedPathError, resolve_devices
from check_iostat.evaluate import Status, evaluate
from check_iostat.options import USAGE, HelpRequested, UsageError, resolve_options
from check_iostat.sampler import IostatSampler, SamplerError


SCRIPT_NAME = "check_iostat"


def create_logger(settings: dict) -> ScriptLogger:
    """Run logger; disabled unless log_dir is configured."""
    log_dir = settings.get("log_dir")
    if not log_dir:
        return ScriptLogger.disabled(SCRIPT_NAME)
    return ScriptLogger(SCRIPT_NAME, log_path=get_log_path(SCRIPT_NAME, Path(log_dir)))


def check(
    args: list[str],
    output: Output,
    context: Context,
    logger: ScriptLogger,
    settings: dict,
) -> int:
    """Run the probe pipeline and return the exit code."""
    try:
        config = resolve_options(args, settings)
    except HelpRequested:
        print(USAGE, end="")
        return Status.OK
    except UsageError as e:
        # Usage errors exit 0
        logger.warning("usage error", reason=str(e), args=args)
        print(f"{SCRIPT_NAME}: {e}", file=sys.stderr)
        print(USAGE, end="", file=sys.stderr)
        return Status.OK

    try:
        devices = resolve_devices(config, context, mount_table=settings["mount_table"])
    except UnmountedPathError as e:
        logger.error("path not mounted", path=e.path)
        output.set_summary(f"CRITICAL - {e}")
        output.render()
        return Status.CRITICAL

    names = [device.name for device in devices]
    logger.info("devices resolved", devices=names, interval=config.interval)

    sampler = IostatSampler(context, command=settings["iostat"])
    try:
        samples = sampler.sample(names, config.interval)
    except SamplerError as e:
        logger.error("sampling failed", reason=str(e))
        output.error(str(e))
        samples = []

    result = evaluate(samples, config.warning, config.critical)
    logger.info(
        "check complete",
        status=result.status.name,
        samples=[[s.device, s.read_kb, s.write_kb] for s in samples],
    )

    output.emit(result)
    output.render()
    return result.status


def run(
    args: list[str],
    output: Output,
    context: Context,
    logger: ScriptLogger | None = None,
) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context
        logger: Run logger (default: built from the log_dir setting)

    Returns:
        0 = OK (also help and usage errors), 1 = WARNING, 2 = CRITICAL
    """
    settings = load_config(context)
    if logger is None:
        logger = create_logger(settings)

    with logger:
        return int(check(args, output, context, logger, settings))


def main() -> int:
    """Console script entry point."""
    return run(sys.argv[1:], Output(), Context())


if __name__ == "__main__":
    sys.exit(main())
