"""Classify samples against warning and critical thresholds."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from check_iostat.options import Thresholds
    from check_iostat.sampler import Sample


class Status(IntEnum):
    """Plugin status; the value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2


@dataclass
class EvaluationResult:
    """Aggregate status plus report fragments in sample order."""

    status: Status = Status.OK
    details: list[str] = field(default_factory=list)
    perfdata: list[str] = field(default_factory=list)


def classify(sample: "Sample", warning: "Thresholds", critical: "Thresholds") -> Status:
    """Status of a single device; a threshold is breached when reached."""
    if sample.read_kb >= critical.read_kb or sample.write_kb >= critical.write_kb:
        return Status.CRITICAL
    if sample.read_kb >= warning.read_kb or sample.write_kb >= warning.write_kb:
        return Status.WARNING
    return Status.OK


def format_rate(value: float) -> str:
    """Render a KB/s rate the way iostat prints it."""
    return f"{value:.2f}"


def evaluate(
    samples: list["Sample"],
    warning: "Thresholds",
    critical: "Thresholds",
) -> EvaluationResult:
    """
    Evaluate every sample and aggregate the worst status.

    Args:
        samples: Samples in the order iostat reported them
        warning: Warning thresholds
        critical: Critical thresholds

    Returns:
        EvaluationResult; OK with no fragments when there are no samples
    """
    result = EvaluationResult()
    for sample in samples:
        result.status = max(result.status, classify(sample, warning, critical))

        read = format_rate(sample.read_kb)
        write = format_rate(sample.write_kb)
        result.details.append(f"[{sample.device}: {read},{write}]")
        result.perfdata.append(f"rkbs_{sample.device}={read}")
        result.perfdata.append(f"wkbs_{sample.device}={write}")

    return result
