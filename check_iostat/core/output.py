"""Status line output for the probe."""

import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from check_iostat.evaluate import EvaluationResult


def format_report(result: "EvaluationResult") -> str:
    """
    Format an evaluation as a single plugin status line.

    The layout is consumed by monitoring dashboards and must not change:
    ``STATUS -[dev: r,w] [dev: r,w] |rkbs_dev=r wkbs_dev=w ...``
    """
    details = " ".join(result.details)
    perfdata = " ".join(result.perfdata)
    return f"{result.status.name} -{details} |{perfdata}"


class Output:
    """Collects the outcome of a run and prints it exactly once."""

    def __init__(self):
        self.result: "EvaluationResult | None" = None
        self.errors: list[str] = []
        self._summary: str | None = None
        self._printed: bool = False

    def emit(self, result: "EvaluationResult") -> None:
        """Store the evaluation to report."""
        self.result = result

    def error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    def set_summary(self, summary: str) -> None:
        """Set the status line directly, bypassing the evaluation."""
        self._summary = summary

    @property
    def summary(self) -> str:
        """Get the status line."""
        if self._summary:
            return self._summary
        if self.result is None:
            from check_iostat.evaluate import EvaluationResult
            return format_report(EvaluationResult())
        return format_report(self.result)

    def render(self, stream: TextIO | None = None, err_stream: TextIO | None = None) -> None:
        """Print the status line to stdout and any errors to stderr."""
        if self._printed:
            return
        self._printed = True

        for message in self.errors:
            print(f"check_iostat: {message}", file=err_stream or sys.stderr)
        print(self.summary, file=stream or sys.stdout)
