"""
Sample block device throughput with iostat.

iostat is run for two reports: the first holds averages since boot and is
discarded, the second holds the rates over the sampling interval. Only
rows after the last "Device" header are parsed. Columns 3 and 4 are
kB_read/s and kB_wrtn/s in every sysstat release that prints -k output.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from check_iostat.lib.process import CommandError, check_tool, run_command

if TYPE_CHECKING:
    from check_iostat.core.context import Context


IOSTAT = "iostat"
HEADER_TOKEN = "Device"


class SamplerError(Exception):
    """iostat is unavailable or produced no device statistics."""

    pass


@dataclass(frozen=True)
class Sample:
    """Throughput of one device over the sampling interval."""

    device: str
    read_kb: float
    write_kb: float


def _parse_rate(field: str) -> float:
    # Some locales print a decimal comma
    return float(field.replace(",", "."))


def parse_iostat(text: str) -> list[Sample]:
    """
    Parse iostat -d -k output.

    Args:
        text: Captured iostat stdout

    Returns:
        One Sample per device row of the final report, in output order

    Raises:
        SamplerError: No device header found
    """
    lines = text.splitlines()

    header = None
    for index, line in enumerate(lines):
        fields = line.split()
        if fields and fields[0].startswith(HEADER_TOKEN):
            header = index

    if header is None:
        raise SamplerError("no device statistics in iostat output")

    samples = []
    for line in lines[header + 1:]:
        fields = line.split()
        if len(fields) < 4:
            continue
        try:
            read_kb = _parse_rate(fields[2])
            write_kb = _parse_rate(fields[3])
        except ValueError:
            continue
        samples.append(Sample(device=fields[0], read_kb=read_kb, write_kb=write_kb))

    return samples


class IostatSampler:
    """Runs iostat through an execution context."""

    def __init__(self, context: "Context", command: str = IOSTAT):
        self.context = context
        self.command = command

    def build_command(self, devices: list[str], interval: int) -> list[str]:
        """iostat invocation for one interval report after the boot report."""
        return [self.command, "-d", "-k", str(interval), "2", *devices]

    def sample(self, devices: list[str], interval: int) -> list[Sample]:
        """
        Measure read/write KB/s for ``devices`` over ``interval`` seconds.

        Blocks for roughly ``interval`` seconds. No timeout is applied
        beyond that; the scheduler bounds the whole run.

        Raises:
            SamplerError: iostat is missing, fails, or prints no header
        """
        if not check_tool(self.command, self.context):
            raise SamplerError(f"{self.command} not found. Install the sysstat package.")

        try:
            text = run_command(self.build_command(devices, interval), self.context)
        except CommandError as e:
            raise SamplerError(str(e)) from e

        return parse_iostat(text)
