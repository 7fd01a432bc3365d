"""Block device I/O throughput probe for Nagios-compatible monitoring."""

__version__ = "1.0.0"
