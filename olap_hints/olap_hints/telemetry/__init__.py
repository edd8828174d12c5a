"""Logging and profiling for the codec."""

from olap_hints.telemetry.profiling import ProfileCollector, ProfileResult, profile_operation
from olap_hints.telemetry.structured_logging import JSONFormatter, configure_logging

__all__ = [
    "JSONFormatter",
    "ProfileCollector",
    "ProfileResult",
    "configure_logging",
    "profile_operation",
]
