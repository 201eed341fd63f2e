"""
Core Module

Cross-cutting infrastructure shared by the service.
"""

from .logging import (
    LogFormat,
    JSONFormatter,
    PrettyFormatter,
    SimpleFormatter,
    setup_logging,
)


__all__ = [
    "LogFormat",
    "JSONFormatter",
    "PrettyFormatter",
    "SimpleFormatter",
    "setup_logging",
]
