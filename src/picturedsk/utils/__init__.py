"""
Utility functions for PictureDSK.

This module provides logging setup, error description and the atomic
output file context manager.
"""

from picturedsk.utils.logging import (
    setup_logging,
    log_system_info,
    log_operation,
    log_performance,
)

from picturedsk.utils.context_managers import AtomicOutputContext

from picturedsk.utils.error_handler import (
    describe_error,
    handle_os_error,
    is_fatal_error,
    get_error_severity,
)

__all__ = [
    # Logging
    "setup_logging",
    "log_system_info",
    "log_operation",
    "log_performance",

    # Context managers
    "AtomicOutputContext",

    # Error handling
    "describe_error",
    "handle_os_error",
    "is_fatal_error",
    "get_error_severity",
]
