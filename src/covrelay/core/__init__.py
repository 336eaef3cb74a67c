"""Core module exports."""

from covrelay.core.errors import (
    CodacyUrlNotConfiguredError,
    ConfigError,
    CovRelayError,
    ErrorCode,
    ProjectDirectoryNotFoundError,
    ReportError,
    SubmissionError,
)
from covrelay.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "CodacyUrlNotConfiguredError",
    "ConfigError",
    "CovRelayError",
    "ErrorCode",
    "ProjectDirectoryNotFoundError",
    "ReportError",
    "SubmissionError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
