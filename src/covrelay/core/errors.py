"""covrelay error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Report (discovery and parsing)
- 4xxx: Submission

Config errors always abort a run. Report and submission errors are raised
only when the matching ``fail_on_*`` switch asks for it.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_REQUIRED = 2003
    CONFIG_FILE_NOT_FOUND = 2004
    CONFIG_CONFLICT = 2005
    PROJECT_DIRECTORY_NOT_FOUND = 2101
    CODACY_URL_NOT_CONFIGURED = 2102

    # Report (3xxx)
    REPORT_NOT_FOUND = 3001
    REPORT_PARSE_ERROR = 3002
    REPORT_UNKNOWN_ENTRY = 3003

    # Submission (4xxx)
    SUBMISSION_FAILED = 4001


@dataclass(frozen=True, slots=True)
class CovRelayError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REPORT_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovRelayError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def missing_required(cls, field: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message=f"Missing required config field: {field}",
            details={"field": field},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def conflict(cls, *fields: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_CONFLICT,
            message=f"Only one of {', '.join(fields)} may be configured",
            details={"fields": list(fields)},
        )


class ProjectDirectoryNotFoundError(ConfigError):
    """The project base directory is missing."""

    @classmethod
    def for_path(cls, path: str | None) -> "ProjectDirectoryNotFoundError":
        return cls(
            code=ErrorCode.PROJECT_DIRECTORY_NOT_FOUND,
            message=f"Project base directory not found: {path}",
            details={"path": str(path)},
        )


class CodacyUrlNotConfiguredError(ConfigError):
    """No Codacy endpoint was configured."""

    @classmethod
    def create(cls) -> "CodacyUrlNotConfiguredError":
        return cls(
            code=ErrorCode.CODACY_URL_NOT_CONFIGURED,
            message="Codacy URL is not configured",
        )


class ReportError(CovRelayError):
    """Report discovery and parsing errors."""

    @classmethod
    def not_found(cls, base_dir: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_NOT_FOUND,
            message=f"No coverage reports found under {base_dir}",
            details={"base_dir": base_dir},
        )

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_PARSE_ERROR,
            message=f"Failed to parse coverage report {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def unknown_entry(cls, report: str, entry: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_UNKNOWN_ENTRY,
            message=f"Coverage entry {entry!r} in {report} matches no source file",
            details={"path": report, "entry": entry},
        )


class SubmissionError(CovRelayError):
    """Remote submission failed. The message is always redacted."""

    @classmethod
    def failed(cls, language: str, reason: str) -> "SubmissionError":
        return cls(
            code=ErrorCode.SUBMISSION_FAILED,
            message=f"Failed sending Codacy report for {language}: {reason}",
            details={"language": language, "reason": reason},
        )
