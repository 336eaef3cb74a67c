"""Tests for error types and codes."""

import pytest

from covrelay.core.errors import (
    CodacyUrlNotConfiguredError,
    ConfigError,
    CovRelayError,
    ErrorCode,
    ProjectDirectoryNotFoundError,
    ReportError,
    SubmissionError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.PROJECT_DIRECTORY_NOT_FOUND, 2000),
            (ErrorCode.CODACY_URL_NOT_CONFIGURED, 2000),
            (ErrorCode.REPORT_NOT_FOUND, 3000),
            (ErrorCode.REPORT_UNKNOWN_ENTRY, 3000),
            (ErrorCode.SUBMISSION_FAILED, 4000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestCovRelayError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = CovRelayError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "details": {"key": "value"},
        }

    def test_str_includes_code_and_name(self) -> None:
        error = ReportError.not_found("/repo")
        assert str(error) == "[3001] REPORT_NOT_FOUND: No coverage reports found under /repo"

    def test_errors_are_raisable(self) -> None:
        with pytest.raises(CovRelayError):
            raise SubmissionError.failed("Java", "boom")


class TestConfigErrors:
    """Config error constructors."""

    def test_conflict_lists_fields(self) -> None:
        error = ConfigError.conflict("token", "api_token")

        assert error.code == ErrorCode.CONFIG_CONFLICT
        assert error.details == {"fields": ["token", "api_token"]}
        assert "token, api_token" in error.message

    def test_project_directory_is_config_error(self) -> None:
        """A missing base directory is a configuration problem."""
        error = ProjectDirectoryNotFoundError.for_path(None)

        assert isinstance(error, ConfigError)
        assert error.details == {"path": "None"}

    def test_url_not_configured_is_config_error(self) -> None:
        error = CodacyUrlNotConfiguredError.create()

        assert isinstance(error, ConfigError)
        assert error.code == ErrorCode.CODACY_URL_NOT_CONFIGURED


class TestReportErrors:
    """Report error constructors."""

    def test_unknown_entry_details(self) -> None:
        error = ReportError.unknown_entry("/r/jacoco.xml", "com/x/A.java")

        assert error.details == {"path": "/r/jacoco.xml", "entry": "com/x/A.java"}
        assert "'com/x/A.java'" in error.message

    def test_parse_error_details(self) -> None:
        error = ReportError.parse_error("/r/jacoco.xml", "bad")

        assert error.code == ErrorCode.REPORT_PARSE_ERROR
        assert error.details["reason"] == "bad"
