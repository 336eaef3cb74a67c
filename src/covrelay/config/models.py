"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI options land here)
2. Environment variables (COVRELAY__KEY, COVRELAY__SECTION__KEY)
3. Repo YAML (<base_dir>/.covrelay.yaml, or --config FILE)
4. Built-in defaults (this file)

Environment Variable Format:
    COVRELAY__<KEY>=<VALUE>
    COVRELAY__<SECTION>__<KEY>=<VALUE>

Examples:
    COVRELAY__TOKEN=abc123
    COVRELAY__URL=https://api.codacy.com
    COVRELAY__FAIL_ON_REPORT_SENDING=false
    COVRELAY__API_TOKEN__PROVIDER=gh
    COVRELAY__LOGGING__LEVEL=DEBUG
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_CODACY_URL = "https://api.codacy.com"


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVRELAY__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(default="INFO", description="Root log level.")
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class HttpConfig(BaseModel):
    """HTTP client configuration.

    Env vars:
        COVRELAY__HTTP__TIMEOUT_SEC: Request timeout for Codacy calls
    """

    timeout_sec: float = Field(
        default=30.0,
        description="Timeout per Codacy request. A timeout counts as a sending failure.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class ApiTokenConfig(BaseModel):
    """Account-level Codacy API token, scoped to one repository."""

    token: str
    provider: str = Field(description="Git provider id, e.g. gh, gl, bb.")
    username: str = Field(description="Organization or user owning the repository.")
    project_name: str = Field(description="Repository name on Codacy.")


class BuildConfig(BaseModel):
    """Build directories of one module."""

    directory: str
    test_output_directory: str


class ProjectConfig(BaseModel):
    """One module of a multi-module build.

    Relative paths are resolved against the base directory.
    """

    compile_source_roots: list[str] | None = None
    build: BuildConfig | None = None


class ReporterConfig(BaseModel):
    """Root configuration for a report run."""

    token: str | None = Field(default=None, description="Codacy project token.")
    api_token: ApiTokenConfig | None = Field(
        default=None, description="Codacy API token. Mutually exclusive with token."
    )
    url: str | None = Field(default=DEFAULT_CODACY_URL, description="Codacy API endpoint.")
    fail_on_report_not_found: bool = True
    fail_on_report_sending: bool = True
    fail_on_unknown: bool = True
    fail_on_xml_parse_error: bool = True
    ignore_test_build_directory: bool = True
    report_reject_list: list[str] = Field(default_factory=list)
    projects: list[ProjectConfig] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None
