"""Codacy credentials and secret redaction.

A credential is either a project token or an account API token scoped to
one repository. Exactly one of the two must be configured.
"""

from __future__ import annotations

from dataclasses import dataclass

from covrelay.config.models import ApiTokenConfig
from covrelay.core.errors import ConfigError

REDACTED = "*****"


@dataclass(frozen=True, slots=True)
class ProjectToken:
    """Repository-scoped Codacy project token."""

    token: str

    @property
    def secret(self) -> str:
        return self.token

    def __repr__(self) -> str:
        return f"ProjectToken(token={REDACTED!r})"


@dataclass(frozen=True, slots=True)
class ApiToken:
    """Account-level Codacy API token plus the repository it targets."""

    token: str
    provider: str
    username: str
    project_name: str

    @property
    def secret(self) -> str:
        return self.token

    def __repr__(self) -> str:
        return (
            f"ApiToken(token={REDACTED!r}, provider={self.provider!r}, "
            f"username={self.username!r}, project_name={self.project_name!r})"
        )


Credential = ProjectToken | ApiToken


def resolve_credential(token: str | None, api_token: ApiTokenConfig | None) -> Credential:
    """Build the credential from the two mutually exclusive config fields.

    Raises:
        ConfigError: If neither or both forms are configured.
    """
    if token and api_token is not None:
        raise ConfigError.conflict("token", "api_token")
    if token:
        return ProjectToken(token)
    if api_token is not None:
        if not api_token.token:
            raise ConfigError.missing_required("api_token.token")
        return ApiToken(
            token=api_token.token,
            provider=api_token.provider,
            username=api_token.username,
            project_name=api_token.project_name,
        )
    raise ConfigError.missing_required("token")


def redact(text: str, secret: str | None) -> str:
    """Replace every literal occurrence of *secret* in *text*.

    The placeholder can combine with neighbouring characters into a new
    occurrence (or contain the secret itself); those are stripped until
    none remain.
    """
    if not secret:
        return text
    redacted = text.replace(secret, REDACTED)
    while secret in redacted:
        redacted = redacted.replace(secret, "")
    return redacted
