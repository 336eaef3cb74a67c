"""Tests for credential resolution and secret redaction."""

import pytest

from covrelay.config.models import ApiTokenConfig
from covrelay.core.errors import ConfigError, ErrorCode
from covrelay.credentials import (
    REDACTED,
    ApiToken,
    ProjectToken,
    redact,
    resolve_credential,
)


def _api_token(token: str = "api-secret") -> ApiTokenConfig:
    return ApiTokenConfig(token=token, provider="gh", username="acme", project_name="widgets")


class TestResolveCredential:
    """Tests for resolve_credential."""

    def test_project_token(self) -> None:
        assert resolve_credential("abc", None) == ProjectToken("abc")

    def test_api_token(self) -> None:
        credential = resolve_credential(None, _api_token())

        assert credential == ApiToken(
            token="api-secret", provider="gh", username="acme", project_name="widgets"
        )

    def test_both_configured_conflict(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            resolve_credential("abc", _api_token())
        assert exc_info.value.code == ErrorCode.CONFIG_CONFLICT

    def test_neither_configured(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            resolve_credential(None, None)
        assert exc_info.value.code == ErrorCode.CONFIG_MISSING_REQUIRED

    def test_empty_project_token_counts_as_missing(self) -> None:
        with pytest.raises(ConfigError):
            resolve_credential("", None)

    def test_empty_api_token(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            resolve_credential(None, _api_token(""))
        assert exc_info.value.details == {"field": "api_token.token"}


class TestCredentialRepr:
    """Secrets never show up in reprs."""

    def test_project_token_repr(self) -> None:
        assert "abc" not in repr(ProjectToken("abc"))

    def test_api_token_repr(self) -> None:
        token = ApiToken(token="s3cr3t", provider="gh", username="acme", project_name="w")

        text = repr(token)

        assert "s3cr3t" not in text
        assert "acme" in text

    def test_secret_property(self) -> None:
        assert ProjectToken("abc").secret == "abc"


class TestRedact:
    """Tests for redact."""

    def test_replaces_every_occurrence(self) -> None:
        text = "POST https://x/?t=tok failed: bad token tok"
        expected = f"POST https://x/?t={REDACTED} failed: bad {REDACTED}en {REDACTED}"
        assert redact(text, "tok") == expected

    def test_no_secret_leaves_text(self) -> None:
        assert redact("nothing here", None) == "nothing here"
        assert redact("nothing here", "") == "nothing here"

    def test_absent_secret_leaves_text(self) -> None:
        assert redact("nothing here", "tok") == "nothing here"

    @pytest.mark.parametrize(
        ("text", "secret"),
        [
            ("a*b", "*"),
            ("a***b", "***"),
            ("xx*", "x*"),
            ("****x*", "**x"),
        ],
    )
    def test_placeholder_never_reintroduces_secret(self, text: str, secret: str) -> None:
        """Secrets overlapping the placeholder are still gone afterwards."""
        assert secret not in redact(text, secret)

    def test_overlap_example(self) -> None:
        assert redact("xx*", "x*") == "****"
