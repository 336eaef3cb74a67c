"""Codacy coverage API client.

Two calls make up the protocol:

- ``submit``: upload one language's coverage for the HEAD commit. With
  ``partial=True`` Codacy holds the upload until the final call.
- ``submit_end``: tell Codacy every partial upload for the commit has been
  sent, so the accumulated coverage can be finalized.

Project tokens authenticate with the ``project-token`` header against the
repository-implicit endpoints. API tokens authenticate with ``api-token``
and name the repository in the path.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from covrelay.codacy.models import CodacyReport, SubmissionResult
from covrelay.core.errors import CodacyUrlNotConfiguredError
from covrelay.core.logging import get_logger
from covrelay.credentials import ApiToken, Credential, ProjectToken
from covrelay.languages import Language
from covrelay.vcs import RepoMetadata

DEFAULT_TIMEOUT_SEC = 30.0


class CodacyClient:
    """Submits coverage for one language of one commit."""

    def __init__(
        self,
        credential: Credential,
        language: Language,
        url: str | None,
        repo: RepoMetadata,
        *,
        partial: bool = False,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        if not url:
            raise CodacyUrlNotConfiguredError.create()
        self._credential = credential
        self._language = language
        self._url = url.rstrip("/")
        self._repo = repo
        self._partial = partial
        self._http_client = http_client
        self._timeout = timeout
        self._log = logger or get_logger(__name__)

    @property
    def partial(self) -> bool:
        return self._partial

    def coverage_url(self) -> str:
        commit = self._repo.commit
        language = self._language.lang
        if isinstance(self._credential, ApiToken):
            return f"{self._repository_url(self._credential)}/commit/{commit}/coverage/{language}"
        return f"{self._url}/2.0/coverage/{commit}/{language}"

    def final_url(self) -> str:
        commit = self._repo.commit
        if isinstance(self._credential, ApiToken):
            return f"{self._repository_url(self._credential)}/commit/{commit}/coverageFinal"
        return f"{self._url}/2.0/commit/{commit}/coverageFinal"

    def submit(self, report: CodacyReport) -> SubmissionResult:
        """Upload *report* for this client's language.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response.
            ValueError: If the response body is not JSON.
        """
        self._log.debug(
            "codacy.submit",
            language=self._language.lang,
            partial=self._partial,
            files=len(report.file_reports),
        )
        return self._post(
            self.coverage_url(),
            params={"partial": "true" if self._partial else "false"},
            json=report.to_payload(),
        )

    def submit_end(self) -> SubmissionResult:
        """Finalize the partial uploads sent for this commit.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response.
            ValueError: If the response body is not JSON.
        """
        self._log.debug("codacy.submit_end", language=self._language.lang)
        return self._post(self.final_url())

    def _repository_url(self, cred: ApiToken) -> str:
        return f"{self._url}/2.0/{cred.provider}/{cred.username}/{cred.project_name}"

    def _headers(self) -> dict[str, str]:
        if isinstance(self._credential, ProjectToken):
            return {"project-token": self._credential.token}
        return {"api-token": self._credential.token}

    def _post(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> SubmissionResult:
        if self._http_client is not None:
            response = self._http_client.post(
                url, params=params, json=json, headers=self._headers(), timeout=self._timeout
            )
        else:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(url, params=params, json=json, headers=self._headers())
        response.raise_for_status()
        return SubmissionResult.from_response(response.json())
