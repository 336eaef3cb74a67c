"""Discovery → transform → partition → submit, for every language.

For each language the discovered reports are transformed, empty results
are dropped, and what remains is sent to Codacy:

- one report: a single complete (non-partial) upload;
- several reports: one partial upload each, in discovery order, then one
  final call once every partial call has returned;
- none: no calls at all.

Each Codacy call is guarded on its own. Failures are redacted before they
are logged or raised, and ``fail_on_report_sending`` decides whether they
abort the run. Configuration errors always abort.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import structlog

from covrelay.codacy.client import DEFAULT_TIMEOUT_SEC, CodacyClient
from covrelay.codacy.models import CodacyReport, SubmissionResult
from covrelay.core.errors import ReportError, SubmissionError
from covrelay.core.logging import get_logger
from covrelay.coverage.models import CoverageParseError, CoverageReport
from covrelay.coverage.parsers import parse_artifact
from covrelay.credentials import Credential, redact
from covrelay.discovery import (
    Project,
    ReportFile,
    find_report_files,
    resolve_source_roots,
    supported_predicate,
)
from covrelay.languages import Language
from covrelay.transform import CodacyTransformer, ParseFn, TransformResult, TransformStatus
from covrelay.vcs import RepoMetadata, resolve_repository

RepoResolver = Callable[[Path], RepoMetadata]


@dataclass(frozen=True, slots=True)
class FailurePolicy:
    """Which recoverable conditions abort the run."""

    fail_on_report_not_found: bool = True
    fail_on_report_sending: bool = True
    fail_on_unknown: bool = True
    fail_on_xml_parse_error: bool = True


@dataclass(slots=True)
class LanguageOutcome:
    """What happened for one language during a run."""

    language: Language
    reports: int = 0
    sent: int = 0
    finalized: bool = False
    failures: list[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return self.reports > 1


def partition_reports(results: Iterable[TransformResult]) -> list[CodacyReport]:
    """Non-empty reports, in the order they were produced."""
    return [r.report for r in results if r.report is not None and not r.report.is_empty]


class CodacyProcessor:
    """Sends every module's coverage to Codacy, one language at a time."""

    def __init__(
        self,
        credential: Credential,
        url: str | None,
        projects: Sequence[Project | None],
        base_dir: Path | None,
        *,
        policy: FailurePolicy | None = None,
        ignore_test_build_directory: bool = True,
        report_reject_list: Sequence[str] = (),
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        repo_resolver: RepoResolver = resolve_repository,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._credential = credential
        self._url = url
        self._projects = tuple(projects)
        self._base_dir = base_dir
        self._policy = policy or FailurePolicy()
        self._ignore_test_build_directory = ignore_test_build_directory
        self._reject_list = tuple(report_reject_list)
        self._http_client = http_client
        self._timeout = timeout
        self._repo_resolver = repo_resolver
        self._log = logger or get_logger(__name__)

    def process_reports(self) -> list[LanguageOutcome]:
        """Run the pipeline once.

        Returns:
            One outcome per language, in enumeration order. Empty when no
            report was found and ``fail_on_report_not_found`` is off.

        Raises:
            ProjectDirectoryNotFoundError: Base directory missing.
            CodacyUrlNotConfiguredError: Reports to send but no URL.
            ReportError: Missing, malformed or unresolvable reports, when
                the policy says so.
            SubmissionError: A Codacy call failed and
                ``fail_on_report_sending`` is set.
        """
        self._log.info("processor.started", base_dir=str(self._base_dir))

        reports = find_report_files(
            self._projects,
            supported_predicate(self._ignore_test_build_directory),
            self._base_dir,
            self._reject_list,
        )
        assert self._base_dir is not None  # find_report_files rejects None
        base_dir = self._base_dir.resolve()

        total = sum(len(files) for files in reports.values())
        if total == 0:
            error = ReportError.not_found(str(base_dir))
            if self._policy.fail_on_report_not_found:
                raise error
            self._log.warning("processor.no_reports", base_dir=str(base_dir))
            return []
        self._log.info("processor.reports_discovered", count=total, modules=len(reports))

        repo = self._repo_resolver(base_dir)
        root = repo.workdir or base_dir
        parse = _cached_parser()
        warned: set[Path] = set()

        outcomes = [
            self._process_language(language, reports, base_dir, root, repo, parse, warned)
            for language in Language
        ]
        self._log.info("processor.complete", sent=sum(o.sent for o in outcomes))
        return outcomes

    def _process_language(
        self,
        language: Language,
        reports: dict[Project, list[ReportFile]],
        base_dir: Path,
        root: Path,
        repo: RepoMetadata,
        parse: ParseFn,
        warned: set[Path],
    ) -> LanguageOutcome:
        transformer = CodacyTransformer(
            language,
            root,
            fail_on_unknown=self._policy.fail_on_unknown,
            fail_on_xml_parse_error=self._policy.fail_on_xml_parse_error,
            parse=parse,
        )

        results: list[TransformResult] = []
        for project, files in reports.items():
            source_roots = resolve_source_roots(base_dir, project)
            for report_file in files:
                self._log.debug(
                    "processor.parsing", path=str(report_file.path), language=language.lang
                )
                result = transformer.transform(report_file, source_roots)
                if result.is_fatal:
                    assert result.error is not None
                    raise result.error
                if result.status is TransformStatus.DEGRADED:
                    self._warn_degraded(report_file, result, warned)
                results.append(result)

        models = partition_reports(results)
        outcome = LanguageOutcome(language=language, reports=len(models))
        self._log.info("processor.reports_found", language=language.lang, count=len(models))

        if len(models) > 1:
            for model in models:
                self._send(outcome, repo, partial=True, call=_submit(model))
            outcome.finalized = self._send(outcome, repo, partial=True, call=_submit_end)
        elif len(models) == 1:
            self._send(outcome, repo, partial=False, call=_submit(models[0]))
        return outcome

    def _send(
        self,
        outcome: LanguageOutcome,
        repo: RepoMetadata,
        *,
        partial: bool,
        call: Callable[[CodacyClient], SubmissionResult],
    ) -> bool:
        """Make one guarded Codacy call. Returns True if Codacy accepted it."""
        # Outside the guard: a missing URL is never a sending failure
        client = CodacyClient(
            self._credential,
            outcome.language,
            self._url,
            repo,
            partial=partial,
            http_client=self._http_client,
            timeout=self._timeout,
            logger=self._log,
        )
        secret = self._credential.secret
        try:
            result = call(client)
        except Exception as e:  # noqa: BLE001
            reason = redact(str(e) or type(e).__name__, secret)
            outcome.failures.append(reason)
            self._log.error(
                "processor.send_failed",
                language=outcome.language.lang,
                partial=partial,
                error=reason,
            )
            if self._policy.fail_on_report_sending:
                # Context dropped: the original exception may carry the secret
                raise SubmissionError.failed(outcome.language.lang, reason) from None
            return False

        message = redact(result.message, secret)
        if not result.success:
            outcome.failures.append(message)
            self._log.warning(
                "processor.send_rejected",
                language=outcome.language.lang,
                partial=partial,
                response=message,
            )
            return False

        outcome.sent += 1
        self._log.info(
            "processor.sent", language=outcome.language.lang, partial=partial, response=message
        )
        return True

    def _warn_degraded(
        self,
        report_file: ReportFile,
        result: TransformResult,
        warned: set[Path],
    ) -> None:
        if result.error is not None:
            # Parse failures are per file, not per language
            if report_file.path in warned:
                return
            warned.add(report_file.path)
            self._log.warning(
                "processor.report_unreadable", path=str(report_file.path), error=str(result.error)
            )
        if result.skipped:
            self._log.warning(
                "processor.entries_skipped",
                path=str(report_file.path),
                entries=list(result.skipped),
            )


def _submit(report: CodacyReport) -> Callable[[CodacyClient], SubmissionResult]:
    def call(client: CodacyClient) -> SubmissionResult:
        return client.submit(report)

    return call


def _submit_end(client: CodacyClient) -> SubmissionResult:
    return client.submit_end()


def _cached_parser() -> ParseFn:
    """Parse each file once per run; every language reuses the result."""
    cache: dict[Path, CoverageReport | CoverageParseError] = {}

    def parse(path: Path) -> CoverageReport:
        if path not in cache:
            try:
                cache[path] = parse_artifact(path)
            except CoverageParseError as e:
                cache[path] = e
        cached = cache[path]
        if isinstance(cached, CoverageParseError):
            raise cached
        return cached

    return parse
