"""Turn one discovered report into one language's Codacy report.

The transformer never raises for data problems. It returns a
``TransformResult`` and leaves the fatal-or-continue decision to the
caller's failure policy:

- OK: every entry for the language was resolved.
- DEGRADED: the report was unreadable (empty result) or some entries
  were skipped because no source root contains them.
- FATAL: the same conditions, when the matching ``fail_on_*`` switch is set.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from covrelay.codacy.models import CodacyFileReport, CodacyReport
from covrelay.core.errors import ReportError
from covrelay.coverage.models import CoverageParseError, CoverageReport
from covrelay.coverage.parsers import parse_artifact
from covrelay.discovery import ReportFile
from covrelay.languages import Language

ParseFn = Callable[[Path], CoverageReport]


class TransformStatus(Enum):
    OK = "ok"
    DEGRADED = "degraded"
    FATAL = "fatal"


@dataclass(frozen=True, slots=True)
class TransformResult:
    """Outcome of transforming one report for one language."""

    status: TransformStatus
    report: CodacyReport | None = None
    error: ReportError | None = None
    skipped: tuple[str, ...] = ()

    @classmethod
    def ok(cls, report: CodacyReport) -> TransformResult:
        return cls(status=TransformStatus.OK, report=report)

    @classmethod
    def degraded(
        cls,
        report: CodacyReport,
        *,
        error: ReportError | None = None,
        skipped: Sequence[str] = (),
    ) -> TransformResult:
        return cls(
            status=TransformStatus.DEGRADED, report=report, error=error, skipped=tuple(skipped)
        )

    @classmethod
    def fatal(cls, error: ReportError) -> TransformResult:
        return cls(status=TransformStatus.FATAL, error=error)

    @property
    def is_fatal(self) -> bool:
        return self.status is TransformStatus.FATAL


class CodacyTransformer:
    """Maps parsed coverage onto source files of one language."""

    def __init__(
        self,
        language: Language,
        root: Path,
        *,
        fail_on_unknown: bool,
        fail_on_xml_parse_error: bool,
        parse: ParseFn = parse_artifact,
    ) -> None:
        self._language = language
        self._root = root.resolve()
        self._fail_on_unknown = fail_on_unknown
        self._fail_on_xml_parse_error = fail_on_xml_parse_error
        self._parse = parse

    def transform(self, report_file: ReportFile, source_roots: Sequence[Path]) -> TransformResult:
        """Build the Codacy report for *report_file*.

        Args:
            report_file: Discovered coverage file.
            source_roots: Absolute compile source roots of the owning module.
        """
        try:
            parsed = self._parse(report_file.path)
        except CoverageParseError as e:
            error = ReportError.parse_error(str(report_file.path), str(e))
            if self._fail_on_xml_parse_error:
                return TransformResult.fatal(error)
            return TransformResult.degraded(CodacyReport.build(self._language, []), error=error)

        roots = [*self._declared_roots(parsed), *source_roots, self._root]
        file_reports: list[CodacyFileReport] = []
        skipped: list[str] = []

        for entry in parsed.files.values():
            if not self._language.owns(entry.path):
                continue
            filename = self._resolve(entry.path, roots)
            if filename is None:
                if self._fail_on_unknown:
                    return TransformResult.fatal(
                        ReportError.unknown_entry(str(report_file.path), entry.path)
                    )
                skipped.append(entry.path)
                continue
            file_reports.append(CodacyFileReport.from_lines(filename, entry.lines))

        report = CodacyReport.build(self._language, file_reports)
        if skipped:
            return TransformResult.degraded(report, skipped=skipped)
        return TransformResult.ok(report)

    def _declared_roots(self, parsed: CoverageReport) -> list[Path]:
        roots = []
        for source in parsed.source_roots:
            path = Path(source)
            roots.append(path if path.is_absolute() else self._root / path)
        return roots

    def _resolve(self, entry: str, roots: Sequence[Path]) -> str | None:
        """Repository-relative path of the source file *entry* names."""
        path = Path(entry)
        candidates = [path] if path.is_absolute() else [root / path for root in roots]
        for candidate in candidates:
            if not candidate.is_file():
                continue
            try:
                return candidate.resolve().relative_to(self._root).as_posix()
            except ValueError:
                # Outside the repository; Codacy cannot attribute it
                continue
        return None
