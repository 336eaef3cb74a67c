"""Format-neutral coverage data.

Every format parser converts its input to this representation. Only line
hits are kept; Codacy's coverage API has no use for branch or function
counters.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class CoverageParseError(Exception):
    """Error parsing coverage data."""

    pass


@dataclass(slots=True)
class FileCoverage:
    """Coverage data for a single file, as named inside the report.

    Lines are stored as a dict mapping line number → hit count.
    Line numbers are 1-based to match source file conventions.
    """

    path: str
    lines: dict[int, int] = field(default_factory=dict)  # line_number → hit_count

    @property
    def lines_found(self) -> int:
        """Total number of instrumented lines."""
        return len(self.lines)

    @property
    def lines_hit(self) -> int:
        """Number of lines with at least one hit."""
        return sum(1 for hits in self.lines.values() if hits > 0)

    def record(self, line: int, hits: int) -> None:
        """Add a line, keeping the highest hit count seen for it."""
        if line <= 0:
            return
        self.lines[line] = max(self.lines.get(line, 0), max(hits, 0))


@dataclass(slots=True)
class CoverageReport:
    """Parsed content of one coverage file.

    Files keep report order. ``source_roots`` holds directories the report
    itself declares (Cobertura ``<sources>``), tried before configured roots.
    """

    source_format: str
    files: dict[str, FileCoverage] = field(default_factory=dict)  # path → coverage
    source_roots: list[str] = field(default_factory=list)

    def file(self, path: str) -> FileCoverage:
        """Get or create the entry for *path*."""
        if path not in self.files:
            self.files[path] = FileCoverage(path=path)
        return self.files[path]
