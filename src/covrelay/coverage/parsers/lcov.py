"""LCOV format parser.

LCOV is a plain text format; only these records matter here:
- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- end_of_record

Used by: nyc/istanbul, c8, pytest-cov, cargo-llvm-cov, gcov, dart test
"""

from pathlib import Path

from covrelay.coverage.models import CoverageParseError, CoverageReport, FileCoverage


class LcovParser:
    """Parser for LCOV format coverage files."""

    @property
    def format_id(self) -> str:
        return "lcov"

    def can_parse(self, path: Path) -> bool:
        """Check if file looks like LCOV format."""
        if not path.is_file():
            return False
        if path.suffix.lower() not in (".info", ".lcov"):
            return False
        # Content sniff: first meaningful record is TN: or SF:
        try:
            with path.open(encoding="utf-8-sig", errors="ignore") as f:
                for line in f:
                    stripped = line.strip()
                    if not stripped or stripped.startswith("#"):
                        continue
                    return stripped.startswith(("TN:", "SF:"))
        except OSError:
            pass
        return False

    def parse(self, path: Path) -> CoverageReport:
        """Parse LCOV file into CoverageReport."""
        try:
            content = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise CoverageParseError(f"Failed to read LCOV file: {e}") from e

        report = CoverageReport(source_format=self.format_id)
        current: FileCoverage | None = None

        for lineno, raw in enumerate(content.splitlines(), start=1):
            line = raw.strip()
            if line.startswith("SF:"):
                current = report.file(line[3:].replace("\\", "/"))
            elif line.startswith("DA:"):
                if current is None:
                    raise CoverageParseError(f"LCOV line {lineno}: DA record outside SF block")
                parts = line[3:].split(",")
                if len(parts) < 2:
                    raise CoverageParseError(f"LCOV line {lineno}: malformed DA record")
                try:
                    # Some tools write '-' for never-executed lines
                    hits = 0 if parts[1] == "-" else int(parts[1])
                    current.record(int(parts[0]), hits)
                except ValueError as e:
                    raise CoverageParseError(f"LCOV line {lineno}: {e}") from e
            elif line == "end_of_record":
                current = None

        return report
