"""Coverage parser protocol."""

from pathlib import Path
from typing import Protocol

from covrelay.coverage.models import CoverageReport


class CoverageParser(Protocol):
    """Protocol for coverage format parsers.

    Each parser handles one coverage format and converts it to the
    unified CoverageReport model.
    """

    @property
    def format_id(self) -> str:
        """Format identifier (e.g., 'jacoco', 'lcov')."""
        ...

    def can_parse(self, path: Path) -> bool:
        """Check if this parser can handle the given file.

        Uses file name and content sniffing. Must not raise.
        """
        ...

    def parse(self, path: Path) -> CoverageReport:
        """Parse a coverage file into the unified model.

        Paths inside the report are kept as written; resolving them against
        source roots is the caller's job.

        Raises:
            CoverageParseError: If the file is unreadable or malformed.
        """
        ...
