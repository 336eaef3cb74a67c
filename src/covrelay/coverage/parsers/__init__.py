"""Coverage parser registry and auto-detection.

This module provides:
- PARSER_REGISTRY: All available parsers
- detect_parser: Auto-detect format from a file
- parse_artifact: Convenience function to parse with auto-detection
"""

from collections.abc import Sequence
from pathlib import Path

from covrelay.coverage.models import CoverageParseError, CoverageReport

from .base import CoverageParser
from .clover import CloverParser
from .cobertura import CoberturaParser
from .jacoco import JacocoParser
from .lcov import LcovParser

# Parser registry - order matters for detection priority
# More specific formats first, generic ones last
PARSER_REGISTRY: Sequence[CoverageParser] = (
    JacocoParser(),  # JVM <report> with JaCoCo DTD
    CloverParser(),  # PHP/Kotlin <coverage generated=...>
    CoberturaParser(),  # Generic <coverage line-rate=...>
    LcovParser(),  # LCOV text
)

# Format ID to parser mapping
PARSER_BY_FORMAT: dict[str, CoverageParser] = {p.format_id: p for p in PARSER_REGISTRY}

__all__ = [
    "PARSER_REGISTRY",
    "PARSER_BY_FORMAT",
    "detect_parser",
    "parse_artifact",
    "CoverageParser",
    "CloverParser",
    "CoberturaParser",
    "JacocoParser",
    "LcovParser",
]


def detect_parser(path: Path) -> CoverageParser | None:
    """Return the first parser in registry order that claims *path*."""
    for parser in PARSER_REGISTRY:
        if parser.can_parse(path):
            return parser
    return None


def parse_artifact(path: Path, *, format_id: str | None = None) -> CoverageReport:
    """Parse a coverage file into a unified CoverageReport.

    Args:
        path: Path to coverage file.
        format_id: Force specific format (skip auto-detection).

    Raises:
        CoverageParseError: If format unknown or parsing fails.
    """
    if format_id:
        parser = PARSER_BY_FORMAT.get(format_id)
        if not parser:
            valid = ", ".join(sorted(PARSER_BY_FORMAT.keys()))
            raise CoverageParseError(
                f"Unknown coverage format: {format_id!r}. Valid formats: {valid}"
            )
    else:
        parser = detect_parser(path)
        if not parser:
            raise CoverageParseError(
                f"Could not detect coverage format for: {path}. "
                "Supported formats: jacoco, clover, cobertura, lcov"
            )

    return parser.parse(path)
