"""Coverage report parsing.

Supported formats:
    - jacoco: Java, Kotlin, Scala, Groovy (Maven/Gradle)
    - clover: PHP (PHPUnit), Kotlin (Kover), OpenClover
    - cobertura: coverage.py, coverlet (.NET), nyc
    - lcov: nyc, c8, pytest-cov, cargo-llvm-cov
"""

from covrelay.coverage.models import (
    CoverageParseError,
    CoverageReport,
    FileCoverage,
)
from covrelay.coverage.parsers import (
    PARSER_BY_FORMAT,
    PARSER_REGISTRY,
    CoverageParser,
    detect_parser,
    parse_artifact,
)

__all__ = [
    "CoverageParseError",
    "CoverageParser",
    "CoverageReport",
    "FileCoverage",
    "PARSER_BY_FORMAT",
    "PARSER_REGISTRY",
    "detect_parser",
    "parse_artifact",
]
