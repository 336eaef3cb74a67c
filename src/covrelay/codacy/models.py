"""Codacy coverage payloads and submission results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from covrelay.languages import Language


def percentage(hit: int, found: int) -> int:
    """Whole-number coverage percentage, rounded down."""
    if found <= 0:
        return 0
    return hit * 100 // found


class CodacyFileReport(BaseModel):
    """Coverage of one source file, keyed by its repository-relative path."""

    filename: str
    total: int
    coverage: dict[int, int] = Field(default_factory=dict)  # line → hits

    @classmethod
    def from_lines(cls, filename: str, lines: dict[int, int]) -> CodacyFileReport:
        hit = sum(1 for hits in lines.values() if hits > 0)
        return cls(
            filename=filename,
            total=percentage(hit, len(lines)),
            coverage=dict(sorted(lines.items())),
        )


class CodacyReport(BaseModel):
    """One language's coverage from one report file.

    ``language`` tags the report for routing and is not part of the payload.
    """

    model_config = ConfigDict(populate_by_name=True)

    language: Language = Field(exclude=True)
    total: int = 0
    file_reports: list[CodacyFileReport] = Field(default_factory=list, alias="fileReports")

    @classmethod
    def build(cls, language: Language, file_reports: list[CodacyFileReport]) -> CodacyReport:
        found = sum(len(f.coverage) for f in file_reports)
        hit = sum(1 for f in file_reports for hits in f.coverage.values() if hits > 0)
        return cls(language=language, total=percentage(hit, found), file_reports=file_reports)

    @property
    def is_empty(self) -> bool:
        return not self.file_reports

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the coverage endpoint."""
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    """Outcome of one Codacy call."""

    success: bool
    message: str

    @classmethod
    def from_response(cls, data: Any) -> SubmissionResult:
        """Read Codacy's ``{"success": ...}`` / ``{"error": ...}`` body."""
        if isinstance(data, dict):
            if data.get("success"):
                return cls(success=True, message=str(data["success"]))
            if "error" in data:
                return cls(success=False, message=str(data["error"]))
        return cls(success=False, message=f"Unexpected response: {data!r}")
