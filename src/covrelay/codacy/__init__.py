"""Codacy coverage submission."""

from covrelay.codacy.client import CodacyClient
from covrelay.codacy.models import CodacyFileReport, CodacyReport, SubmissionResult

__all__ = [
    "CodacyClient",
    "CodacyFileReport",
    "CodacyReport",
    "SubmissionResult",
]
