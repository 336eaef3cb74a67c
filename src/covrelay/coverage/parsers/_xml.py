"""Helpers shared by the XML-based parsers."""

import xml.etree.ElementTree as ET
from pathlib import Path

from covrelay.coverage.models import CoverageParseError

_SNIFF_BYTES = 2048


def read_header(path: Path) -> str:
    """First bytes of *path* as text, or "" if unreadable."""
    if not path.is_file():
        return ""
    try:
        with path.open("rb") as f:
            return f.read(_SNIFF_BYTES).decode("utf-8", errors="ignore")
    except OSError:
        return ""


def parse_xml(path: Path, label: str) -> ET.Element:
    """Parse *path* and return its root with namespaces stripped."""
    if not path.is_file():
        raise CoverageParseError(f"{label} file not found: {path}")
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise CoverageParseError(f"Invalid {label} XML: {e}") from e
    except OSError as e:
        raise CoverageParseError(f"Failed to read {label} file: {e}") from e

    for elem in root.iter():
        if isinstance(elem.tag, str) and "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]
    return root


def int_attr(elem: ET.Element, name: str, label: str) -> int:
    """Integer attribute, 0 when absent."""
    raw = elem.get(name)
    if raw is None or raw == "":
        return 0
    try:
        return int(raw)
    except ValueError as e:
        raise CoverageParseError(f"Invalid {label} attribute {name}={raw!r}") from e
