"""Clover XML format parser.

Clover XML is written by OpenClover, PHPUnit and Kover (Kotlin).

Structure:
<coverage generated="..." clover="...">
  <project timestamp="...">
    <package name="...">
      <file name="Foo.php" path="/abs/path/Foo.php">
        <line num="10" type="method" name="bar" count="3"/>
        <line num="11" type="stmt" count="3"/>
        <line num="12" type="cond" truecount="1" falsecount="0"/>
      </file>
    </package>
  </project>
</coverage>
"""

from pathlib import Path

from covrelay.coverage.models import CoverageParseError, CoverageReport

from ._xml import int_attr, parse_xml, read_header


def looks_like_clover(header: str) -> bool:
    """Content sniff shared with the Cobertura parser."""
    return '<coverage generated="' in header or 'clover="' in header


class CloverParser:
    """Parser for Clover XML format."""

    @property
    def format_id(self) -> str:
        return "clover"

    def can_parse(self, path: Path) -> bool:
        """Check if file looks like Clover XML."""
        if path.suffix.lower() != ".xml":
            return False
        return looks_like_clover(read_header(path))

    def parse(self, path: Path) -> CoverageReport:
        """Parse Clover XML into CoverageReport."""
        root = parse_xml(path, "Clover")
        if root.tag != "coverage":
            raise CoverageParseError(f"Not a Clover report: root element is <{root.tag}>")

        report = CoverageReport(source_format=self.format_id)
        for file_elem in root.iter("file"):
            file_path = (file_elem.get("path") or file_elem.get("name", "")).replace("\\", "/")
            if not file_path:
                continue
            file_cov = report.file(file_path)
            for line in file_elem.findall("line"):
                num = int_attr(line, "num", "Clover")
                if line.get("type") == "cond" and line.get("count") is None:
                    # Conditionals may only carry per-branch counts
                    hits = int_attr(line, "truecount", "Clover") + int_attr(
                        line, "falsecount", "Clover"
                    )
                else:
                    hits = int_attr(line, "count", "Clover")
                file_cov.record(num, hits)
        return report
