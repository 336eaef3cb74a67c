"""Cobertura XML format parser.

Cobertura XML is written by many tools across languages:
- Python: coverage.py
- .NET: coverlet
- JavaScript: istanbul/nyc cobertura reporter
- Scala: scoverage (cobertura output)

Structure:
<coverage line-rate="0.85" branch-rate="0.50" ...>
  <sources>
    <source>/abs/path/to/src</source>
  </sources>
  <packages>
    <package name="...">
      <classes>
        <class name="..." filename="pkg/mod.py" line-rate="...">
          <lines>
            <line number="1" hits="1"/>
            <line number="2" hits="0" branch="true" condition-coverage="50% (1/2)"/>
          </lines>
        </class>
      </classes>
    </package>
  </packages>
</coverage>
"""

from pathlib import Path

from covrelay.coverage.models import CoverageParseError, CoverageReport

from ._xml import int_attr, parse_xml, read_header
from .clover import looks_like_clover


class CoberturaParser:
    """Parser for Cobertura XML format."""

    @property
    def format_id(self) -> str:
        return "cobertura"

    def can_parse(self, path: Path) -> bool:
        """Check if file looks like Cobertura XML."""
        if path.suffix.lower() != ".xml":
            return False
        header = read_header(path)
        # <coverage> root with line-rate distinguishes it from JaCoCo/Clover
        return "<coverage" in header and "line-rate=" in header and not looks_like_clover(header)

    def parse(self, path: Path) -> CoverageReport:
        """Parse Cobertura XML into CoverageReport."""
        root = parse_xml(path, "Cobertura")
        if root.tag != "coverage":
            raise CoverageParseError(f"Not a Cobertura report: root element is <{root.tag}>")

        report = CoverageReport(source_format=self.format_id)
        for source in root.findall("./sources/source"):
            if source.text and source.text.strip():
                report.source_roots.append(source.text.strip())

        for cls in root.iter("class"):
            filename = cls.get("filename", "").replace("\\", "/")
            if not filename:
                continue
            file_cov = report.file(filename)
            # Class-level lines only; method-level <lines> repeat them
            for line in cls.findall("./lines/line"):
                file_cov.record(
                    int_attr(line, "number", "Cobertura"),
                    int_attr(line, "hits", "Cobertura"),
                )
        return report
