"""JaCoCo XML format parser.

JaCoCo is the standard JVM coverage tool, used via Maven and Gradle for
Java, Kotlin, Scala and Groovy. Per-line data lives in <sourcefile>
elements; reports generated without line info only carry <method> start
lines, which are used as a fallback.

Structure:
<report name="...">
  <package name="com/example">
    <class name="com/example/Foo" sourcefilename="Foo.java">
      <method name="bar" desc="()V" line="10">
        <counter type="LINE" missed="5" covered="10"/>
      </method>
    </class>
    <sourcefile name="Foo.java">
      <line nr="10" mi="0" ci="3" mb="0" cb="0"/>
      <line nr="11" mi="2" ci="0" mb="1" cb="1"/>
    </sourcefile>
  </package>
</report>
"""

import xml.etree.ElementTree as ET
from pathlib import Path

from covrelay.coverage.models import CoverageParseError, CoverageReport

from ._xml import int_attr, parse_xml, read_header


class JacocoParser:
    """Parser for JaCoCo XML format."""

    @property
    def format_id(self) -> str:
        return "jacoco"

    def can_parse(self, path: Path) -> bool:
        """Check if file looks like a JaCoCo report."""
        if path.suffix.lower() != ".xml":
            return False
        header = read_header(path)
        # JaCoCo has a <report> root; its DOCTYPE names the JaCoCo DTD
        return "<report" in header and ("JACOCO" in header or "<package" in header)

    def parse(self, path: Path) -> CoverageReport:
        """Parse JaCoCo XML into CoverageReport."""
        root = parse_xml(path, "JaCoCo")
        if root.tag != "report":
            raise CoverageParseError(f"Not a JaCoCo report: root element is <{root.tag}>")

        report = CoverageReport(source_format=self.format_id)
        for package in root.iter("package"):
            package_path = package.get("name", "").strip("/")
            sourcefiles = [sf for sf in package.findall("sourcefile") if sf.findall("line")]
            if sourcefiles:
                for sourcefile in sourcefiles:
                    self._add_sourcefile(report, package_path, sourcefile)
            else:
                self._add_methods(report, package_path, package)
        return report

    def _add_sourcefile(
        self, report: CoverageReport, package_path: str, sourcefile: ET.Element
    ) -> None:
        filename = sourcefile.get("name", "")
        if not filename:
            return
        file_cov = report.file(_join(package_path, filename))
        for line in sourcefile.findall("line"):
            nr = int_attr(line, "nr", "JaCoCo")
            # Hit count is not recorded; covered instructions stand in for it
            file_cov.record(nr, int_attr(line, "ci", "JaCoCo"))

    def _add_methods(self, report: CoverageReport, package_path: str, package: ET.Element) -> None:
        for cls in package.findall("class"):
            filename = cls.get("sourcefilename", "")
            if not filename:
                continue
            file_cov = report.file(_join(package_path, filename))
            for method in cls.findall("method"):
                counter = method.find("counter[@type='LINE']")
                covered = int_attr(counter, "covered", "JaCoCo") if counter is not None else 0
                file_cov.record(int_attr(method, "line", "JaCoCo"), covered)


def _join(package_path: str, filename: str) -> str:
    return f"{package_path}/{filename}" if package_path else filename
