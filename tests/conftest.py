"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides builders for multi-module build layouts with coverage reports.
"""

import logging
import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of covrelay modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("covrelay"):
        del sys.modules[module_name]

from covrelay.discovery import Build, Project  # noqa: E402
from covrelay.vcs import RepoMetadata  # noqa: E402

COMMIT = "0123456789abcdef0123456789abcdef01234567"


def jacoco_xml(package: str, lines_by_file: dict[str, dict[int, int]]) -> str:
    """Render a JaCoCo report for one package. Hits map to covered instructions."""
    sourcefiles = []
    for name, lines in lines_by_file.items():
        rows = "".join(
            f'<line nr="{nr}" mi="{0 if ci else 1}" ci="{ci}" mb="0" cb="0"/>'
            for nr, ci in lines.items()
        )
        sourcefiles.append(f'<sourcefile name="{name}">{rows}</sourcefile>')
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<!DOCTYPE report PUBLIC "-//JACOCO//DTD Report 1.1//EN" "report.dtd">'
        '<report name="module">'
        '<sessioninfo id="s" start="1" dump="2"/>'
        f'<package name="{package}">{"".join(sourcefiles)}</package>'
        "</report>"
    )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep COVRELAY__* variables from the host out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("COVRELAY__"):
            monkeypatch.delenv(key)
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def repo_metadata() -> RepoMetadata:
    return RepoMetadata(commit=COMMIT, branch="main")


ModuleFactory = Callable[..., Project]


@pytest.fixture
def make_module(tmp_path: Path) -> ModuleFactory:
    """Create a Maven-style module with Java sources and a JaCoCo report.

    Returns the Project descriptor, with absolute paths.
    """

    def factory(
        name: str,
        sources: dict[str, dict[int, int]] | None = None,
        *,
        package: str = "com/example",
        report_name: str = "jacoco.xml",
        report_dir: str = "target/site/jacoco",
        report_content: str | None = None,
    ) -> Project:
        module_dir = tmp_path / name
        source_root = module_dir / "src" / "main" / "java"
        sources = sources if sources is not None else {f"{name.title()}.java": {1: 1, 2: 0}}
        for filename in sources:
            source_file = source_root / package / filename
            source_file.parent.mkdir(parents=True, exist_ok=True)
            source_file.write_text("class X {}\n")

        report = module_dir / report_dir / report_name
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(report_content or jacoco_xml(package, sources))
        (module_dir / "target" / "test-classes").mkdir(parents=True, exist_ok=True)

        return Project(
            compile_source_roots=(str(source_root),),
            build=Build(
                directory=str(module_dir / "target"),
                test_output_directory=str(module_dir / "target" / "test-classes"),
            ),
        )

    return factory


@pytest.fixture
def render_jacoco() -> Callable[[str, dict[str, dict[int, int]]], str]:
    return jacoco_xml
