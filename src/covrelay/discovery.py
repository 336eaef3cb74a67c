"""Report discovery across the modules of a build.

Each module (Project) names its compile source roots and its build
directories. Discovery walks every module's build directory and keeps the
files that the inclusion predicate accepts and the reject-list does not
match. Walk order is sorted so that identical inputs always produce the
same sequence of reports.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from covrelay.core.errors import ProjectDirectoryNotFoundError
from covrelay.coverage.parsers import detect_parser

# (test_output_directory, candidate) -> accepted
ReportPredicate = Callable[[str, Path], bool]

# Never traversed: VCS internals, dependency trees and tool caches. Build
# output names (target, build, out, dist, bin) stay walkable; reports live there.
PRUNED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # JavaScript/Node.js
        "node_modules",
        ".npm",
        ".yarn",
        ".pnpm-store",
        "bower_components",
        # Python
        "venv",
        ".venv",
        ".virtualenv",
        "virtualenv",
        "env",
        ".env",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".tox",
        ".nox",
        "eggs",
        ".eggs",
        "site-packages",
        ".hypothesis",
        # Ruby
        ".bundle",
        # JVM
        ".gradle",
        ".m2",
        ".bsp",
        ".metals",
        ".bloop",
        # Dart
        ".dart_tool",
        ".pub-cache",
        # IDE/editor
        ".idea",
        ".vscode",
        ".vs",
        # Misc
        ".cache",
        ".terraform",
        "vendor",
    )
)

# Test output directories, in the order they are looked for
CONVENTIONAL_TEST_OUTPUT_DIRS: tuple[str, ...] = (
    "target/test-classes",
    "build/classes/java/test",
    "build/classes/kotlin/test",
)

CONVENTIONAL_SOURCE_ROOTS: tuple[str, ...] = (
    "src/main/java",
    "src/main/kotlin",
    "src/main/scala",
    "src/main/groovy",
    "src",
)


@dataclass(frozen=True, slots=True)
class Build:
    """Build directories of one module."""

    directory: str
    test_output_directory: str


@dataclass(frozen=True, slots=True)
class Project:
    """One module of a multi-module build.

    ``compile_source_roots`` is None for modules without sources (e.g. an
    aggregator POM); such modules are skipped by discovery.
    """

    compile_source_roots: tuple[str, ...] | None
    build: Build | None = None


@dataclass(frozen=True, slots=True)
class ReportFile:
    """A discovered coverage file and the module it belongs to."""

    path: Path
    project: Project


def supported_predicate(ignore_test_build_directory: bool) -> ReportPredicate:
    """Default inclusion predicate.

    Accepts files that one of the coverage parsers recognizes. With
    ``ignore_test_build_directory`` set, files under the module's test
    output directory are refused.
    """

    def predicate(test_output_directory: str, path: Path) -> bool:
        if (
            ignore_test_build_directory
            and test_output_directory
            and _is_under(path, Path(test_output_directory))
        ):
            return False
        return detect_parser(path) is not None

    return predicate


def find_report_files(
    projects: Iterable[Project | None],
    predicate: ReportPredicate,
    base_dir: Path | None,
    reject_list: Sequence[str] = (),
) -> dict[Project, list[ReportFile]]:
    """Map each module with sources to the report files found for it.

    Args:
        projects: Module descriptors, in build order. ``None`` entries are ignored.
        predicate: Inclusion predicate, called with the module's test output
            directory and the candidate path.
        base_dir: Project base directory; relative module paths resolve against it.
        reject_list: Path fragments; a file whose absolute path contains any
            of them is dropped even if the predicate accepts it.

    Returns:
        Modules in input order, each with its reports in walk order. A file
        reachable from several modules is attributed to the first one.

    Raises:
        ProjectDirectoryNotFoundError: If ``base_dir`` is missing.
    """
    if base_dir is None or not base_dir.is_dir():
        raise ProjectDirectoryNotFoundError.for_path(str(base_dir) if base_dir else None)

    base_dir = base_dir.resolve()
    found: dict[Project, list[ReportFile]] = {}
    claimed: set[Path] = set()

    for project in projects:
        if project is None or project.compile_source_roots is None or project in found:
            continue

        reports: list[ReportFile] = []
        if project.build is not None:
            test_dir = (
                str(_resolve(base_dir, project.build.test_output_directory))
                if project.build.test_output_directory
                else ""
            )
            for path in _walk(_resolve(base_dir, project.build.directory)):
                if path in claimed or is_rejected(path, reject_list):
                    continue
                if predicate(test_dir, path):
                    claimed.add(path)
                    reports.append(ReportFile(path=path, project=project))
        found[project] = reports

    return found


def default_project(base_dir: Path) -> Project:
    """Single-module layout used when no modules are configured.

    Source roots are the conventional ones that exist, then the base
    directory itself; the whole base directory is searched for reports.
    The test output directory is the first conventional one that exists.
    """
    roots = [root for root in CONVENTIONAL_SOURCE_ROOTS if (base_dir / root).is_dir()]
    test_dir = next(
        (d for d in CONVENTIONAL_TEST_OUTPUT_DIRS if (base_dir / d).is_dir()),
        "",
    )
    return Project(
        compile_source_roots=(*roots, "."),
        build=Build(directory=".", test_output_directory=test_dir),
    )


def is_rejected(path: Path, reject_list: Sequence[str]) -> bool:
    """True when any reject-list fragment occurs in the absolute path."""
    absolute = str(path.absolute())
    return any(fragment and fragment in absolute for fragment in reject_list)


def resolve_source_roots(base_dir: Path, project: Project) -> list[Path]:
    """Absolute source roots of *project*."""
    return [_resolve(base_dir, root) for root in project.compile_source_roots or ()]


def _resolve(base_dir: Path, path: str) -> Path:
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return candidate.resolve()


def _walk(top: Path) -> Iterator[Path]:
    """Files under *top*, top-down, directories and files in sorted order."""
    if not top.is_dir():
        return
    for dirpath, dirnames, filenames in os.walk(top):
        dirnames[:] = sorted(d for d in dirnames if d not in PRUNED_DIRS)
        for name in sorted(filenames):
            yield Path(dirpath) / name


def _is_under(path: Path, directory: Path) -> bool:
    try:
        return path.resolve().is_relative_to(directory.resolve())
    except OSError:
        return False
