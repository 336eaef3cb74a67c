"""covrelay report command - send coverage to Codacy."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from covrelay.cli.output import status
from covrelay.config import ProjectConfig, ReporterConfig, load_config
from covrelay.core.errors import CovRelayError
from covrelay.core.logging import configure_logging, set_run_id
from covrelay.credentials import resolve_credential
from covrelay.discovery import Build, Project, default_project
from covrelay.processor import CodacyProcessor, FailurePolicy, LanguageOutcome
from covrelay.vcs import GitError


def _flag(name: str, help_text: str) -> Any:
    return click.option(f"--{name}/--no-{name}", default=None, help=help_text)


@click.command()
@click.argument("path", default=".", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (default: PATH/.covrelay.yaml)",
)
@click.option("--token", default=None, help="Codacy project token")
@click.option("--url", default=None, help="Codacy API endpoint")
@click.option("--reject", multiple=True, help="Skip reports whose path contains this text")
@_flag("fail-on-report-not-found", "Abort when no report is found")
@_flag("fail-on-report-sending", "Abort when a Codacy call fails")
@_flag("fail-on-unknown", "Abort when a report names an unknown source file")
@_flag("fail-on-xml-parse-error", "Abort when a report cannot be parsed")
@_flag("ignore-test-build-directory", "Skip reports inside test output directories")
@click.option("--json", "as_json", is_flag=True, help="Output summary as JSON")
@click.pass_context
def report_command(
    ctx: click.Context,
    path: Path,
    config_path: Path | None,
    token: str | None,
    url: str | None,
    reject: tuple[str, ...],
    fail_on_report_not_found: bool | None,
    fail_on_report_sending: bool | None,
    fail_on_unknown: bool | None,
    fail_on_xml_parse_error: bool | None,
    ignore_test_build_directory: bool | None,
    as_json: bool,
) -> None:
    """Send coverage reports found under PATH to Codacy.

    PATH is the project base directory (default: current directory).
    """
    overrides: dict[str, Any] = {
        "token": token,
        "url": url,
        "fail_on_report_not_found": fail_on_report_not_found,
        "fail_on_report_sending": fail_on_report_sending,
        "fail_on_unknown": fail_on_unknown,
        "fail_on_xml_parse_error": fail_on_xml_parse_error,
        "ignore_test_build_directory": ignore_test_build_directory,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if reject:
        overrides["report_reject_list"] = list(reject)

    base_dir = path.absolute()
    try:
        config = load_config(base_dir, config_path=config_path, **overrides)
        if ctx.obj and ctx.obj.get("verbose"):
            config.logging.level = "DEBUG"
        configure_logging(config=config.logging)
        set_run_id()

        processor = CodacyProcessor(
            resolve_credential(config.token, config.api_token),
            config.url,
            build_projects(config, base_dir),
            base_dir,
            policy=FailurePolicy(
                fail_on_report_not_found=config.fail_on_report_not_found,
                fail_on_report_sending=config.fail_on_report_sending,
                fail_on_unknown=config.fail_on_unknown,
                fail_on_xml_parse_error=config.fail_on_xml_parse_error,
            ),
            ignore_test_build_directory=config.ignore_test_build_directory,
            report_reject_list=config.report_reject_list,
            timeout=config.http.timeout_sec,
        )
        outcomes = processor.process_reports()
    except (CovRelayError, GitError) as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps([_outcome_dict(o) for o in outcomes if o.reports]))
        return
    _print_summary(outcomes)


def build_projects(config: ReporterConfig, base_dir: Path) -> list[Project]:
    """Modules from config, or the single-module default."""
    if not config.projects:
        return [default_project(base_dir)]
    return [_to_project(p) for p in config.projects]


def _to_project(project: ProjectConfig) -> Project:
    build = None
    if project.build is not None:
        build = Build(
            directory=project.build.directory,
            test_output_directory=project.build.test_output_directory,
        )
    roots: tuple[str, ...] | None = None
    if project.compile_source_roots is not None:
        roots = tuple(project.compile_source_roots)
    return Project(compile_source_roots=roots, build=build)


def _outcome_dict(outcome: LanguageOutcome) -> dict[str, Any]:
    return {
        "language": outcome.language.lang,
        "reports": outcome.reports,
        "partial": outcome.partial,
        "sent": outcome.sent,
        "finalized": outcome.finalized,
        "failures": outcome.failures,
    }


def _print_summary(outcomes: list[LanguageOutcome]) -> None:
    active = [o for o in outcomes if o.reports]
    if not active:
        status("No coverage reports to send", style="warning")
        return
    for outcome in active:
        noun = "report" if outcome.reports == 1 else "reports"
        line = f"{outcome.language.lang}: {outcome.reports} {noun}"
        if outcome.partial:
            line += " (partial, finalized)" if outcome.finalized else " (partial, not finalized)"
        if outcome.failures:
            status(f"{line}, {len(outcome.failures)} failed", style="error")
            for failure in outcome.failures:
                status(failure, indent=4)
        else:
            status(line, style="success")
